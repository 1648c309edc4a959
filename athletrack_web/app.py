from __future__ import annotations

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import altair as alt
import pandas as pd
import streamlit as st
from dotenv import load_dotenv

from athletrack_core.aggregation import (
    compute_hit_stats,
    compute_summary_matrix,
    compute_zone_breakdown,
    compute_zone_counts,
    hit_rate_band,
    pitch_log_rows,
    summary_matrix_frame,
)
from athletrack_core.comparison import AthleteFilters, compare_athletes, comparison_summary
from athletrack_core.config import Config, configure_logging
from athletrack_core.csv_io import session_csv_text
from athletrack_core.distance import DistanceTracker, GeoFix, accuracy_feet, average_fixes
from athletrack_core.hydration import hydrate, session_label
from athletrack_core.metrics import METRIC_GROUPS, get_metric, lower_is_better, metric_history, trend_series
from athletrack_core.persistence import PersistenceError, delete_session, load_history, save_session
from athletrack_core.pitch_session import PitchRecord, PitchSession, new_session
from athletrack_core.roster import GENDERS, build_biometrics, save_bulk_metrics
from athletrack_core.stopwatch import STOPWATCH_METRICS, RaceStopwatch, format_split
from athletrack_core.voice_entry import parse_voice_command
from athletrack_core.zones import (
    PITCH_TYPES,
    TARGETS,
    WILD_HIGH,
    WILD_LEFT,
    WILD_LOW,
    WILD_RIGHT,
    grid_rows,
    target_zones,
    zone_label,
)
from athletrack_store import Database, MemoryStore
from athletrack_web.ui_constants import (
    APP_SUBTITLE,
    APP_TITLE,
    BAND_COLORS,
    DEMO_STORE_KEY,
    DISTANCE_KEY,
    GPS_SAMPLE_WINDOW,
    GPS_SAMPLES_KEY,
    HELP_TEXT,
    REVIEW_KEY,
    SESSION_KEY,
    STOPWATCH_KEY,
    WEB_SECTIONS,
)

load_dotenv()
CONFIG = Config.from_env()
configure_logging(CONFIG.log_level)
logger = logging.getLogger(__name__)


@st.cache_resource(show_spinner=False)
def _open_database(db_path: str) -> Database:
    logger.info("Opening AthleTrack database at %s", db_path)
    return Database(db_path, check_same_thread=False)


def _get_store() -> Database | MemoryStore:
    if CONFIG.demo_mode:
        if DEMO_STORE_KEY not in st.session_state:
            store = MemoryStore()
            store.add_athlete("Demo Athlete", team="Demo Team", athlete_id="demo-athlete")
            st.session_state[DEMO_STORE_KEY] = store
        return st.session_state[DEMO_STORE_KEY]
    return _open_database(CONFIG.db_path)


def _get_session() -> PitchSession:
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = new_session()
    return st.session_state[SESSION_KEY]


def _exit_review() -> None:
    st.session_state[REVIEW_KEY] = None
    st.session_state[SESSION_KEY] = new_session()


def _fmt_pct(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value:.1f}%"


def _render_athlete_picker(store: Database | MemoryStore) -> dict[str, Any] | None:
    athletes = store.get_athletes()
    if not athletes:
        st.info("No athletes yet. Add one below to start tracking.")
    with st.sidebar.expander("Add athlete", expanded=not athletes):
        with st.form("add_athlete_form", clear_on_submit=True):
            name = st.text_input("Name")
            team = st.text_input("Team")
            dob = st.date_input("Date of Birth", value=None, min_value=date(1950, 1, 1))
            gender = st.selectbox("Gender", options=("",) + GENDERS, format_func=lambda g: g or "Not set")
            c_ft, c_in = st.columns(2, gap="small")
            height_ft = c_ft.number_input("Height (ft)", min_value=0, max_value=8, step=1)
            height_in = c_in.number_input("Height (in)", min_value=0, max_value=11, step=1)
            weight = st.number_input("Weight (lb)", min_value=0.0, step=1.0)
            submitted = st.form_submit_button("Add")
        if submitted and name.strip():
            biometrics = build_biometrics(
                dob=dob, gender=gender, height_ft=height_ft, height_in=height_in, weight=weight
            )
            store.add_athlete(name.strip(), team=team.strip(), biometrics=biometrics)
            logger.info("Added athlete %s", name.strip())
            st.rerun()
    if not athletes:
        return None
    labels = {a["id"]: f"{a['name']} ({a.get('team') or 'Unassigned'})" for a in athletes}
    athlete_id = st.sidebar.selectbox("Athlete", options=list(labels), format_func=labels.get)
    athlete = store.get_athlete(athlete_id)
    with st.sidebar.expander("Delete athlete"):
        st.caption(HELP_TEXT["delete_athlete"])
        confirmed = st.checkbox(f"Yes, delete {labels[athlete_id]}", key=f"confirm_delete_{athlete_id}")
        if st.button("Delete Athlete", disabled=not confirmed):
            store.delete_athlete(athlete_id)
            logger.info("Deleted athlete %s", athlete_id)
            _exit_review()
            st.rerun()
    return athlete


def _record(session: PitchSession, display_id: int) -> None:
    session.record_pitch(display_id)


def _zone_button(session: PitchSession, display_id: int, counts: dict[int, int], zones: frozenset[int], disabled: bool) -> None:
    marker = "🎯 " if display_id in zones else ""
    count = counts.get(display_id, 0)
    label = f"{marker}{zone_label(display_id)}" + (f" · {count}" if count else "")
    st.button(
        label,
        key=f"zone_{display_id}",
        on_click=_record,
        args=(session, display_id),
        disabled=disabled,
        use_container_width=True,
    )


def _render_grid(session: PitchSession, counts: dict[int, int], disabled: bool) -> None:
    zones = target_zones(session.target)
    _zone_button(session, WILD_HIGH, counts, zones, disabled)
    left, middle, right = st.columns([1, 4, 1], gap="small")
    with left:
        _zone_button(session, WILD_LEFT, counts, zones, disabled)
    with middle:
        for row in grid_rows():
            cols = st.columns(4, gap="small")
            for col, display_id in zip(cols, row):
                with col:
                    _zone_button(session, display_id, counts, zones, disabled)
    with right:
        _zone_button(session, WILD_RIGHT, counts, zones, disabled)
    _zone_button(session, WILD_LOW, counts, zones, disabled)
    st.caption(HELP_TEXT["grid"])


def _render_session_controls(session: PitchSession, disabled: bool) -> None:
    c_undo, c_ctx, c_all = st.columns(3, gap="small")
    if c_undo.button("Undo Pitch", help=HELP_TEXT["undo"], disabled=disabled):
        session.undo()
        st.rerun()
    if c_ctx.button("Reset Context", help=HELP_TEXT["reset_context"], disabled=disabled):
        session.reset_context()
        st.rerun()
    if c_all.button("Reset Full Session", help=HELP_TEXT["reset_session"], disabled=disabled):
        session.reset_session()
        st.rerun()


def _render_pitch_log(session: PitchSession, filtered: list[PitchRecord], disabled: bool) -> None:
    rows = pitch_log_rows(filtered)
    if not rows:
        return
    with st.expander(f"Pitch Log ({len(rows)})"):
        st.caption(HELP_TEXT["pitch_log"])
        for row in reversed(rows):
            c_row, c_del = st.columns([4, 1], gap="small")
            c_row.write(f"#{row['#']}  {row['Zone']}  ({row['Result']})")
            if c_del.button("Delete", key=f"del_pitch_{row['id']}", disabled=disabled):
                session.delete_pitch(row["id"])
                st.rerun()


def _render_history(store: Database | MemoryStore, athlete: dict[str, Any]) -> None:
    history = load_history(store, athlete["id"])
    options = [""] + [str(r["id"]) for r in history]
    labels = {str(r["id"]): session_label(r, history) for r in history}
    labels[""] = "Select a session..."
    current = st.session_state.get(REVIEW_KEY) or ""
    chosen = st.selectbox(
        "Review Historical Session",
        options=options,
        index=options.index(current) if current in options else 0,
        format_func=labels.get,
    )
    if chosen and chosen != current:
        record = next(r for r in history if str(r["id"]) == chosen)
        st.session_state[SESSION_KEY] = hydrate(record)
        st.session_state[REVIEW_KEY] = chosen
        st.rerun()
    if current:
        st.info(HELP_TEXT["review"])
        c_exit, c_delete = st.columns(2, gap="small")
        if c_exit.button("Exit Review"):
            _exit_review()
            st.rerun()
        if c_delete.button("Delete Saved Session", type="secondary"):
            try:
                delete_session(store, current)
            except PersistenceError as exc:
                st.error(str(exc))
            else:
                st.toast("Session deleted.")
                _exit_review()
                st.rerun()


def _render_pitching(store: Database | MemoryStore, athlete: dict[str, Any]) -> None:
    st.subheader("Pitching Location Tracker")
    session = _get_session()
    reviewing = bool(st.session_state.get(REVIEW_KEY))

    c_date, c_save = st.columns([2, 1], gap="small")
    with c_date:
        picked = st.date_input("Session Date", value=date.fromisoformat(session.date) if session.date else date.today())
        session.date = picked.isoformat()
    with c_save:
        if st.button("Save Session", type="primary", disabled=reviewing):
            try:
                save_session(store, session, athlete["id"])
            except PersistenceError as exc:
                st.error(str(exc))
            else:
                st.success("Session Saved!")
    _render_history(store, athlete)

    c_type, c_target = st.columns(2, gap="small")
    with c_type:
        pitch_type = st.radio("Pitch Type", PITCH_TYPES, index=_index_of(PITCH_TYPES, session.pitch_type), horizontal=True)
    with c_target:
        target = st.radio("Intended Target", TARGETS, index=_index_of(TARGETS, session.target), horizontal=True)
    session.set_context(pitch_type=pitch_type, target=target)

    filtered = session.filtered()
    stats = compute_hit_stats(filtered, target_zones(session.target))
    k1, k2, k3, k4 = st.columns(4, gap="small")
    k1.metric("Pitches", stats.total)
    k2.metric("Hits", f"{stats.hits} ({_fmt_pct(stats.hit_pct if stats.has_data else None)})")
    k3.metric("Misses", f"{stats.misses} ({_fmt_pct(stats.miss_pct if stats.has_data else None)})")
    k4.metric("Wild Pitches", f"{stats.wild_pitches} ({_fmt_pct(stats.wild_pct if stats.has_data else None)})")

    counts = compute_zone_counts(filtered)
    c_grid, c_breakdown = st.columns([3, 2], gap="medium")
    with c_grid:
        _render_grid(session, counts, disabled=reviewing)
        _render_session_controls(session, disabled=reviewing)
    with c_breakdown:
        st.markdown("**Number of pitches per zone**")
        breakdown = compute_zone_breakdown(filtered)
        rows = [
            {"Zone": zone_label(zone), "Pitches": counts[zone], "Share": f"{breakdown[zone]}%"}
            for zone in sorted(counts)
        ]
        if rows:
            st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
        else:
            st.caption("No pitches for this pitch type and target yet.")
        _render_pitch_log(session, filtered, disabled=reviewing)

    st.markdown("**Session Summary (Hit %)**")
    st.caption(HELP_TEXT["matrix"])
    matrix = compute_summary_matrix(session.pitches)
    frame = summary_matrix_frame(matrix)
    bands = {(t, tgt): hit_rate_band(cell.hit_pct) for t, row in matrix.items() for tgt, cell in row.items()}
    styled = frame.style.apply(
        lambda col: [f"color: {BAND_COLORS[bands[(idx, col.name)]]}" for idx in col.index],
        axis=0,
    )
    st.dataframe(styled, use_container_width=True)

    if session.pitches:
        st.download_button(
            "Export Pitches (CSV)",
            data=session_csv_text(session),
            file_name=f"pitches_{session.date}.csv",
            mime="text/csv",
        )


def _index_of(options: tuple[str, ...], value: str) -> int:
    return options.index(value) if value in options else 0


def _render_metrics(store: Database | MemoryStore, athlete: dict[str, Any]) -> None:
    st.subheader("Metrics")
    entries = store.get_user_metrics(athlete["id"])
    group = st.selectbox("Metric Group", options=list(METRIC_GROUPS))
    for metric in METRIC_GROUPS[group]:
        with st.expander(f"{metric.label} ({metric.unit})"):
            with st.form(f"entry_{metric.id}", clear_on_submit=True):
                c_value, c_voice = st.columns(2, gap="small")
                value = c_value.number_input("Value", min_value=0.0, step=0.01, key=f"value_{metric.id}")
                spoken = c_voice.text_input("Voice transcript", help=HELP_TEXT["voice"], key=f"voice_{metric.id}")
                submitted = st.form_submit_button("Add")
            if submitted:
                if spoken:
                    command = parse_voice_command(spoken)
                    if command.value is None:
                        st.warning(f"No number heard in '{spoken}'.")
                        continue
                    if not command.submit:
                        st.info(f"Heard {command.value:g}. Say 'enter' to save it.")
                        continue
                    value = command.value
                if value > 0:
                    store.add_metric(athlete["id"], metric.id, float(value))
                    logger.info("Recorded %s=%s for %s", metric.id, value, athlete["id"])
                    st.rerun()

            history = metric_history(entries, metric.id)
            if not history:
                st.caption("No entries yet.")
                continue
            series = trend_series(entries, metric.id)
            if len(series) > 1:
                trend_df = pd.DataFrame(series, columns=["Date", "Value"])
                chart = (
                    alt.Chart(trend_df)
                    .mark_line(point=True, strokeWidth=3)
                    .encode(
                        x=alt.X("Date:T", title="Date"),
                        y=alt.Y("Value:Q", title=metric.unit, scale=alt.Scale(zero=False, reverse=lower_is_better(metric))),
                        tooltip=[alt.Tooltip("Date:T"), alt.Tooltip("Value:Q", format=".2f")],
                    )
                    .properties(height=220)
                )
                st.altair_chart(chart, use_container_width=True)
            for entry in history:
                c_row, c_del = st.columns([4, 1], gap="small")
                c_row.write(f"{entry['date']}: {entry['value']:.2f} {metric.unit}")
                if c_del.button("Delete", key=f"del_{entry['id']}"):
                    store.delete_metric(entry["id"])
                    st.rerun()


def _render_bulk_entry(store: Database | MemoryStore) -> None:
    st.subheader("Bulk Metric Entry")
    st.caption(HELP_TEXT["bulk_entry"])
    athletes = store.get_athletes()
    if not athletes:
        st.caption("Add athletes to enter metrics in bulk.")
        return
    c_date, c_group, c_metric = st.columns(3, gap="small")
    entry_date = c_date.date_input("Date", value=date.today(), key="bulk_date")
    group = c_group.selectbox("Metric Group", options=list(METRIC_GROUPS), key="bulk_group")
    metric_id = c_metric.selectbox(
        "Metric", options=[m.id for m in METRIC_GROUPS[group]], format_func=lambda mid: get_metric(mid).label
    )
    unit = get_metric(metric_id).unit
    with st.form("bulk_entry_form", clear_on_submit=True):
        values: dict[str, str] = {}
        for athlete in athletes:
            c_name, c_value = st.columns([2, 1], gap="small")
            c_name.write(f"{athlete['name']} ({athlete.get('team') or 'Unassigned'})")
            values[athlete["id"]] = c_value.text_input(
                unit, key=f"bulk_{athlete['id']}", label_visibility="collapsed", placeholder=unit
            )
        submitted = st.form_submit_button("Save All", type="primary")
    if submitted:
        try:
            saved = save_bulk_metrics(store, metric_id, entry_date.isoformat(), values)
        except ValueError as exc:
            st.warning(str(exc))
        else:
            st.success(f"Successfully saved {saved} entries!")


def _render_comparison(store: Database | MemoryStore) -> None:
    st.subheader("Athlete Comparison")
    options = [m.id for group in METRIC_GROUPS.values() for m in group]
    metric_id = st.selectbox("Metric to Analyze", options=options, format_func=lambda mid: get_metric(mid).label)
    athletes = store.get_athletes()
    teams = sorted({a.get("team") or "Unassigned" for a in athletes})
    c1, c2, c3 = st.columns(3, gap="small")
    gender = c1.selectbox("Gender", options=["All", "Male", "Female"])
    team = c2.selectbox("Team", options=["All"] + teams)
    dates = c3.date_input("Date range", value=())
    filters = AthleteFilters(gender=gender, team=team)
    with st.expander("Age, height and weight", expanded=False):
        b1, b2, b3 = st.columns(3, gap="small")
        age = b1.slider("Age", min_value=8, max_value=40, value=(8, 40))
        height = b2.slider("Height (in)", min_value=48, max_value=84, value=(48, 84))
        weight = b3.slider("Weight (lb)", min_value=60, max_value=300, value=(60, 300))
    # Full-range slider means no bound.
    if age != (8, 40):
        filters.min_age, filters.max_age = age
    if height != (48, 84):
        filters.min_height_in, filters.max_height_in = height
    if weight != (60, 300):
        filters.min_weight, filters.max_weight = weight
    if isinstance(dates, tuple) and len(dates) == 2:
        filters.start_date, filters.end_date = dates[0].isoformat(), dates[1].isoformat()

    frame = compare_athletes(athletes, store.get_metrics(), metric_id, filters)
    summary = comparison_summary(frame)
    if summary is None:
        st.caption("No data for the selected metric and filters.")
        return
    s1, s2, s3, s4, s5 = st.columns(5, gap="small")
    s1.metric("Mean", f"{summary['mean']:.2f}")
    s2.metric("Median", f"{summary['median']:.2f}")
    s3.metric("Min", f"{summary['min']:.2f}")
    s4.metric("Max", f"{summary['max']:.2f}")
    s5.metric("Sample Size", summary["count"])
    st.dataframe(frame.drop(columns=["athlete_id"]), use_container_width=True, hide_index=True)


def _render_tools(store: Database | MemoryStore, athlete: dict[str, Any] | None) -> None:
    st.subheader("Multi-Athlete Stopwatch")
    st.caption(HELP_TEXT["stopwatch"])
    watch: RaceStopwatch = st.session_state.setdefault(STOPWATCH_KEY, RaceStopwatch())
    c_press, c_reset = st.columns(2, gap="small")
    label = "Record Split" if watch.running else "Start Race"
    if c_press.button(label, disabled=watch.finished):
        watch.press()
        st.rerun()
    if c_reset.button("Reset Stopwatch"):
        watch.reset()
        st.rerun()
    st.metric("Elapsed", f"{format_split(watch.elapsed())}s")
    for index in range(watch.max_athletes):
        split = watch.splits[index] if index < len(watch.splits) else None
        st.write(f"Athlete {index + 1}: " + (f"{format_split(split)}s" if split is not None else "--"))
    if watch.splits and athlete is not None:
        with st.form("save_split_form"):
            c_split, c_metric = st.columns(2, gap="small")
            split_index = c_split.selectbox(
                "Split",
                options=list(range(len(watch.splits))),
                format_func=lambda i: f"Athlete {i + 1}: {format_split(watch.splits[i])}s",
            )
            metric_id = c_metric.selectbox(
                "Save as", options=list(STOPWATCH_METRICS), format_func=lambda mid: get_metric(mid).label
            )
            if st.form_submit_button(f"Save to {athlete['name']}"):
                value = round(watch.splits[split_index], 3)
                store.add_metric(athlete["id"], metric_id, value)
                logger.info("Saved stopwatch split %s=%s for %s", metric_id, value, athlete["id"])
                st.success("Split saved.")

    st.subheader("Distance Calculator")
    st.caption(HELP_TEXT["distance"])
    tracker: DistanceTracker = st.session_state.setdefault(DISTANCE_KEY, DistanceTracker())
    c_lat, c_lng, c_acc = st.columns(3, gap="small")
    lat = c_lat.number_input("Latitude", format="%.6f", key="gps_lat")
    lng = c_lng.number_input("Longitude", format="%.6f", key="gps_lng")
    acc = c_acc.number_input("Accuracy (m)", min_value=0.0, key="gps_acc")
    samples: list[GeoFix] = st.session_state.setdefault(GPS_SAMPLES_KEY, [])
    c_update, c_home, c_reset = st.columns(3, gap="small")
    if c_update.button("Add GPS Sample"):
        samples.append(GeoFix(lat=lat, lng=lng, accuracy_m=acc))
        tracker.update(average_fixes(samples[-GPS_SAMPLE_WINDOW:]))
    if c_home.button("Set Home Plate Here", disabled=tracker.current is None):
        tracker.set_home_plate()
        samples.clear()
    if c_reset.button("Reset Distance"):
        tracker.reset()
        samples.clear()
        st.rerun()
    if tracker.current is not None:
        st.caption(f"Current fix ±{accuracy_feet(tracker.current)}ft")
    st.metric("Distance", f"{tracker.distance_feet():.1f} ft")


def main() -> None:
    st.set_page_config(page_title=APP_TITLE, layout="wide")
    st.title(APP_TITLE)
    st.caption(APP_SUBTITLE)
    if CONFIG.demo_mode:
        st.warning(HELP_TEXT["demo_readonly"])

    store = _get_store()
    athlete = _render_athlete_picker(store)

    tabs = st.tabs(WEB_SECTIONS)
    with tabs[0]:
        if athlete is not None:
            _render_pitching(store, athlete)
    with tabs[1]:
        if athlete is not None:
            _render_metrics(store, athlete)
    with tabs[2]:
        _render_bulk_entry(store)
    with tabs[3]:
        _render_comparison(store)
    with tabs[4]:
        _render_tools(store, athlete)


if __name__ == "__main__":
    main()
