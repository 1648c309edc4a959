from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable

import pandas as pd

from .metrics import average, get_metric, lower_is_better, median, parse_entry_date

COMPARISON_COLUMNS = ["athlete_id", "name", "team", "value", "min", "max", "count", "date"]


@dataclass
class AthleteFilters:
    gender: str = "All"
    team: str = "All"
    min_age: int | None = None
    max_age: int | None = None
    min_height_in: int | None = None
    max_height_in: int | None = None
    min_weight: float | None = None
    max_weight: float | None = None
    start_date: str | None = None
    end_date: str | None = None


def _num(value: Any) -> float | None:
    try:
        if value is None or value == "":
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def athlete_age(athlete: dict[str, Any], today: date) -> int | None:
    dob = parse_entry_date((athlete.get("biometrics") or {}).get("dob"))
    return today.year - dob.year if dob else None


def athlete_height_in(athlete: dict[str, Any]) -> int | None:
    bio = athlete.get("biometrics") or {}
    feet = _num(bio.get("heightFt"))
    inches = _num(bio.get("heightIn"))
    if feet is None and inches is None:
        return None
    return int(feet or 0) * 12 + int(inches or 0)


def _outside(value: float | None, low: float | None, high: float | None) -> bool:
    if low is None and high is None:
        return False
    if value is None:
        return True
    if low is not None and value < low:
        return True
    return high is not None and value > high


def filter_athletes(
    athletes: Iterable[dict[str, Any]],
    filters: AthleteFilters,
    today: date | None = None,
) -> list[dict[str, Any]]:
    today = today or date.today()
    kept: list[dict[str, Any]] = []
    for athlete in athletes:
        bio = athlete.get("biometrics") or {}
        if filters.gender != "All" and bio.get("gender") != filters.gender:
            continue
        if filters.team != "All" and (athlete.get("team") or "Unassigned") != filters.team:
            continue
        if _outside(athlete_age(athlete, today), filters.min_age, filters.max_age):
            continue
        if _outside(_num(bio.get("weight")), filters.min_weight, filters.max_weight):
            continue
        if _outside(athlete_height_in(athlete), filters.min_height_in, filters.max_height_in):
            continue
        kept.append(athlete)
    return kept


def _entries_frame(entries: Iterable[dict[str, Any]], metric_id: str, filters: AthleteFilters) -> pd.DataFrame:
    rows = [
        {
            "athlete_id": str(e.get("userId")),
            "value": _num(e.get("value")),
            "date": parse_entry_date(e.get("date")),
            "timestamp": str(e.get("timestamp") or ""),
        }
        for e in entries
        if e.get("metricId") == metric_id
    ]
    frame = pd.DataFrame(rows, columns=["athlete_id", "value", "date", "timestamp"])
    frame = frame.dropna(subset=["value"])
    start = parse_entry_date(filters.start_date)
    end = parse_entry_date(filters.end_date)
    if start is not None:
        frame = frame.loc[frame["date"].map(lambda d: d is not None and d >= start).astype(bool)]
    if end is not None:
        frame = frame.loc[frame["date"].map(lambda d: d is not None and d <= end).astype(bool)]
    return frame


def compare_athletes(
    athletes: Iterable[dict[str, Any]],
    entries: Iterable[dict[str, Any]],
    metric_id: str,
    filters: AthleteFilters | None = None,
    today: date | None = None,
) -> pd.DataFrame:
    filters = filters or AthleteFilters()
    metric = get_metric(metric_id)
    roster = {str(a.get("id")): a for a in filter_athletes(athletes, filters, today=today)}

    frame = _entries_frame(entries, metric_id, filters)
    frame = frame.loc[frame["athlete_id"].isin(list(roster))]
    if frame.empty:
        return pd.DataFrame(columns=COMPARISON_COLUMNS)

    frame = frame.assign(_sort_date=frame["date"].map(lambda d: d or date.min))
    latest = frame.sort_values(["_sort_date", "timestamp"], ascending=False).drop_duplicates("athlete_id")
    grouped = frame.groupby("athlete_id")["value"].agg(["mean", "min", "max", "count"]).reset_index()
    merged = grouped.merge(latest[["athlete_id", "date"]], on="athlete_id", how="left")
    merged["value"] = merged["mean"].round(2)
    merged["name"] = merged["athlete_id"].map(lambda aid: str(roster[aid].get("name", "")))
    merged["team"] = merged["athlete_id"].map(lambda aid: str(roster[aid].get("team") or "Unassigned"))

    ascending = lower_is_better(metric)
    merged = merged.sort_values("value", ascending=ascending, kind="stable").reset_index(drop=True)
    return merged[COMPARISON_COLUMNS]


def comparison_summary(frame: pd.DataFrame) -> dict[str, float] | None:
    if frame.empty:
        return None
    values = [float(v) for v in frame["value"]]
    return {
        "mean": average(values),
        "median": median(values),
        "min": min(values),
        "max": max(values),
        "count": len(values),
    }
