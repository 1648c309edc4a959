"""Turn stored pitching-session documents into in-memory sessions.

Three document shapes exist in storage:

* legacy: a ``counts`` map of location id -> count, one ``pitchType`` and
  ``intendedTarget`` for the whole session;
* intermediate: a ``pitches`` or ``pitchData`` array, type/target at either
  level;
* current: ``pitchData`` with per-pitch type/target, ``pitchType="Mixed"``,
  ``target="Variable"`` and a redundant ``locations`` summary.

Everything here is pure and never raises on malformed input; unusable
fields fall back to defaults and unusable pitch entries are skipped.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from .pitch_session import PitchRecord, PitchSession
from .zones import DEFAULT_PITCH_TYPE, DEFAULT_TARGET, is_valid_zone

MIXED_TYPE = "Mixed"
VARIABLE_TARGET = "Variable"


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        try:
            as_float = float(value)
        except (TypeError, ValueError):
            return None
        return int(as_float) if as_float.is_integer() else None


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def _parse_instant(raw: Any) -> datetime | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(float(raw) / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    try:
        parsed = datetime.fromisoformat(str(raw).strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def session_timestamp(record: Mapping[str, Any]) -> int:
    """Epoch milliseconds for a stored session, 0 when neither timestamp nor date parse."""
    for key in ("timestamp", "date"):
        instant = _parse_instant(record.get(key))
        if instant is not None:
            return int(instant.timestamp() * 1000)
    return 0


def session_date(record: Mapping[str, Any]) -> str:
    for key in ("date", "timestamp"):
        instant = _parse_instant(record.get(key))
        if instant is not None:
            return instant.date().isoformat()
    return ""


def _raw_pitch_list(record: Mapping[str, Any]) -> list[Any]:
    for key in ("pitches", "pitchData"):
        value = record.get(key)
        if isinstance(value, list) and value:
            return value
    return []


def _hydrate_counts(record: Mapping[str, Any]) -> list[PitchRecord]:
    counts = record.get("counts")
    if not isinstance(counts, Mapping):
        return []
    pitch_type = _text(record.get("pitchType")) or DEFAULT_PITCH_TYPE
    target = _text(record.get("intendedTarget")) or DEFAULT_TARGET
    stamp = session_timestamp(record)

    pitches: list[PitchRecord] = []
    for raw_location, raw_count in counts.items():
        location = _as_int(raw_location)
        count = _as_int(raw_count)
        if location is None or not is_valid_zone(location) or not count or count < 0:
            continue
        for i in range(count):
            pitches.append(
                PitchRecord(
                    id=f"legacy-{location}-{i}",
                    location=location,
                    target=target,
                    pitch_type=pitch_type,
                    timestamp=stamp,
                )
            )
    return pitches


def _hydrate_pitch_entries(record: Mapping[str, Any]) -> list[PitchRecord]:
    record_type = _text(record.get("pitchType"))
    record_target = _text(record.get("intendedTarget"))
    fallback_stamp = session_timestamp(record)

    pitches: list[PitchRecord] = []
    for index, entry in enumerate(_raw_pitch_list(record)):
        if not isinstance(entry, Mapping):
            continue
        location = _as_int(entry.get("location"))
        if location is None or not is_valid_zone(location):
            continue
        x = _as_float(entry.get("x"))
        y = _as_float(entry.get("y"))
        if x is None or y is None:
            x = y = None
        stamp = _as_int(entry.get("timestamp"))
        if stamp is None:
            instant = _parse_instant(entry.get("timestamp"))
            stamp = int(instant.timestamp() * 1000) if instant else fallback_stamp
        pitches.append(
            PitchRecord(
                id=_text(entry.get("id")) or f"stored-{index}",
                location=location,
                target=_text(entry.get("target")) or record_target or DEFAULT_TARGET,
                pitch_type=_text(entry.get("type")) or record_type or DEFAULT_PITCH_TYPE,
                timestamp=stamp,
                x=x,
                y=y,
            )
        )
    return pitches


def initial_context(record: Mapping[str, Any]) -> tuple[str, str]:
    pitch_type = _text(record.get("pitchType"))
    target = _text(record.get("intendedTarget"))
    if pitch_type is None or pitch_type == MIXED_TYPE:
        pitch_type = DEFAULT_PITCH_TYPE
    if target is None or target == VARIABLE_TARGET:
        target = DEFAULT_TARGET
    return pitch_type, target


def hydrate(record: Mapping[str, Any] | None) -> PitchSession:
    if not isinstance(record, Mapping):
        record = {}

    if not _raw_pitch_list(record) and isinstance(record.get("counts"), Mapping):
        pitches = _hydrate_counts(record)
    else:
        pitches = _hydrate_pitch_entries(record)

    pitch_type, target = initial_context(record)
    return PitchSession(date=session_date(record), pitch_type=pitch_type, target=target, pitches=pitches)


def session_pitch_count(record: Mapping[str, Any]) -> int:
    raw = _raw_pitch_list(record)
    if raw:
        return len(raw)
    counts = record.get("counts")
    if isinstance(counts, Mapping):
        return sum(max(_as_int(v) or 0, 0) for v in counts.values())
    return 0


def sort_history(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(records, key=session_timestamp, reverse=True)


def session_label(record: Mapping[str, Any], history: list[dict[str, Any]]) -> str:
    day = session_date(record)
    same_day = [r for r in history if session_date(r) == day]
    suffix = ""
    if len(same_day) > 1:
        ordered = sorted(same_day, key=session_timestamp)
        position = next((i for i, r in enumerate(ordered) if r.get("id") == record.get("id")), 0)
        suffix = f" (Session {position + 1})"
    pitch_type = _text(record.get("pitchType")) or "Unknown"
    return f"{day or 'Undated'}{suffix} - {pitch_type} ({session_pitch_count(record)})"
