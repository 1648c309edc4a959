from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from datetime import date as date_cls
from typing import Any, Iterable

from .zones import DEFAULT_PITCH_TYPE, DEFAULT_TARGET, clamp_percent, is_valid_zone


@dataclass(frozen=True)
class PitchRecord:
    id: str
    location: int
    target: str
    pitch_type: str
    timestamp: int
    x: float | None = None
    y: float | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "location": self.location,
            "target": self.target,
            "type": self.pitch_type,
            "timestamp": self.timestamp,
        }
        if self.x is not None and self.y is not None:
            payload["x"] = self.x
            payload["y"] = self.y
        return payload


def _now_ms() -> int:
    return int(time.time() * 1000)


def new_pitch_id(timestamp_ms: int | None = None) -> str:
    stamp = timestamp_ms if timestamp_ms is not None else _now_ms()
    return f"pitch-{stamp}-{uuid.uuid4().hex[:9]}"


def _normalize(value: str | None) -> str:
    return (value or "").strip().lower()


def create_pitch(
    display_id: int,
    coords: dict[str, float] | None,
    context: dict[str, str],
) -> PitchRecord:
    if not is_valid_zone(display_id):
        raise ValueError(f"display_id must be a zone id 1-20, got {display_id!r}")
    pitch_type = context.get("type")
    target = context.get("target")
    if not pitch_type or not target:
        raise ValueError("context requires non-empty 'type' and 'target'")

    x: float | None = None
    y: float | None = None
    if coords is not None:
        x = clamp_percent(coords["x"])
        y = clamp_percent(coords["y"])

    stamp = _now_ms()
    return PitchRecord(
        id=new_pitch_id(stamp),
        location=display_id,
        target=str(target),
        pitch_type=str(pitch_type),
        timestamp=stamp,
        x=x,
        y=y,
    )


def matches_context(pitch: PitchRecord, pitch_type: str | None, target: str | None) -> bool:
    return _normalize(pitch.pitch_type) == _normalize(pitch_type) and _normalize(pitch.target) == _normalize(target)


def filter_by_context(
    pitches: Iterable[PitchRecord],
    pitch_type: str | None,
    target: str | None,
) -> list[PitchRecord]:
    """Pitches thrown under the given context, compared lowercased and trimmed."""
    return [p for p in pitches if matches_context(p, pitch_type, target)]


@dataclass
class PitchSession:
    """The one mutable aggregate: recorded pitches plus the active (type, target) context.

    Undo and reset-context compare with exact equality, the same way pitches
    are tagged at capture time. Only the read-side filter is case-insensitive.
    """

    date: str
    pitch_type: str = DEFAULT_PITCH_TYPE
    target: str = DEFAULT_TARGET
    pitches: list[PitchRecord] = field(default_factory=list)

    @property
    def context(self) -> dict[str, str]:
        return {"type": self.pitch_type, "target": self.target}

    def set_context(self, pitch_type: str | None = None, target: str | None = None) -> None:
        if pitch_type is not None:
            self.pitch_type = pitch_type
        if target is not None:
            self.target = target

    def record_pitch(
        self,
        display_id: int,
        coords: dict[str, float] | None = None,
        context: dict[str, str] | None = None,
    ) -> PitchRecord:
        pitch = create_pitch(display_id, coords, context or self.context)
        self.pitches.append(pitch)
        return pitch

    def filtered(self) -> list[PitchRecord]:
        return filter_by_context(self.pitches, self.pitch_type, self.target)

    def _in_current_context(self, pitch: PitchRecord) -> bool:
        return pitch.pitch_type == self.pitch_type and pitch.target == self.target

    def undo(self) -> PitchRecord | None:
        for index in range(len(self.pitches) - 1, -1, -1):
            if self._in_current_context(self.pitches[index]):
                return self.pitches.pop(index)
        return None

    def reset_context(self) -> int:
        kept = [p for p in self.pitches if not self._in_current_context(p)]
        removed = len(self.pitches) - len(kept)
        self.pitches = kept
        return removed

    def reset_session(self) -> None:
        self.pitches = []

    def delete_pitch(self, pitch_id: str) -> bool:
        kept = [p for p in self.pitches if p.id != pitch_id]
        removed = len(kept) != len(self.pitches)
        self.pitches = kept
        return removed

    def __len__(self) -> int:
        return len(self.pitches)


def new_session(session_date: str | None = None) -> PitchSession:
    return PitchSession(date=session_date or date_cls.today().isoformat())
