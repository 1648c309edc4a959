from __future__ import annotations

import csv
from io import StringIO
from typing import Any

from .pitch_session import PitchSession
from .zones import is_wild_zone, target_zones

PITCH_EXPORT_FIELDS = ["date", "pitch_id", "pitch_type", "target", "location", "hit", "wild", "x", "y", "timestamp"]


def pitch_rows(session: PitchSession) -> list[dict[str, Any]]:
    return [
        {
            "date": session.date,
            "pitch_id": p.id,
            "pitch_type": p.pitch_type,
            "target": p.target,
            "location": p.location,
            "hit": p.location in target_zones(p.target),
            "wild": is_wild_zone(p.location),
            "x": "" if p.x is None else f"{p.x:.1f}",
            "y": "" if p.y is None else f"{p.y:.1f}",
            "timestamp": p.timestamp,
        }
        for p in session.pitches
    ]


def session_csv_text(session: PitchSession) -> str:
    buffer = StringIO()
    writer = csv.DictWriter(buffer, fieldnames=PITCH_EXPORT_FIELDS)
    writer.writeheader()
    writer.writerows(pitch_rows(session))
    return buffer.getvalue()

