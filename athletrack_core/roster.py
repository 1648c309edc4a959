from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Protocol

from .metrics import get_metric

logger = logging.getLogger(__name__)

GENDERS = ("Male", "Female")


class MetricStore(Protocol):
    def add_metric(self, user_id: str, metric_id: str, value: float, entry_date: str | None = None) -> str:
        ...


def build_biometrics(
    dob: date | str | None = None,
    gender: str | None = None,
    height_ft: int | None = None,
    height_in: int | None = None,
    weight: float | None = None,
) -> dict[str, Any]:
    """Biometrics document for a new athlete; blank fields are left out."""
    bio: dict[str, Any] = {}
    if dob:
        bio["dob"] = dob.isoformat() if isinstance(dob, date) else str(dob)
    if gender:
        if gender not in GENDERS:
            raise ValueError(f"Unknown gender: {gender}")
        bio["gender"] = gender
    if height_ft:
        bio["heightFt"] = int(height_ft)
    if height_in:
        if not 0 <= int(height_in) < 12:
            raise ValueError("Height inches must be between 0 and 11.")
        bio["heightIn"] = int(height_in)
    if weight:
        bio["weight"] = float(weight)
    return bio


def bulk_entries(values: Mapping[str, Any]) -> dict[str, float]:
    """Athlete id to value for every non-blank entry."""
    entries: dict[str, float] = {}
    for athlete_id, raw in values.items():
        text = "" if raw is None else str(raw).strip()
        if not text:
            continue
        try:
            entries[athlete_id] = float(text)
        except ValueError as exc:
            raise ValueError(f"Not a number: {text}") from exc
    return entries


def save_bulk_metrics(store: MetricStore, metric_id: str, entry_date: str, values: Mapping[str, Any]) -> int:
    """Save one metric for many athletes on one date. Returns the number of entries saved."""
    get_metric(metric_id)
    entries = bulk_entries(values)
    if not entries:
        raise ValueError("No values to save.")
    for athlete_id, value in entries.items():
        store.add_metric(athlete_id, metric_id, value, entry_date=entry_date)
    logger.info("Saved %d %s entries for %s", len(entries), metric_id, entry_date)
    return len(entries)
