from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import pandas as pd

from .metrics import safe_div
from .pitch_session import PitchRecord
from .zones import INTERIOR_ZONE_MAX, PITCH_TYPES, TARGETS, is_wild_zone, target_zones, zone_label


@dataclass(frozen=True)
class HitStats:
    total: int
    hits: int
    misses: int
    wild_pitches: int
    hit_pct: float
    miss_pct: float
    wild_pct: float

    @property
    def has_data(self) -> bool:
        return self.total > 0


@dataclass(frozen=True)
class MatrixCell:
    hits: int
    total: int
    hit_pct: int | None

    def display(self) -> str:
        if self.hit_pct is None:
            return "-"
        return f"{self.hits}/{self.total} ({self.hit_pct}%)"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _pct(part: int, total: int) -> float:
    return round(safe_div(part, total) * 100, 1)


def compute_zone_counts(pitches: Iterable[PitchRecord]) -> dict[int, int]:
    return dict(Counter(p.location for p in pitches))


def compute_zone_breakdown(pitches: Sequence[PitchRecord]) -> dict[int, int]:
    total = len(pitches)
    counts = compute_zone_counts(pitches)
    return {zone: _round_half_up(safe_div(count, total) * 100) for zone, count in counts.items()}


def compute_hit_stats(pitches: Sequence[PitchRecord], target_zone_set: Iterable[int]) -> HitStats:
    zones = frozenset(target_zone_set)
    total = len(pitches)
    hits = sum(1 for p in pitches if p.location in zones)
    wild = sum(1 for p in pitches if p.location > INTERIOR_ZONE_MAX)
    misses = total - hits
    return HitStats(
        total=total,
        hits=hits,
        misses=misses,
        wild_pitches=wild,
        hit_pct=_pct(hits, total),
        miss_pct=_pct(misses, total),
        wild_pct=_pct(wild, total),
    )


def compute_summary_matrix(
    pitches: Sequence[PitchRecord],
    types: Sequence[str] = PITCH_TYPES,
    targets: Sequence[str] = TARGETS,
) -> dict[str, dict[str, MatrixCell]]:
    # Exact equality on type/target here, unlike filter_by_context.
    matrix: dict[str, dict[str, MatrixCell]] = {}
    for pitch_type in types:
        row: dict[str, MatrixCell] = {}
        for target in targets:
            zones = target_zones(target)
            cell_pitches = [p for p in pitches if p.pitch_type == pitch_type and p.target == target]
            total = len(cell_pitches)
            hits = sum(1 for p in cell_pitches if p.location in zones)
            hit_pct = _round_half_up(hits / total * 100) if total else None
            row[target] = MatrixCell(hits=hits, total=total, hit_pct=hit_pct)
        matrix[pitch_type] = row
    return matrix


def hit_rate_band(hit_pct: float | None) -> str:
    if hit_pct is None:
        return "none"
    if hit_pct >= 70:
        return "strong"
    if hit_pct >= 50:
        return "fair"
    return "weak"


def summary_matrix_frame(matrix: dict[str, dict[str, MatrixCell]]) -> pd.DataFrame:
    rows = [
        {"Pitch Type": pitch_type, **{target: cell.display() for target, cell in row.items()}}
        for pitch_type, row in matrix.items()
    ]
    return pd.DataFrame(rows).set_index("Pitch Type") if rows else pd.DataFrame()


def pitch_outcome(pitch: PitchRecord) -> str:
    if is_wild_zone(pitch.location):
        return "Wild"
    return "Hit" if pitch.location in target_zones(pitch.target) else "Miss"


def pitch_log_rows(pitches: Sequence[PitchRecord]) -> list[dict[str, Any]]:
    """One row per pitch, oldest first, numbered from 1."""
    return [
        {"#": number, "id": p.id, "Zone": zone_label(p.location), "Result": pitch_outcome(p)}
        for number, p in enumerate(pitches, start=1)
    ]
