from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

EARTH_RADIUS_FT = 20902231
FEET_PER_METER = 3.28084


@dataclass(frozen=True)
class GeoFix:
    lat: float
    lng: float
    accuracy_m: float = 0.0


def haversine_feet(a: GeoFix, b: GeoFix) -> float:
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_FT * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def accuracy_feet(fix: GeoFix) -> int:
    return round(fix.accuracy_m * FEET_PER_METER)


def average_fixes(fixes: Iterable[GeoFix]) -> GeoFix:
    samples = list(fixes)
    if not samples:
        raise ValueError("at least one GPS fix is required")
    n = len(samples)
    return GeoFix(
        lat=sum(f.lat for f in samples) / n,
        lng=sum(f.lng for f in samples) / n,
        accuracy_m=sum(f.accuracy_m for f in samples) / n,
    )


class DistanceTracker:
    """Home-plate-to-here distance from a stream of GPS fixes."""

    def __init__(self) -> None:
        self.current: GeoFix | None = None
        self.home_plate: GeoFix | None = None

    def update(self, fix: GeoFix) -> None:
        self.current = fix

    def set_home_plate(self) -> bool:
        if self.current is None:
            return False
        self.home_plate = self.current
        return True

    def distance_feet(self) -> float:
        if self.current is None or self.home_plate is None:
            return 0.0
        return haversine_feet(self.home_plate, self.current)

    def reset(self) -> None:
        self.current = None
        self.home_plate = None
