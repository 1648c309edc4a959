from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable


@dataclass(frozen=True)
class MetricDefinition:
    id: str
    label: str
    unit: str


METRIC_GROUPS: dict[str, tuple[MetricDefinition, ...]] = {
    "Hitting": (
        MetricDefinition("exit_velo_tee", "Exit Velo - Off Tee", "mph"),
        MetricDefinition("exit_velo_front", "Exit Velo - Front Toss", "mph"),
        MetricDefinition("exit_velo_machine", "Exit Velo - Machine", "mph"),
        MetricDefinition("dist_tee", "Distance - Off Tee", "ft"),
    ),
    "Positional Throwing": (
        MetricDefinition("if_glove", "Infield - Ball in Glove", "mph"),
        MetricDefinition("if_loss", "Infield - Live Fungo", "mph"),
        MetricDefinition("of_glove", "Outfield - Ball in Glove", "mph"),
        MetricDefinition("of_loss", "Outfield - Live Fungo", "mph"),
    ),
    "Catcher Throwing": (
        MetricDefinition("c_to_2b_glove", "Catcher to 2B - Ball in Glove", "mph"),
        MetricDefinition("c_to_2b_live", "Catcher to 2B - Live", "mph"),
        MetricDefinition("pop_2b", "Pop Time to 2B", "sec"),
        MetricDefinition("pop_3b", "Pop Time to 3B", "sec"),
    ),
    "Pitching": (
        MetricDefinition("fb", "Fastball", "mph"),
        MetricDefinition("cb", "Curveball", "mph"),
        MetricDefinition("sl", "Slider", "mph"),
        MetricDefinition("ch", "Changeup", "mph"),
    ),
    "Foot Speed": (
        MetricDefinition("dash_60", "60 Yard Dash", "sec"),
        MetricDefinition("dash_30", "30 Yard Dash", "sec"),
        MetricDefinition("home_to_2b", "Home to 2B", "sec"),
        MetricDefinition("steal_2b", "Steal 2B (12ft lead)", "sec"),
    ),
}

ALL_METRICS: tuple[MetricDefinition, ...] = tuple(m for group in METRIC_GROUPS.values() for m in group)
_METRICS_BY_ID: dict[str, MetricDefinition] = {m.id: m for m in ALL_METRICS}


def get_metric(metric_id: str) -> MetricDefinition:
    metric = _METRICS_BY_ID.get(str(metric_id))
    if metric is None:
        raise KeyError(f"Unknown metric: {metric_id}")
    return metric


def lower_is_better(metric: MetricDefinition) -> bool:
    return metric.unit == "sec"


def safe_div(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def average(values: Iterable[float]) -> float:
    values_list = list(values)
    return sum(values_list) / len(values_list) if values_list else 0.0


def median(values: Iterable[float]) -> float:
    ordered = sorted(values)
    if not ordered:
        return 0.0
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def parse_entry_date(raw: Any) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return datetime.fromisoformat(str(raw).replace("Z", "+00:00")).date()
    except ValueError:
        return None


def _entry_sort_key(entry: dict[str, Any]) -> tuple[date, str]:
    return (parse_entry_date(entry.get("date")) or date.min, str(entry.get("timestamp") or ""))


def metric_history(entries: Iterable[dict[str, Any]], metric_id: str) -> list[dict[str, Any]]:
    rows = [e for e in entries if e.get("metricId") == metric_id]
    return sorted(rows, key=_entry_sort_key, reverse=True)


def trend_series(entries: Iterable[dict[str, Any]], metric_id: str) -> list[tuple[str, float]]:
    rows = [e for e in entries if e.get("metricId") == metric_id and e.get("value") is not None]
    rows.sort(key=_entry_sort_key)
    return [(str(e.get("date", "")), float(e["value"])) for e in rows]
