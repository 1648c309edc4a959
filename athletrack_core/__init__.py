from .aggregation import (
    HitStats,
    MatrixCell,
    compute_hit_stats,
    compute_summary_matrix,
    compute_zone_breakdown,
    compute_zone_counts,
    hit_rate_band,
    pitch_log_rows,
    summary_matrix_frame,
)
from .comparison import AthleteFilters, compare_athletes, comparison_summary, filter_athletes
from .distance import DistanceTracker, GeoFix, accuracy_feet, average_fixes, haversine_feet
from .hydration import hydrate, session_label, sort_history
from .metrics import ALL_METRICS, METRIC_GROUPS, get_metric, metric_history, safe_div, trend_series
from .persistence import (
    EmptySessionError,
    PersistenceError,
    SessionDeleteError,
    SessionSaveError,
    SessionStore,
    build_session_record,
    delete_session,
    load_history,
    save_session,
)
from .pitch_session import PitchRecord, PitchSession, create_pitch, filter_by_context, new_session
from .roster import build_biometrics, save_bulk_metrics
from .stopwatch import STOPWATCH_METRICS, RaceStopwatch, format_split
from .voice_entry import VoiceCommand, parse_voice_command

__all__ = [
    "PitchRecord",
    "PitchSession",
    "create_pitch",
    "filter_by_context",
    "new_session",
    "HitStats",
    "MatrixCell",
    "compute_zone_counts",
    "compute_zone_breakdown",
    "compute_hit_stats",
    "compute_summary_matrix",
    "hit_rate_band",
    "pitch_log_rows",
    "summary_matrix_frame",
    "hydrate",
    "session_label",
    "sort_history",
    "SessionStore",
    "PersistenceError",
    "EmptySessionError",
    "SessionSaveError",
    "SessionDeleteError",
    "build_session_record",
    "save_session",
    "load_history",
    "delete_session",
    "GeoFix",
    "DistanceTracker",
    "haversine_feet",
    "accuracy_feet",
    "average_fixes",
    "RaceStopwatch",
    "STOPWATCH_METRICS",
    "format_split",
    "METRIC_GROUPS",
    "ALL_METRICS",
    "get_metric",
    "metric_history",
    "trend_series",
    "safe_div",
    "AthleteFilters",
    "filter_athletes",
    "compare_athletes",
    "comparison_summary",
    "build_biometrics",
    "save_bulk_metrics",
    "VoiceCommand",
    "parse_voice_command",
]
