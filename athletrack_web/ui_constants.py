from __future__ import annotations

APP_TITLE = "AthleTrack"
APP_SUBTITLE = "Athlete performance tracking for coaches"

WEB_SECTIONS = ["Pitching Accuracy", "Metrics", "Bulk Entry", "Athlete Comparison", "Tools"]

SESSION_KEY = "pitch_session"
REVIEW_KEY = "review_session_id"
STOPWATCH_KEY = "race_stopwatch"
DISTANCE_KEY = "distance_tracker"
DEMO_STORE_KEY = "demo_store"
GPS_SAMPLES_KEY = "gps_samples"

# Fixes averaged into the current position.
GPS_SAMPLE_WINDOW = 5

BAND_COLORS = {
    "strong": "#4ADE80",
    "fair": "#FACC15",
    "weak": "#F87171",
    "none": "#6B7280",
}

HELP_TEXT = {
    "grid": "Tap a zone to record where the pitch landed for the selected type and target.",
    "undo": "Removes the most recent pitch for the current pitch type and target only.",
    "reset_context": "Clears every pitch recorded for the current pitch type and target.",
    "reset_session": "Clears every pitch in this session.",
    "review": "Reviewing a saved session. Recording is disabled until you exit review.",
    "matrix": "Hit % for each pitch type and intended target across the whole session.",
    "stopwatch": "Start the race, then press once per finisher. Stops after the last athlete.",
    "distance": "Add a few GPS samples at the plate, set home plate, then walk and sample again.",
    "voice": "Paste or dictate a number, then say 'enter' to save, e.g. '87.5 enter'.",
    "demo_readonly": "Demo Mode: data is kept for this browser session only.",
    "pitch_log": "Pitches for the current pitch type and target. Delete removes a single mis-tap.",
    "bulk_entry": "Enter one value per athlete for the same metric and date. Blank rows are skipped.",
    "delete_athlete": "Removes the athlete with all of their sessions and metric entries.",
}
