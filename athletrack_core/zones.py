from __future__ import annotations

# 4x4 grid indices in reading order -> display IDs. Center 2x2 is 1-4,
# the outer ring runs clockwise from the top-left corner.
GRID_TO_DISPLAY: dict[int, int] = {
    5: 1,
    6: 2,
    9: 3,
    10: 4,
    0: 5,
    1: 6,
    2: 7,
    3: 8,
    7: 9,
    11: 10,
    15: 11,
    14: 12,
    13: 13,
    12: 14,
    8: 15,
    4: 16,
}

WILD_HIGH = 17
WILD_LOW = 18
WILD_LEFT = 19
WILD_RIGHT = 20

WILD_ZONE_LABELS: dict[int, str] = {
    WILD_HIGH: "High (Wild)",
    WILD_LOW: "Dirt (Low)",
    WILD_LEFT: "Wild Left",
    WILD_RIGHT: "Wild Right",
}

INTERIOR_ZONE_MAX = 16
ZONE_IDS: tuple[int, ...] = tuple(range(1, WILD_RIGHT + 1))

TARGET_ZONES: dict[str, frozenset[int]] = {
    "Strike": frozenset({1, 2, 3, 4}),
    "Left": frozenset({5, 14, 15, 16}),
    "Right": frozenset({8, 9, 10, 11}),
    "Up": frozenset({5, 6, 7, 8}),
    "Below": frozenset({11, 12, 13, 14}),
}

PITCH_TYPES: tuple[str, ...] = ("Fastball", "Curveball", "Changeup", "Slider")
TARGETS: tuple[str, ...] = tuple(TARGET_ZONES.keys())

DEFAULT_PITCH_TYPE = "Fastball"
DEFAULT_TARGET = "Strike"


def display_id_for_index(index: int) -> int:
    if index not in GRID_TO_DISPLAY:
        raise ValueError(f"Grid index must be 0-15, got {index!r}")
    return GRID_TO_DISPLAY[index]


def grid_rows() -> list[list[int]]:
    return [[display_id_for_index(row * 4 + col) for col in range(4)] for row in range(4)]


def is_valid_zone(display_id: object) -> bool:
    return isinstance(display_id, int) and not isinstance(display_id, bool) and display_id in ZONE_IDS


def is_wild_zone(display_id: int) -> bool:
    return display_id > INTERIOR_ZONE_MAX


def target_zones(target: str | None) -> frozenset[int]:
    return TARGET_ZONES.get(str(target or ""), frozenset())


def zone_label(display_id: int) -> str:
    if display_id in WILD_ZONE_LABELS:
        return WILD_ZONE_LABELS[display_id]
    return f"Zone {display_id}"


def clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, float(value)))
