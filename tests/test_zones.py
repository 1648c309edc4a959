"""Tests for strike-zone ids and target zone sets."""

import pytest

from athletrack_core.zones import (
    GRID_TO_DISPLAY,
    TARGET_ZONES,
    ZONE_IDS,
    clamp_percent,
    display_id_for_index,
    grid_rows,
    is_valid_zone,
    is_wild_zone,
    target_zones,
    zone_label,
)


class TestGridMapping:

    def test_every_grid_index_maps_to_distinct_interior_zone(self):
        ids = [display_id_for_index(i) for i in range(16)]
        assert sorted(ids) == list(range(1, 17))

    def test_center_cells_are_zones_one_to_four(self):
        assert [display_id_for_index(i) for i in (5, 6, 9, 10)] == [1, 2, 3, 4]

    def test_corners(self):
        assert display_id_for_index(0) == 5
        assert display_id_for_index(3) == 8
        assert display_id_for_index(15) == 11
        assert display_id_for_index(12) == 14

    @pytest.mark.parametrize("index", [-1, 16, 99])
    def test_out_of_range_index_raises(self, index):
        with pytest.raises(ValueError):
            display_id_for_index(index)

    def test_grid_rows_reading_order(self):
        assert grid_rows() == [
            [5, 6, 7, 8],
            [16, 1, 2, 9],
            [15, 3, 4, 10],
            [14, 13, 12, 11],
        ]
        assert len(GRID_TO_DISPLAY) == 16


class TestZonePredicates:

    def test_valid_zone_range(self):
        assert all(is_valid_zone(z) for z in ZONE_IDS)
        assert not is_valid_zone(0)
        assert not is_valid_zone(21)

    def test_non_int_is_invalid(self):
        assert not is_valid_zone("5")
        assert not is_valid_zone(5.0)
        assert not is_valid_zone(True)

    def test_wild_zones(self):
        assert [z for z in ZONE_IDS if is_wild_zone(z)] == [17, 18, 19, 20]

    def test_labels(self):
        assert zone_label(3) == "Zone 3"
        assert zone_label(17) == "High (Wild)"
        assert zone_label(18) == "Dirt (Low)"


class TestTargetZones:

    def test_each_target_has_four_interior_zones(self):
        for zones in TARGET_ZONES.values():
            assert len(zones) == 4
            assert all(1 <= z <= 16 for z in zones)

    def test_strike_is_center(self):
        assert target_zones("Strike") == frozenset({1, 2, 3, 4})

    def test_unknown_target_is_empty(self):
        assert target_zones("Variable") == frozenset()
        assert target_zones(None) == frozenset()

    def test_clamp_percent(self):
        assert clamp_percent(-3) == 0.0
        assert clamp_percent(42.5) == 42.5
        assert clamp_percent(130) == 100.0
