"""Tests for the metric catalog, metric history and athlete comparison."""

from datetime import date

import pytest

from athletrack_core.comparison import (
    COMPARISON_COLUMNS,
    AthleteFilters,
    athlete_age,
    athlete_height_in,
    compare_athletes,
    comparison_summary,
    filter_athletes,
)
from athletrack_core.metrics import (
    ALL_METRICS,
    METRIC_GROUPS,
    average,
    get_metric,
    lower_is_better,
    median,
    metric_history,
    parse_entry_date,
    safe_div,
    trend_series,
)

TODAY = date(2024, 6, 1)


@pytest.fixture
def athletes():
    return [
        {"id": "a", "name": "Avery", "team": "Varsity",
         "biometrics": {"gender": "Male", "dob": "2006-02-01", "heightFt": 6, "heightIn": 1, "weight": 180}},
        {"id": "b", "name": "Blake", "team": "JV",
         "biometrics": {"gender": "Female", "dob": "2009-07-15", "heightFt": 5, "heightIn": 6, "weight": 140}},
        {"id": "c", "name": "Cam", "team": "", "biometrics": {}},
    ]


@pytest.fixture
def entries():
    return [
        {"id": "1", "userId": "a", "metricId": "dash_60", "value": 7.2, "date": "2024-01-10", "timestamp": "t1"},
        {"id": "2", "userId": "a", "metricId": "dash_60", "value": 7.0, "date": "2024-03-10", "timestamp": "t2"},
        {"id": "3", "userId": "b", "metricId": "dash_60", "value": 7.5, "date": "2024-02-01", "timestamp": "t3"},
        {"id": "4", "userId": "c", "metricId": "dash_60", "value": 8.1, "date": "2024-05-01", "timestamp": "t4"},
        {"id": "5", "userId": "a", "metricId": "fb", "value": 82.0, "date": "2024-02-01", "timestamp": "t5"},
        {"id": "6", "userId": "b", "metricId": "fb", "value": 75.0, "date": "2024-02-02", "timestamp": "t6"},
    ]


class TestCatalog:

    def test_groups(self):
        assert list(METRIC_GROUPS) == ["Hitting", "Positional Throwing", "Catcher Throwing", "Pitching", "Foot Speed"]
        assert len({m.id for m in ALL_METRICS}) == len(ALL_METRICS)

    def test_get_metric(self):
        assert get_metric("pop_2b").unit == "sec"
        with pytest.raises(KeyError):
            get_metric("bench_press")

    def test_lower_is_better(self):
        assert lower_is_better(get_metric("dash_60"))
        assert not lower_is_better(get_metric("exit_velo_tee"))

    def test_helpers(self):
        assert safe_div(1, 0) == 0.0
        assert average([]) == 0.0
        assert average([1, 2, 3]) == 2.0
        assert median([3, 1, 2]) == 2
        assert median([4, 1, 2, 3]) == 2.5
        assert parse_entry_date("2024-01-02T10:00:00Z") == date(2024, 1, 2)
        assert parse_entry_date("garbage") is None


class TestHistory:

    def test_newest_first(self, entries):
        assert [e["id"] for e in metric_history(entries, "dash_60")] == ["4", "2", "3", "1"]

    def test_trend_oldest_first(self, entries):
        assert trend_series(entries, "fb") == [("2024-02-01", 82.0), ("2024-02-02", 75.0)]


class TestFilterAthletes:

    def test_age_and_height(self, athletes):
        assert athlete_age(athletes[0], TODAY) == 18
        assert athlete_height_in(athletes[0]) == 73
        assert athlete_height_in(athletes[2]) is None

    def test_gender_and_team(self, athletes):
        assert [a["id"] for a in filter_athletes(athletes, AthleteFilters(gender="Female"), TODAY)] == ["b"]
        assert [a["id"] for a in filter_athletes(athletes, AthleteFilters(team="Unassigned"), TODAY)] == ["c"]

    def test_bounds_exclude_unknown_values(self, athletes):
        kept = filter_athletes(athletes, AthleteFilters(min_weight=100), TODAY)
        assert [a["id"] for a in kept] == ["a", "b"]

    def test_age_range(self, athletes):
        kept = filter_athletes(athletes, AthleteFilters(min_age=16, max_age=20), TODAY)
        assert [a["id"] for a in kept] == ["a"]

    def test_no_filters_keeps_everyone(self, athletes):
        assert len(filter_athletes(athletes, AthleteFilters(), TODAY)) == 3


class TestCompareAthletes:

    def test_sec_metric_sorted_ascending(self, athletes, entries):
        frame = compare_athletes(athletes, entries, "dash_60", today=TODAY)
        assert list(frame.columns) == COMPARISON_COLUMNS
        assert list(frame["athlete_id"]) == ["a", "b", "c"]
        row = frame.iloc[0]
        assert row["value"] == 7.1
        assert (row["min"], row["max"], row["count"]) == (7.0, 7.2, 2)
        assert row["date"] == date(2024, 3, 10)
        assert frame.iloc[2]["team"] == "Unassigned"

    def test_speed_metric_sorted_descending(self, athletes, entries):
        frame = compare_athletes(athletes, entries, "fb", today=TODAY)
        assert list(frame["name"]) == ["Avery", "Blake"]

    def test_date_range(self, athletes, entries):
        filters = AthleteFilters(start_date="2024-02-01", end_date="2024-04-01")
        frame = compare_athletes(athletes, entries, "dash_60", filters, today=TODAY)
        assert list(frame["athlete_id"]) == ["a", "b"]
        assert frame.iloc[0]["count"] == 1

    def test_no_matches(self, athletes, entries):
        frame = compare_athletes(athletes, entries, "pop_3b", today=TODAY)
        assert frame.empty
        assert list(frame.columns) == COMPARISON_COLUMNS
        assert comparison_summary(frame) is None

    def test_summary(self, athletes, entries):
        summary = comparison_summary(compare_athletes(athletes, entries, "fb", today=TODAY))
        assert summary == {"mean": 78.5, "median": 78.5, "min": 75.0, "max": 82.0, "count": 2}
