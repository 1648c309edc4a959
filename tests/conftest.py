"""Shared pytest fixtures for AthleTrack tests."""

import pytest

from athletrack_core.pitch_session import PitchSession
from athletrack_store import Database, MemoryStore


@pytest.fixture
def db(tmp_path):
    """
    SQLite database in a temporary directory.

    Uses tmp_path fixture to ensure isolation between tests.
    """
    database = Database(tmp_path / "test.db")
    yield database
    database.close()


@pytest.fixture
def athlete_id(db):
    """An athlete row the session and metric foreign keys can point at."""
    return db.add_athlete("Test Pitcher", team="Varsity", athlete_id="athlete-1")


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def session():
    """A session with pitches across two contexts."""
    s = PitchSession(date="2024-05-01")
    s.record_pitch(1)
    s.record_pitch(5)
    s.record_pitch(17)
    s.set_context(pitch_type="Curveball", target="Left")
    s.record_pitch(14)
    s.record_pitch(2)
    s.set_context(pitch_type="Fastball", target="Strike")
    return s


@pytest.fixture
def legacy_record():
    return {
        "id": "legacy-1",
        "userId": "athlete-1",
        "date": "2023-04-02",
        "pitchType": "Curveball",
        "intendedTarget": "Left",
        "counts": {"1": 3, "17": 1, "5": 0},
        "timestamp": "2023-04-02T18:30:00Z",
    }


@pytest.fixture
def intermediate_record():
    return {
        "id": "mid-1",
        "userId": "athlete-1",
        "date": "2023-09-10",
        "pitchType": "Slider",
        "intendedTarget": "Right",
        "pitches": [
            {"id": "p1", "location": 9, "timestamp": 1694350000000},
            {"id": "p2", "location": "10", "type": "Changeup", "timestamp": 1694350001000},
        ],
        "timestamp": 1694350002000,
    }


@pytest.fixture
def current_record():
    return {
        "id": "cur-1",
        "userId": "athlete-1",
        "date": "2024-05-01",
        "pitchType": "Mixed",
        "mixedTypes": True,
        "target": "Variable",
        "variableTargets": True,
        "locations": {"1": 1, "14": 1},
        "pitchData": [
            {"id": "a", "location": 1, "target": "Strike", "type": "Fastball", "timestamp": 1714560000000},
            {
                "id": "b",
                "location": 14,
                "target": "Left",
                "type": "Curveball",
                "timestamp": 1714560001000,
                "x": 12.5,
                "y": 80.0,
            },
        ],
        "timestamp": 1714560002000,
    }
