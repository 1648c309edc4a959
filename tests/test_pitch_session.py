"""Tests for pitch capture, the context filter and context-scoped editing."""

from unittest.mock import patch

import pytest

from athletrack_core.pitch_session import (
    PitchRecord,
    PitchSession,
    create_pitch,
    filter_by_context,
    new_pitch_id,
    new_session,
)

FASTBALL_STRIKE = {"type": "Fastball", "target": "Strike"}


class TestCreatePitch:

    def test_tags_with_context(self):
        pitch = create_pitch(3, None, FASTBALL_STRIKE)
        assert pitch.location == 3
        assert pitch.pitch_type == "Fastball"
        assert pitch.target == "Strike"
        assert pitch.x is None and pitch.y is None
        assert pitch.id.startswith("pitch-")

    @pytest.mark.parametrize("zone", range(1, 21))
    def test_accepts_every_zone(self, zone):
        assert create_pitch(zone, None, FASTBALL_STRIKE).location == zone

    @pytest.mark.parametrize("zone", [0, 21, -1, "4", 3.5])
    def test_rejects_invalid_zone(self, zone):
        with pytest.raises(ValueError):
            create_pitch(zone, None, FASTBALL_STRIKE)

    def test_rejects_empty_context(self):
        with pytest.raises(ValueError):
            create_pitch(1, None, {"type": "", "target": "Strike"})
        with pytest.raises(ValueError):
            create_pitch(1, None, {"type": "Fastball"})

    def test_clamps_coordinates(self):
        pitch = create_pitch(1, {"x": -10, "y": 140}, FASTBALL_STRIKE)
        assert (pitch.x, pitch.y) == (0.0, 100.0)

    def test_ids_unique_within_same_millisecond(self):
        with patch("athletrack_core.pitch_session._now_ms", return_value=1700000000000):
            ids = {create_pitch(1, None, FASTBALL_STRIKE).id for _ in range(200)}
        assert len(ids) == 200

    def test_new_pitch_id_embeds_timestamp(self):
        assert new_pitch_id(123).startswith("pitch-123-")


class TestPitchRecordDict:

    def test_to_dict_omits_missing_coords(self):
        record = PitchRecord(id="a", location=2, target="Strike", pitch_type="Slider", timestamp=5)
        assert record.to_dict() == {"id": "a", "location": 2, "target": "Strike", "type": "Slider", "timestamp": 5}


class TestFilterByContext:

    def test_returns_only_matching_pitches(self, session):
        result = filter_by_context(session.pitches, "Curveball", "Left")
        assert [p.location for p in result] == [14, 2]

    def test_comparison_is_case_and_space_insensitive(self, session):
        assert len(filter_by_context(session.pitches, "  fastBALL ", "strike")) == 3

    def test_preserves_order_and_excludes_others(self, session):
        result = filter_by_context(session.pitches, "Fastball", "Strike")
        assert [p.location for p in result] == [1, 5, 17]
        assert all(p.pitch_type == "Fastball" and p.target == "Strike" for p in result)

    def test_unknown_context_is_empty(self, session):
        assert filter_by_context(session.pitches, "Knuckleball", "Strike") == []

    def test_stored_values_are_normalized_too(self):
        s = PitchSession(date="2024-01-01")
        messy = s.record_pitch(4, context={"type": "fastball ", "target": "strike"})
        clean = s.record_pitch(1)
        s.record_pitch(2, context={"type": "Curveball", "target": "Strike"})

        assert filter_by_context(s.pitches, "Fastball", "Strike") == [messy, clean]


class TestPitchSession:

    def test_record_uses_current_context(self):
        s = new_session("2024-01-01")
        s.set_context(pitch_type="Slider", target="Up")
        pitch = s.record_pitch(6)
        assert (pitch.pitch_type, pitch.target) == ("Slider", "Up")
        assert len(s) == 1

    def test_new_session_defaults(self):
        s = new_session("2024-01-01")
        assert s.context == {"type": "Fastball", "target": "Strike"}
        assert s.pitches == []

    def test_undo_removes_last_pitch_of_current_context_only(self):
        s = PitchSession(date="2024-01-01")
        first = s.record_pitch(1)
        s.set_context(pitch_type="Curveball")
        other = s.record_pitch(2)
        s.set_context(pitch_type="Fastball")

        removed = s.undo()

        assert removed == first
        assert s.pitches == [other]

    def test_undo_with_nothing_in_context_is_noop(self, session):
        session.set_context(pitch_type="Slider", target="Below")
        before = list(session.pitches)
        assert session.undo() is None
        assert session.pitches == before

    def test_undo_walks_back_through_current_context(self):
        s = PitchSession(date="2024-01-01")
        a = s.record_pitch(1)
        s.set_context(pitch_type="Curveball")
        b = s.record_pitch(2)
        s.set_context(pitch_type="Fastball")
        c = s.record_pitch(3)

        assert s.undo() == c
        assert s.pitches == [a, b]
        assert s.undo() == a
        assert s.pitches == [b]
        assert s.undo() is None
        assert s.pitches == [b]

    def test_undo_matches_exactly(self):
        s = PitchSession(date="2024-01-01")
        a = s.record_pitch(1)
        s.record_pitch(2, context={"type": "fastball", "target": "Strike"})

        # The lowercase pitch shows in the filter but undo skips it.
        assert len(s.filtered()) == 2
        assert s.undo() == a
        assert s.undo() is None
        assert len(s.pitches) == 1

    def test_reset_context_keeps_other_contexts(self, session):
        removed = session.reset_context()
        assert removed == 3
        assert {(p.pitch_type, p.target) for p in session.pitches} == {("Curveball", "Left")}

    def test_reset_session_clears_everything(self, session):
        session.reset_session()
        assert session.pitches == []

    def test_delete_pitch(self, session):
        target = session.pitches[1]
        assert session.delete_pitch(target.id)
        assert target not in session.pitches
        assert not session.delete_pitch("missing")
