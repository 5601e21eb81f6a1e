"""
Tests for duration, track and constraint parsing.
"""

import pytest

from albumseq.exceptions import ConstraintParseError, DurationParseError
from albumseq.sequencing.models import Adjacent, AtPosition, OnSameSide, Track
from albumseq.utils.parsing import (
    format_duration,
    parse_constraint_kind,
    parse_duration,
    parse_track,
)


class TestDurations:

    def test_parse_minutes_seconds(self):
        assert parse_duration("3:45") == pytest.approx(3.75)
        assert parse_duration("22:00") == 22.0

    def test_parse_decimal_minutes(self):
        assert parse_duration("3.5") == 3.5
        assert parse_duration(" 4 ") == 4.0

    @pytest.mark.parametrize(
        "text", ["", "abc", "3:xx", "-1:30", "3:", "nan", "inf", "\u00b2:30", "3:\u00b3\u00b2"]
    )
    def test_invalid_durations(self, text):
        with pytest.raises(DurationParseError):
            parse_duration(text)

    def test_format_duration(self):
        assert format_duration(3.75) == "03:45"
        assert format_duration(22.0) == "22:00"
        assert format_duration(0.0) == "00:00"

    def test_format_rounds_to_nearest_second(self):
        assert format_duration(1 + 29.6 / 60) == "01:30"


class TestTracks:

    def test_title_ends_at_first_colon(self):
        assert parse_track("Intro:1:30") == Track("Intro", 1.5)

    def test_decimal_duration(self):
        assert parse_track("Song Two:4.25") == Track("Song Two", 4.25)

    def test_missing_duration(self):
        with pytest.raises(DurationParseError):
            parse_track("Just a title")

    def test_empty_title(self):
        with pytest.raises(DurationParseError):
            parse_track(":3:00")

    def test_zero_duration_rejected(self):
        with pytest.raises(DurationParseError):
            parse_track("Silence:0")


class TestConstraintKinds:

    def test_atpos(self):
        assert parse_constraint_kind("atpos", ["Intro", "0"]) == AtPosition("Intro", 0)

    def test_kind_is_case_insensitive(self):
        assert parse_constraint_kind("Adjacent", ["A", "B"]) == Adjacent("A", "B")
        assert parse_constraint_kind("ONSAMESIDE", ["A", "B"]) == OnSameSide("A", "B")

    def test_unknown_kind(self):
        with pytest.raises(ConstraintParseError, match="Unknown constraint kind"):
            parse_constraint_kind("before", ["A", "B"])

    def test_wrong_arity(self):
        with pytest.raises(ConstraintParseError):
            parse_constraint_kind("adjacent", ["A"])
        with pytest.raises(ConstraintParseError):
            parse_constraint_kind("onsameside", ["A", "B", "C"])

    def test_invalid_position(self):
        with pytest.raises(ConstraintParseError, match="Invalid position"):
            parse_constraint_kind("atpos", ["Intro", "first"])
        with pytest.raises(ConstraintParseError):
            parse_constraint_kind("atpos", ["Intro", "-1"])

    def test_superscript_position_rejected(self):
        with pytest.raises(ConstraintParseError):
            parse_constraint_kind("atpos", ["Intro", "\u00b2"])
