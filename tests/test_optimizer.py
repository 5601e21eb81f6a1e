"""
Tests for the ranking of orderings.
"""

import pytest

from albumseq.exceptions import ConfigurationError, TooManyTracksError
from albumseq.sequencing.models import (
    Adjacent,
    AtPosition,
    Constraint,
    Medium,
    OnSameSide,
    Track,
)
from albumseq.sequencing.optimizer import propose_orderings

A = Track("A", 3.0)
B = Track("B", 4.0)
C = Track("C", 2.0)
MEDIUM = Medium("Test", sides=2, max_duration_per_side=5.0)
ADJACENT_AB = Constraint(Adjacent("A", "B"), weight=10)


def titles(result):
    return [ranked.ordering.titles for ranked in result]


class TestProposeOrderings:
    """Exhaustive, feasibility filtered top-K."""

    def test_three_track_scenario(self):
        result = propose_orderings([A, B, C], [ADJACENT_AB], MEDIUM, count=10)

        # ABC and CBA do not fit on two sides of 5 minutes
        assert titles(result) == [
            ("B", "A", "C"),
            ("C", "A", "B"),
            ("A", "C", "B"),
            ("B", "C", "A"),
        ]
        assert [ranked.score for ranked in result] == [10, 10, 0, 0]

    def test_results_carry_side_partition(self):
        best = propose_orderings([A, B, C], [ADJACENT_AB], MEDIUM, count=1)[0]

        assert best.sides == ((B,), (A, C))
        assert best.allocation.feasible

    def test_count_truncates(self):
        result = propose_orderings([A, B, C], [ADJACENT_AB], MEDIUM, count=2)
        assert titles(result) == [("B", "A", "C"), ("C", "A", "B")]

    def test_count_zero_returns_empty(self):
        assert propose_orderings([A, B, C], [ADJACENT_AB], MEDIUM, count=0) == []

    def test_count_zero_ignores_track_limit(self):
        assert propose_orderings([A, B, C], [], MEDIUM, count=0, max_tracks=2) == []

    def test_min_score_threshold(self):
        result = propose_orderings([A, B, C], [ADJACENT_AB], MEDIUM, count=10, min_score=5)

        assert len(result) == 2
        assert all(ranked.score >= 5 for ranked in result)

    def test_min_score_above_everything(self):
        assert propose_orderings([A, B, C], [ADJACENT_AB], MEDIUM, count=10, min_score=11) == []

    def test_nothing_fits(self):
        tiny = Medium("Tiny", sides=1, max_duration_per_side=1.0)
        assert propose_orderings([A, B, C], [ADJACENT_AB], tiny, count=10) == []

    def test_empty_tracklist(self):
        result = propose_orderings([], [ADJACENT_AB], MEDIUM, count=5)

        assert len(result) == 1
        assert result[0].score == 0
        assert len(result[0].ordering) == 0
        assert result[0].sides == ()

    def test_rerun_is_identical(self):
        tracks = [A, B, C, Track("D", 1.0)]
        constraints = [
            ADJACENT_AB,
            Constraint(OnSameSide("C", "D"), 3),
            Constraint(AtPosition("D", 0), 2),
        ]
        medium = Medium("Roomy", sides=2, max_duration_per_side=6.0)

        first = propose_orderings(tracks, constraints, medium, count=24)
        second = propose_orderings(tracks, constraints, medium, count=24)

        assert first == second
        scores = [ranked.score for ranked in first]
        assert scores == sorted(scores, reverse=True)


class TestRequestValidation:

    def test_negative_count(self):
        with pytest.raises(ConfigurationError):
            propose_orderings([A], [], MEDIUM, count=-1)

    def test_negative_min_score(self):
        with pytest.raises(ConfigurationError):
            propose_orderings([A], [], MEDIUM, count=1, min_score=-1)

    def test_max_tracks_bounds_enumeration(self):
        with pytest.raises(TooManyTracksError) as exc_info:
            propose_orderings([A, B, C], [], MEDIUM, count=1, max_tracks=2)

        assert exc_info.value.track_count == 3
        assert exc_info.value.max_tracks == 2

    def test_zero_workers(self):
        with pytest.raises(ConfigurationError):
            propose_orderings([A], [], MEDIUM, count=1, workers=0)


class TestParallelRanking:
    """Sharded evaluation matches the single process result."""

    def test_parallel_matches_sequential(self):
        tracks = [A, B, C, Track("D", 1.0), Track("E", 1.5)]
        constraints = [
            ADJACENT_AB,
            Constraint(OnSameSide("C", "E"), 4),
            Constraint(AtPosition("D", 0), 2),
        ]
        medium = Medium("Cassette", sides=3, max_duration_per_side=5.0)

        sequential = propose_orderings(tracks, constraints, medium, count=15)
        parallel = propose_orderings(tracks, constraints, medium, count=15, workers=2)

        assert parallel == sequential
