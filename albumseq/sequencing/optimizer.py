"""
Tracklist sequencing optimizer

Exhaustively evaluates every ordering of a tracklist:
- side allocation decides whether the ordering fits the medium
- constraint scoring ranks the orderings that fit
- the best ``count`` orderings are kept, ties in enumeration order
"""

import heapq
import multiprocessing
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import structlog

from albumseq.exceptions import ConfigurationError, TooManyTracksError
from albumseq.sequencing.allocator import SideAllocation, allocate_sides
from albumseq.sequencing.models import Constraint, Medium, Track, Tracklist
from albumseq.sequencing.permutations import count_orderings, iter_orderings
from albumseq.sequencing.scoring import score_ordering

logger = structlog.get_logger()


@dataclass(frozen=True)
class RankedOrdering:
    """A feasible ordering with its score and side partition."""
    score: int
    ordering: Tracklist
    allocation: SideAllocation

    @property
    def sides(self) -> Tuple[Tuple[Track, ...], ...]:
        return self.allocation.sides


@dataclass
class SequencingStats:
    """Counters for one sequencing run."""
    evaluated: int = 0
    feasible: int = 0
    accepted: int = 0

    def merge(self, other: "SequencingStats") -> None:
        self.evaluated += other.evaluated
        self.feasible += other.feasible
        self.accepted += other.accepted


def propose_orderings(
    tracks: Sequence[Track],
    constraints: Iterable[Constraint],
    medium: Medium,
    count: int,
    min_score: Optional[int] = None,
    *,
    max_tracks: Optional[int] = None,
    workers: int = 1,
) -> List[RankedOrdering]:
    """
    Find the best orderings of a tracklist for a medium.

    Args:
        tracks: Tracks to sequence
        constraints: Weighted placement constraints
        medium: Medium the orderings must fit on
        count: Maximum number of results (0 returns an empty list)
        min_score: Drop orderings scoring below this, when given
        max_tracks: Refuse to enumerate more tracks than this, when given
        workers: Number of processes evaluating orderings

    Returns:
        Up to ``count`` feasible orderings, best score first. Equal scores
        keep the order in which the orderings were enumerated.

    Raises:
        ConfigurationError: If count, min_score or workers are invalid
        TooManyTracksError: If the tracklist is larger than ``max_tracks``
    """
    pool = tuple(tracks)
    constraints = tuple(constraints)
    _validate_request(count, min_score, workers)

    if count == 0:
        return []

    if max_tracks is not None and len(pool) > max_tracks:
        raise TooManyTracksError(len(pool), max_tracks)

    logger.info(
        "Starting sequencing",
        track_count=len(pool),
        orderings=count_orderings(len(pool)),
        constraint_count=len(constraints),
        medium=medium.name,
        workers=workers,
    )

    if workers > 1 and len(pool) > 1:
        ranked, stats = _rank_parallel(pool, constraints, medium, count, min_score, workers)
    else:
        ranked, stats = _rank_shard(pool, constraints, medium, count, min_score)

    logger.info(
        "Sequencing complete",
        evaluated=stats.evaluated,
        feasible=stats.feasible,
        accepted=stats.accepted,
        returned=len(ranked),
        best_score=ranked[0].score if ranked else None,
    )
    return ranked


def _validate_request(count: int, min_score: Optional[int], workers: int) -> None:
    if count < 0:
        raise ConfigurationError(f"Result count must be non-negative (got {count})")
    if min_score is not None and min_score < 0:
        raise ConfigurationError(f"Minimum score must be non-negative (got {min_score})")
    if workers < 1:
        raise ConfigurationError(f"Worker count must be at least 1 (got {workers})")


def _score_key(candidate: RankedOrdering) -> int:
    return candidate.score


def _iter_candidates(
    pool: Tuple[Track, ...],
    constraints: Tuple[Constraint, ...],
    medium: Medium,
    min_score: Optional[int],
    first: Optional[int],
    stats: SequencingStats,
) -> Iterator[RankedOrdering]:
    for ordering in iter_orderings(pool, first):
        stats.evaluated += 1

        allocation = allocate_sides(ordering, medium)
        if not allocation.feasible:
            continue
        stats.feasible += 1

        score = score_ordering(ordering, allocation, constraints)
        if min_score is not None and score < min_score:
            continue
        stats.accepted += 1

        yield RankedOrdering(score=score, ordering=ordering, allocation=allocation)


def _rank_shard(
    pool: Tuple[Track, ...],
    constraints: Tuple[Constraint, ...],
    medium: Medium,
    count: int,
    min_score: Optional[int],
    first: Optional[int] = None,
) -> Tuple[List[RankedOrdering], SequencingStats]:
    """Top ``count`` candidates among the orderings starting with ``first`` (all when None)."""
    stats = SequencingStats()
    candidates = _iter_candidates(pool, constraints, medium, min_score, first, stats)
    # nlargest is stable: equal scores keep enumeration order
    ranked = heapq.nlargest(count, candidates, key=_score_key)
    return ranked, stats


def _rank_parallel(
    pool: Tuple[Track, ...],
    constraints: Tuple[Constraint, ...],
    medium: Medium,
    count: int,
    min_score: Optional[int],
    workers: int,
) -> Tuple[List[RankedOrdering], SequencingStats]:
    """
    Shard the orderings by leading track and rank each shard in its own process.

    Shards are merged in leading-index order, which is the sequential
    enumeration order, so the final selection matches a single-process run.
    """
    tasks = [
        (pool, constraints, medium, count, min_score, first)
        for first in range(len(pool))
    ]
    processes = min(workers, len(tasks))
    logger.debug("Ranking shards in parallel", shards=len(tasks), processes=processes)

    with multiprocessing.Pool(processes=processes) as process_pool:
        shards = process_pool.starmap(_rank_shard, tasks)

    stats = SequencingStats()
    candidates: List[RankedOrdering] = []
    for shard_ranked, shard_stats in shards:
        candidates.extend(shard_ranked)
        stats.merge(shard_stats)

    return heapq.nlargest(count, candidates, key=_score_key), stats
