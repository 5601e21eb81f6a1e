"""
Command handlers.

Each handler works on an explicit ProgramContext; loading and saving the
context is left to the caller so a failed command never writes anything.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import structlog

from albumseq.context.models import StoredConstraint
from albumseq.context.store import ProgramContext
from albumseq.exceptions import ConfigurationError, ContextError
from albumseq.sequencing.models import Constraint, Medium, Track
from albumseq.sequencing.optimizer import RankedOrdering, propose_orderings
from albumseq.utils.parsing import parse_constraint_kind, parse_duration, parse_track

logger = structlog.get_logger()


@dataclass(frozen=True)
class Proposal:
    """Result of a propose command, ready for rendering."""
    tracklist_name: str
    medium: Medium
    constraints: Tuple[Constraint, ...]
    count: int
    min_score: Optional[int]
    results: List[RankedOrdering]


def handle_add_tracklist(ctx: ProgramContext, name: str, raw_tracks: Sequence[str]) -> bool:
    """Parse "Title:Duration" items and store them as a tracklist. Returns True if replaced."""
    tracks = [parse_track(raw) for raw in raw_tracks]
    replaced = ctx.add_or_replace_tracklist(name, tracks)
    logger.info("Tracklist stored", name=name, track_count=len(tracks), replaced=replaced)
    return replaced


def handle_add_medium(ctx: ProgramContext, name: str, sides: int, max_duration: str) -> bool:
    """Store a medium. Returns True if one with the same name was replaced."""
    medium = Medium(name=name, sides=sides, max_duration_per_side=parse_duration(max_duration))
    replaced = ctx.add_or_replace_medium(medium)
    logger.info(
        "Medium stored",
        name=name,
        sides=sides,
        max_duration_per_side=medium.max_duration_per_side,
        replaced=replaced,
    )
    return replaced


def handle_add_constraint(
    ctx: ProgramContext,
    kind: str,
    args: Sequence[str],
    weight: int
) -> Tuple[Constraint, bool]:
    """Parse and store a constraint. Returns it with whether it replaced an existing one."""
    constraint = Constraint(kind=parse_constraint_kind(kind, args), weight=weight)
    replaced = ctx.add_or_replace_constraint(constraint)
    logger.info("Constraint stored", constraint=constraint.describe(), replaced=replaced)
    return constraint, replaced


def handle_remove_constraint(ctx: ProgramContext, index: int) -> StoredConstraint:
    removed = ctx.remove_constraint(index)
    logger.info("Constraint removed", index=index, kind=removed.kind.kind)
    return removed


def handle_propose(
    ctx: ProgramContext,
    tracklist_name: str,
    medium_name: str,
    count: int,
    min_score: Optional[int] = None,
    workers: int = 1,
    max_tracks: Optional[int] = None,
) -> Proposal:
    """
    Rank the orderings of a stored tracklist on a stored medium.

    Args:
        ctx: Loaded context
        tracklist_name: Tracklist name (case-insensitive)
        medium_name: Medium name (case-insensitive)
        count: Number of proposals
        min_score: Optional minimum score
        workers: Processes used for evaluation
        max_tracks: Refuse larger tracklists, when given

    Raises:
        NotFoundError: If the tracklist or medium does not exist
        ContextError: If stored data is invalid
        TooManyTracksError: If the tracklist exceeds ``max_tracks``
    """
    stored_tracklist = ctx.find_tracklist(tracklist_name)
    stored_medium = ctx.find_medium(medium_name)

    try:
        tracks: List[Track] = stored_tracklist.to_tracks()
        medium = stored_medium.to_medium()
    except ConfigurationError as e:
        raise ContextError(f"Invalid data in context: {e}") from e

    constraints = tuple(ctx.engine_constraints())

    results = propose_orderings(
        tracks,
        constraints,
        medium,
        count,
        min_score,
        max_tracks=max_tracks,
        workers=workers,
    )

    return Proposal(
        tracklist_name=stored_tracklist.name,
        medium=medium,
        constraints=constraints,
        count=count,
        min_score=min_score,
        results=results,
    )
