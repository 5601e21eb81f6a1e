"""
Constraint scoring module

Scores one ordering against a set of weighted placement constraints.
"""

from typing import Iterable, List, Tuple

from albumseq.exceptions import ConfigurationError
from albumseq.sequencing.allocator import SideAllocation
from albumseq.sequencing.models import (
    Adjacent,
    AtPosition,
    Constraint,
    ConstraintKind,
    OnSameSide,
    Tracklist,
    normalize_title,
)


def score_ordering(
    ordering: Tracklist,
    allocation: SideAllocation,
    constraints: Iterable[Constraint]
) -> int:
    """
    Score an ordering.

    Args:
        ordering: Tracks in play order
        allocation: Side partition of ``ordering``
        constraints: Weighted constraints

    Returns:
        Sum of the weights of all satisfied constraints
    """
    return sum(
        constraint.weight
        for constraint in constraints
        if is_satisfied(constraint.kind, ordering, allocation)
    )


def evaluate_constraints(
    ordering: Tracklist,
    allocation: SideAllocation,
    constraints: Iterable[Constraint]
) -> List[Tuple[Constraint, bool]]:
    """Pair every constraint with whether the ordering satisfies it."""
    return [
        (constraint, is_satisfied(constraint.kind, ordering, allocation))
        for constraint in constraints
    ]


def is_satisfied(
    kind: ConstraintKind,
    ordering: Tracklist,
    allocation: SideAllocation
) -> bool:
    """
    Check a single constraint kind.

    Titles resolve to their first match in the ordering. Absent titles,
    out of range positions and constraints naming the same track twice are
    simply unsatisfied.
    """
    if isinstance(kind, AtPosition):
        return _check_at_position(kind, ordering)
    if isinstance(kind, Adjacent):
        return _check_adjacent(kind, ordering)
    if isinstance(kind, OnSameSide):
        return _check_on_same_side(kind, allocation)
    raise ConfigurationError(f"Unknown constraint kind: {kind!r}")


def _check_at_position(kind: AtPosition, ordering: Tracklist) -> bool:
    index = ordering.index_of(kind.title)
    return index is not None and index == kind.position


def _check_adjacent(kind: Adjacent, ordering: Tracklist) -> bool:
    if _same_title(kind.first, kind.second):
        return False

    first = ordering.index_of(kind.first)
    second = ordering.index_of(kind.second)
    if first is None or second is None:
        return False
    return abs(first - second) == 1


def _check_on_same_side(kind: OnSameSide, allocation: SideAllocation) -> bool:
    """Only a complete (feasible) partition can satisfy a side constraint."""
    if not allocation.feasible or _same_title(kind.first, kind.second):
        return False

    first = allocation.side_index_of(kind.first)
    second = allocation.side_index_of(kind.second)
    if first is None or second is None:
        return False
    return first == second


def _same_title(a: str, b: str) -> bool:
    return normalize_title(a) == normalize_title(b)
