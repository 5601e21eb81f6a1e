"""Tracklist sequencing engine"""

from albumseq.sequencing.allocator import SideAllocation, allocate_sides, fits
from albumseq.sequencing.models import (
    Adjacent,
    AtPosition,
    Constraint,
    ConstraintKind,
    Medium,
    OnSameSide,
    Track,
    Tracklist,
)
from albumseq.sequencing.optimizer import RankedOrdering, propose_orderings
from albumseq.sequencing.permutations import count_orderings, iter_orderings
from albumseq.sequencing.scoring import evaluate_constraints, score_ordering

__all__ = [
    "Adjacent",
    "AtPosition",
    "Constraint",
    "ConstraintKind",
    "Medium",
    "OnSameSide",
    "Track",
    "Tracklist",
    "SideAllocation",
    "allocate_sides",
    "fits",
    "count_orderings",
    "iter_orderings",
    "score_ordering",
    "evaluate_constraints",
    "RankedOrdering",
    "propose_orderings",
]
