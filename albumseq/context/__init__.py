"""Persistent context: tracklists, media and constraints"""

from albumseq.context.models import (
    NamedTracklist,
    StoredConstraint,
    StoredConstraintKind,
    StoredMedium,
    StoredTrack,
)
from albumseq.context.store import ProgramContext

__all__ = [
    "NamedTracklist",
    "ProgramContext",
    "StoredConstraint",
    "StoredConstraintKind",
    "StoredMedium",
    "StoredTrack",
]
