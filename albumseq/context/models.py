"""
Persisted forms of tracks, media and constraints.

The JSON layout matches context files written by earlier albumseq releases:
constraint kinds are stored as ``{"kind": "<Name>", "data": [...]}``.
"""

from typing import List, Literal, Tuple, Union

from pydantic import BaseModel, Field

from albumseq.exceptions import ConfigurationError, ContextError
from albumseq.sequencing.models import (
    Adjacent,
    AtPosition,
    Constraint,
    ConstraintKind,
    Medium,
    OnSameSide,
    Track,
    normalize_title,
)


class StoredTrack(BaseModel):
    title: str
    duration: float

    @classmethod
    def from_track(cls, track: Track) -> "StoredTrack":
        return cls(title=track.title, duration=track.duration)

    def to_track(self) -> Track:
        return Track(title=self.title, duration=self.duration)


class NamedTracklist(BaseModel):
    name: str
    tracks: List[StoredTrack] = Field(default_factory=list)

    def to_tracks(self) -> List[Track]:
        return [stored.to_track() for stored in self.tracks]


class StoredMedium(BaseModel):
    name: str
    sides: int
    max_duration_per_side: float

    def to_medium(self) -> Medium:
        return Medium(
            name=self.name,
            sides=self.sides,
            max_duration_per_side=self.max_duration_per_side,
        )


class StoredConstraintKind(BaseModel):
    kind: Literal["AtPosition", "Adjacent", "OnSameSide"]
    data: List[Union[int, str]]

    @classmethod
    def from_kind(cls, kind: ConstraintKind) -> "StoredConstraintKind":
        if isinstance(kind, AtPosition):
            return cls(kind="AtPosition", data=[kind.title, kind.position])
        if isinstance(kind, Adjacent):
            return cls(kind="Adjacent", data=[kind.first, kind.second])
        if isinstance(kind, OnSameSide):
            return cls(kind="OnSameSide", data=[kind.first, kind.second])
        raise ConfigurationError(f"Unknown constraint kind: {kind!r}")

    def identity(self) -> Tuple[str, Tuple[Union[int, str], ...]]:
        """Key under which two stored kinds name the same constraint (titles ignore case)."""
        return self.kind, tuple(
            normalize_title(value) if isinstance(value, str) else value for value in self.data
        )

    def to_kind(self) -> ConstraintKind:
        if len(self.data) != 2:
            raise ContextError(f"{self.kind} constraint needs 2 values, got {self.data!r}")

        first, second = self.data
        if self.kind == "AtPosition":
            if not isinstance(second, int):
                raise ContextError(f"AtPosition position must be an integer, got {second!r}")
            return AtPosition(str(first), second)
        if self.kind == "Adjacent":
            return Adjacent(str(first), str(second))
        return OnSameSide(str(first), str(second))


class StoredConstraint(BaseModel):
    kind: StoredConstraintKind
    weight: int = 1

    @classmethod
    def from_constraint(cls, constraint: Constraint) -> "StoredConstraint":
        return cls(
            kind=StoredConstraintKind.from_kind(constraint.kind),
            weight=constraint.weight,
        )

    def to_constraint(self) -> Constraint:
        return Constraint(kind=self.kind.to_kind(), weight=self.weight)
