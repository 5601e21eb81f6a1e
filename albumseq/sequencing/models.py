"""
Value types for the sequencing engine.

Everything here is immutable. Constraints reference tracks by title only;
titles are resolved against an ordering at scoring time.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

from albumseq.exceptions import ConfigurationError


def normalize_title(title: str) -> str:
    """Key used for every title comparison (case-insensitive)."""
    return title.casefold()


@dataclass(frozen=True)
class Track:
    """A track with its duration in minutes."""
    title: str
    duration: float

    def __post_init__(self):
        if not math.isfinite(self.duration) or self.duration <= 0:
            raise ConfigurationError(
                f"Track '{self.title}' must have a positive duration (got {self.duration})"
            )


@dataclass(frozen=True)
class Tracklist:
    """An ordered sequence of tracks. Duplicate titles are allowed."""
    tracks: Tuple[Track, ...] = ()

    def __iter__(self) -> Iterator[Track]:
        return iter(self.tracks)

    def __len__(self) -> int:
        return len(self.tracks)

    def __getitem__(self, index: int) -> Track:
        return self.tracks[index]

    @property
    def titles(self) -> Tuple[str, ...]:
        return tuple(track.title for track in self.tracks)

    @property
    def total_duration(self) -> float:
        return sum(track.duration for track in self.tracks)

    def index_of(self, title: str) -> Optional[int]:
        """Index of the first track matching ``title``, or None."""
        key = normalize_title(title)
        for index, track in enumerate(self.tracks):
            if normalize_title(track.title) == key:
                return index
        return None


@dataclass(frozen=True)
class Medium:
    """A storage medium split into sides of equal capacity."""
    name: str
    sides: int
    max_duration_per_side: float

    def __post_init__(self):
        if self.sides < 1:
            raise ConfigurationError(
                f"Medium '{self.name}' needs at least one side (got {self.sides})"
            )
        if not math.isfinite(self.max_duration_per_side) or self.max_duration_per_side <= 0:
            raise ConfigurationError(
                f"Medium '{self.name}' needs a positive duration per side "
                f"(got {self.max_duration_per_side})"
            )

    @property
    def total_capacity(self) -> float:
        return self.sides * self.max_duration_per_side


@dataclass(frozen=True)
class AtPosition:
    """The track must sit at a zero-based index of the ordering."""
    title: str
    position: int

    def __post_init__(self):
        if isinstance(self.position, bool) or not isinstance(self.position, int) or self.position < 0:
            raise ConfigurationError(
                f"Position must be a non-negative integer (got {self.position!r})"
            )

    def describe(self) -> str:
        return f"'{self.title}' at position {self.position}"


@dataclass(frozen=True)
class Adjacent:
    """The two tracks must be next to each other, in either order."""
    first: str
    second: str

    def describe(self) -> str:
        return f"'{self.first}' next to '{self.second}'"


@dataclass(frozen=True)
class OnSameSide:
    """The two tracks must land on the same side of the medium."""
    first: str
    second: str

    def describe(self) -> str:
        return f"'{self.first}' on the same side as '{self.second}'"


ConstraintKind = Union[AtPosition, Adjacent, OnSameSide]
CONSTRAINT_KINDS = (AtPosition, Adjacent, OnSameSide)


@dataclass(frozen=True)
class Constraint:
    """A weighted placement preference."""
    kind: ConstraintKind
    weight: int = 1

    def __post_init__(self):
        if not isinstance(self.kind, CONSTRAINT_KINDS):
            raise ConfigurationError(f"Unknown constraint kind: {self.kind!r}")
        if isinstance(self.weight, bool) or not isinstance(self.weight, int) or self.weight < 0:
            raise ConfigurationError(
                f"Constraint weight must be a non-negative integer (got {self.weight!r})"
            )

    def describe(self) -> str:
        return f"{self.kind.describe()} (weight {self.weight})"
