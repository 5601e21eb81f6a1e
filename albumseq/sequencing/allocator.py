"""
Side allocation

Greedy sequential packing of an ordering into the sides of a medium. Tracks
are never moved out of their relative position; the packing quality depends
entirely on the ordering, which is why every ordering gets evaluated.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from albumseq.sequencing.models import Medium, Track, Tracklist, normalize_title


@dataclass(frozen=True)
class SideAllocation:
    """Tracks per side, in play order, and whether the whole ordering fit."""
    sides: Tuple[Tuple[Track, ...], ...]
    feasible: bool

    @property
    def side_durations(self) -> Tuple[float, ...]:
        return tuple(sum(track.duration for track in side) for side in self.sides)

    @property
    def placed_count(self) -> int:
        return sum(len(side) for side in self.sides)

    def side_index_of(self, title: str) -> Optional[int]:
        """Side holding the first track matching ``title``, or None."""
        key = normalize_title(title)
        for side_index, side in enumerate(self.sides):
            for track in side:
                if normalize_title(track.title) == key:
                    return side_index
        return None


def allocate_sides(ordering: Tracklist, medium: Medium) -> SideAllocation:
    """
    Split an ordering into sides.

    Each track goes on the current side if the side's running duration stays
    within ``medium.max_duration_per_side``; otherwise the side is closed and
    the track opens the next one. The ordering is infeasible as soon as a
    track is longer than a whole side or no side is left to open. Tracks
    after that point are not placed.

    Args:
        ordering: Tracks in play order
        medium: Target medium

    Returns:
        SideAllocation with the (possibly partial) partition
    """
    capacity = medium.max_duration_per_side
    sides: List[Tuple[Track, ...]] = []
    current: List[Track] = []
    used = 0.0

    for track in ordering:
        if track.duration > capacity:
            return SideAllocation(sides=tuple(sides), feasible=False)

        if used + track.duration <= capacity:
            current.append(track)
            used += track.duration
            continue

        sides.append(tuple(current))
        if len(sides) >= medium.sides:
            return SideAllocation(sides=tuple(sides), feasible=False)

        current = [track]
        used = track.duration

    if current:
        sides.append(tuple(current))

    return SideAllocation(sides=tuple(sides), feasible=True)


def fits(ordering: Tracklist, medium: Medium) -> bool:
    """Whether the ordering can be packed onto the medium."""
    return allocate_sides(ordering, medium).feasible
