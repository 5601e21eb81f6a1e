"""
Exhaustive ordering enumeration

Orderings are produced lazily, one at a time, in lexicographic order of the
track indices. Callers score and discard each ordering, so memory stays flat
while the number of orderings grows as N!.
"""

import math
from itertools import permutations
from typing import Iterator, Optional, Sequence, Tuple

from albumseq.sequencing.models import Track, Tracklist


def count_orderings(track_count: int) -> int:
    """Number of orderings of ``track_count`` position-distinct tracks."""
    return math.factorial(track_count)


def iter_index_permutations(
    n: int,
    first: Optional[int] = None
) -> Iterator[Tuple[int, ...]]:
    """
    Yield every permutation of ``range(n)`` exactly once.

    Args:
        n: Number of positions
        first: When given, only permutations starting with this index are
            produced. Concatenating the results for ``first = 0 .. n-1``
            reproduces the unrestricted sequence in the same order.

    Yields:
        Index tuples in lexicographic order. ``n == 0`` yields one empty tuple.
    """
    if first is None:
        yield from permutations(range(n))
        return

    if not 0 <= first < n:
        raise IndexError(f"Leading index {first} out of range for {n} tracks")

    rest = [i for i in range(n) if i != first]
    for tail in permutations(rest):
        yield (first,) + tail


def iter_orderings(
    tracks: Sequence[Track],
    first: Optional[int] = None
) -> Iterator[Tracklist]:
    """
    Yield every ordering of ``tracks`` as an independent Tracklist.

    Tracks are treated as position-distinct, so value-equal tracks still
    produce N! orderings. Each call starts a fresh traversal.
    """
    pool = tuple(tracks)
    for indices in iter_index_permutations(len(pool), first):
        yield Tracklist(tuple(pool[i] for i in indices))
