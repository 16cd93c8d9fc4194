"""Per-site iteration over a neighbour list."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, NamedTuple

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from .container import NeighbourList


class SiteNeighbours(NamedTuple):
    """
    Neighbours of one site.

    The arrays are read-only views into the owning NeighbourList.
    ``r`` and ``D`` are None when the list was built without them.
    """

    site: int
    j: NDArray[np.integer]
    r: NDArray[np.floating] | None
    D: NDArray | None


class SiteIterator:
    """
    Single-pass scan grouping the pair arrays by source site.

    Each step moves to the next site and consumes every pair whose source
    index is at most that site. This relies on the source indices being
    non-decreasing, which NeighbourList guarantees at construction.

    A full traversal yields exactly ``site_count`` groups, sites 1, 2, ...,
    in order, and costs O(pair_count + site_count). Sites without neighbours
    yield empty groups.

    Attributes:
        site: Last site yielded (1-based), 0 before the first step.
        cursor: Number of pairs consumed so far.
    """

    def __init__(self, nlist: NeighbourList) -> None:
        """
        Initialize iterator at the start of a neighbour list.

        Args:
            nlist: Neighbour list to traverse.
        """
        self._nlist = nlist
        self.site = 0
        self.cursor = 0

    @property
    def done(self) -> bool:
        """Check if every site has been yielded."""
        return self.site >= self._nlist.site_count

    def advance(self) -> SiteNeighbours | None:
        """
        Step to the next site.

        Returns:
            Neighbours of the next site, or None once all sites are done.
        """
        if self.done:
            return None

        source = self._nlist.i
        n_pairs = self._nlist.pair_count

        self.site += 1
        start = self.cursor
        while self.cursor < n_pairs and source[self.cursor] <= self.site:
            self.cursor += 1

        return self._nlist.group(self.site, start, self.cursor)

    def __iter__(self) -> Iterator[SiteNeighbours]:
        return self

    def __next__(self) -> SiteNeighbours:
        group = self.advance()
        if group is None:
            raise StopIteration
        return group

    def __length_hint__(self) -> int:
        return self._nlist.site_count - self.site


class Sites:
    """
    Restartable view of a neighbour list as per-site groups.

    Every ``iter()`` starts a fresh SiteIterator, so several traversals of
    the same list can run side by side.
    """

    def __init__(self, nlist: NeighbourList) -> None:
        self.nlist = nlist

    def __len__(self) -> int:
        return self.nlist.site_count

    def __iter__(self) -> SiteIterator:
        return SiteIterator(self.nlist)
