"""Immutable neighbour list container."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .sites import SiteNeighbours, Sites

#: Vector arrays stored as (3, n_pairs), one column per pair.
VECTOR_LAYOUT = "vectors"

#: Vector arrays stored as (n_pairs, 3), one row per pair.
PAIR_LAYOUT = "pairs"


def _owned(values: ArrayLike | None, dtype: type) -> NDArray | None:
    """Copy an array into private, read-only storage."""
    if values is None:
        return None
    array = np.array(values, dtype=dtype, order="C")
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False, repr=False)
class NeighbourList:
    """
    Pairs of sites within a cutoff, stored as parallel arrays.

    Site indices are 1-based. Pairs are grouped by ascending source site,
    which is what makes per-site iteration possible; construction rejects
    unsorted source indices. A NeighbourList never changes after it is
    built: a new geometry or cutoff needs a new list.

    Attributes:
        cutoff: Cutoff distance the list was built with.
        i: Source site index per pair, shape (P,).
        j: Neighbour site index per pair, shape (P,).
        r: Distance per pair, shape (P,), or None.
        D: Displacement x_j - x_i (periodic-adjusted) per pair, or None.
        S: Integer cell shift per pair, or None.
        site_count: Total number of sites, including those without neighbours.
        layout: "vectors" for (3, P) vector arrays, "pairs" for (P, 3).
        bothways: True for a full list, False for a half list.
    """

    cutoff: float
    i: NDArray[np.integer]
    j: NDArray[np.integer]
    r: NDArray[np.floating] | None
    D: NDArray[np.floating] | None
    S: NDArray[np.integer] | None
    site_count: int
    layout: str = VECTOR_LAYOUT
    bothways: bool = True

    def __post_init__(self) -> None:
        """Copy arrays into owned storage and check invariants."""
        if not self.cutoff > 0:
            raise ValueError(f"cutoff must be positive, got {self.cutoff}")
        if self.site_count < 0:
            raise ValueError(f"site_count must be non-negative, got {self.site_count}")
        if self.layout not in (VECTOR_LAYOUT, PAIR_LAYOUT):
            raise ValueError(
                f"layout must be {VECTOR_LAYOUT!r} or {PAIR_LAYOUT!r}, got {self.layout!r}"
            )

        i = _owned(self.i, np.int64)
        j = _owned(self.j, np.int64)
        r = _owned(self.r, np.float64)
        D = _owned(self.D, np.float64)
        S = _owned(self.S, np.int64)

        n_pairs = len(i)
        for name, values in (("i", i), ("j", j), ("r", r)):
            if values is not None and values.shape != (n_pairs,):
                raise ValueError(
                    f"{name} shape {values.shape} incompatible with {n_pairs} pairs"
                )

        expected = (3, n_pairs) if self.layout == VECTOR_LAYOUT else (n_pairs, 3)
        for name, values in (("D", D), ("S", S)):
            if values is not None and values.shape != expected:
                raise ValueError(
                    f"{name} shape {values.shape} incompatible with {n_pairs} pairs "
                    f"in {self.layout!r} layout"
                )

        if n_pairs > 0:
            low = min(i.min(), j.min())
            high = max(i.max(), j.max())
            if low < 1 or high > self.site_count:
                raise ValueError(
                    f"site indices must lie in [1, {self.site_count}], "
                    f"found [{low}, {high}]"
                )
            if np.any(np.diff(i) < 0):
                raise ValueError("source indices i must be non-decreasing")

        # Use object.__setattr__ since dataclass is frozen
        object.__setattr__(self, "cutoff", float(self.cutoff))
        object.__setattr__(self, "site_count", int(self.site_count))
        object.__setattr__(self, "i", i)
        object.__setattr__(self, "j", j)
        object.__setattr__(self, "r", r)
        object.__setattr__(self, "D", D)
        object.__setattr__(self, "S", S)

    @property
    def pair_count(self) -> int:
        """Return the number of stored pairs."""
        return len(self.i)

    def __len__(self) -> int:
        return self.pair_count

    def __repr__(self) -> str:
        return (
            f"NeighbourList(cutoff={self.cutoff}, pair_count={self.pair_count}, "
            f"site_count={self.site_count}, layout={self.layout!r}, "
            f"bothways={self.bothways})"
        )

    def vector(self, k: int) -> NDArray[np.floating] | None:
        """
        Displacement vector of pair k, independent of layout.

        Args:
            k: Pair index (0-based position in storage).

        Returns:
            Array of shape (3,), or None if D was not requested.
        """
        if self.D is None:
            return None
        if self.layout == VECTOR_LAYOUT:
            return self.D[:, k]
        return self.D[k]

    def pairs(self) -> Iterator[tuple[int, int, float | None, NDArray | None]]:
        """
        Iterate over (i, j, r, D) for every pair in storage order.

        Each call starts a new pass.
        """
        for k in range(self.pair_count):
            r = None if self.r is None else float(self.r[k])
            yield int(self.i[k]), int(self.j[k]), r, self.vector(k)

    def sites(self) -> Sites:
        """Return the per-site view of this list."""
        return Sites(self)

    def group(self, site: int, start: int, stop: int) -> SiteNeighbours:
        """
        Neighbours of a site stored at positions [start, stop).

        Args:
            site: Site index (1-based) the pairs belong to.
            start: First pair position (0-based, inclusive).
            stop: Last pair position (0-based, exclusive).

        Returns:
            Views of j, r and D over the given pair range.
        """
        r = None if self.r is None else self.r[start:stop]
        if self.D is None:
            D = None
        elif self.layout == VECTOR_LAYOUT:
            D = self.D[:, start:stop]
        else:
            D = self.D[start:stop]
        return SiteNeighbours(site, self.j[start:stop], r, D)

    def neighbours(self, site: int) -> SiteNeighbours:
        """
        Look up the neighbours of a single site.

        Args:
            site: Site index, 1-based.

        Returns:
            Neighbours of ``site``, identical to its group in a full traversal.
        """
        if not 1 <= site <= self.site_count:
            raise IndexError(f"site {site} out of range [1, {self.site_count}]")
        start = int(np.searchsorted(self.i, site, side="left"))
        stop = int(np.searchsorted(self.i, site, side="right"))
        return self.group(site, start, stop)
