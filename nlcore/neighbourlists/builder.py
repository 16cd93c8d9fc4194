"""Neighbour list construction from a pair enumerator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..enumerators.base import DEFAULT_QUANTITIES
from ..enumerators.brute import BruteForceEnumerator
from .container import PAIR_LAYOUT, VECTOR_LAYOUT, NeighbourList

if TYPE_CHECKING:
    from ..enumerators import PairEnumerator
    from ..system import Configuration

logger = logging.getLogger(__name__)


def to_one_based(indices: ArrayLike) -> NDArray[np.integer]:
    """Convert 0-based site indices to 1-based ones."""
    return np.asarray(indices, dtype=np.int64) + 1


def to_vector_layout(values: ArrayLike) -> NDArray:
    """
    Convert a pair-major (P, 3) array into a (3, P) array of column vectors.

    Args:
        values: One row per pair.

    Returns:
        C-contiguous array with one column per pair.
    """
    values = np.asarray(values)
    if values.ndim != 2 or values.shape[1] != 3:
        raise ValueError(f"expected shape (n_pairs, 3), got {values.shape}")
    return np.ascontiguousarray(values.T)


def to_pair_layout(values: ArrayLike) -> NDArray:
    """
    Convert a (3, P) array of column vectors back to pair-major rows.

    Args:
        values: One column per pair.

    Returns:
        C-contiguous array with one row per pair.
    """
    values = np.asarray(values)
    if values.ndim != 2 or values.shape[0] != 3:
        raise ValueError(f"expected shape (3, n_pairs), got {values.shape}")
    return np.ascontiguousarray(values.T)


def is_grouped(indices: NDArray[np.integer]) -> bool:
    """Check that source indices are non-decreasing."""
    return bool(np.all(np.diff(indices) >= 0))


class ListBuilder:
    """
    Builds NeighbourList instances from a pair enumerator.

    The enumerator is called once per build. Its output is converted to
    1-based indices, stably sorted by source site when needed, and handed to
    a new NeighbourList that keeps its own copies.

    Example:
        builder = ListBuilder(BruteForceEnumerator())
        nlist = builder.build(config, cutoff=2.5)

        for site, j, r, D in nlist.sites():
            ...

    Attributes:
        enumerator: Pair enumerator used for every build.
        quantities: Default quantity letters.
        convert_arrays: Default for vector layout conversion.
    """

    def __init__(
        self,
        enumerator: PairEnumerator,
        quantities: str = DEFAULT_QUANTITIES,
        convert_arrays: bool = True,
    ) -> None:
        """
        Initialize builder.

        Args:
            enumerator: Pair enumerator used for every build.
            quantities: Quantity letters requested when build() gets none.
            convert_arrays: Layout conversion used when build() gets none.
        """
        self.enumerator = enumerator
        self.quantities = quantities
        self.convert_arrays = convert_arrays

    def build(
        self,
        config: Configuration,
        cutoff: float,
        quantities: str | None = None,
        convert_arrays: bool | None = None,
    ) -> NeighbourList:
        """
        Build a neighbour list from scratch.

        Args:
            config: Configuration to search.
            cutoff: Interaction cutoff distance.
            quantities: Quantity letters, must start with "ij".
            convert_arrays: Store D and S as (3, P) column vectors if True,
                or keep the enumerator's (P, 3) rows if False.

        Returns:
            New NeighbourList.

        Raises:
            ValueError: If quantities do not start with "ij". Errors raised by
                the enumerator propagate unchanged.
        """
        if quantities is None:
            quantities = self.quantities
        if convert_arrays is None:
            convert_arrays = self.convert_arrays

        if not quantities.startswith("ij"):
            raise ValueError(f"quantities must start with 'ij', got {quantities!r}")

        results = self.enumerator.enumerate(config, cutoff, quantities)
        arrays = dict(zip(quantities, results))

        arrays["i"] = to_one_based(arrays["i"])
        arrays["j"] = to_one_based(arrays["j"])

        if not is_grouped(arrays["i"]):
            order = np.argsort(arrays["i"], kind="stable")
            arrays = {q: np.asarray(values)[order] for q, values in arrays.items()}

        if convert_arrays:
            for q in "DS":
                if q in arrays:
                    arrays[q] = to_vector_layout(arrays[q])

        nlist = NeighbourList(
            cutoff=cutoff,
            i=arrays["i"],
            j=arrays["j"],
            r=arrays.get("d"),
            D=arrays.get("D"),
            S=arrays.get("S"),
            site_count=config.size,
            layout=VECTOR_LAYOUT if convert_arrays else PAIR_LAYOUT,
            bothways=self.enumerator.bothways,
        )

        logger.debug(
            "built neighbour list with %s: %d pairs over %d sites (cutoff %g)",
            self.enumerator.name,
            nlist.pair_count,
            nlist.site_count,
            cutoff,
        )
        return nlist


def build(
    config: Configuration,
    cutoff: float,
    quantities: str = DEFAULT_QUANTITIES,
    convert_arrays: bool = True,
    enumerator: PairEnumerator | None = None,
) -> NeighbourList:
    """
    Build a neighbour list in one call.

    Args:
        config: Configuration to search.
        cutoff: Interaction cutoff distance.
        quantities: Quantity letters, must start with "ij".
        convert_arrays: Store D and S as (3, P) column vectors.
        enumerator: Pair enumerator. Defaults to BruteForceEnumerator.

    Returns:
        New NeighbourList.
    """
    if enumerator is None:
        enumerator = BruteForceEnumerator()
    builder = ListBuilder(enumerator)
    return builder.build(config, cutoff, quantities, convert_arrays)
