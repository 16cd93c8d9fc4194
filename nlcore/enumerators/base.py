"""Base interface for pair enumerators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from ..system import Configuration

#: Quantity letters understood by every enumerator.
QUANTITY_LETTERS = "ijdDS"

#: Quantities requested when the caller does not specify any.
DEFAULT_QUANTITIES = "ijdDS"


def check_request(cutoff: float, quantities: str) -> None:
    """
    Validate an enumeration request.

    Args:
        cutoff: Interaction cutoff distance.
        quantities: Requested quantity letters.

    Raises:
        ValueError: If the cutoff is not a positive finite number, or a
            quantity letter is unknown.
    """
    if not np.isfinite(cutoff) or cutoff <= 0:
        raise ValueError(f"cutoff must be a positive finite number, got {cutoff}")
    if not quantities:
        raise ValueError("at least one quantity must be requested")
    unknown = sorted(set(quantities) - set(QUANTITY_LETTERS))
    if unknown:
        raise ValueError(
            f"unsupported quantities {''.join(unknown)!r}, "
            f"expected letters from {QUANTITY_LETTERS!r}"
        )


class PairEnumerator(ABC):
    """
    Abstract base class for pairwise enumerators.

    An enumerator discovers all site pairs of a configuration that lie within
    a cutoff and returns one array per requested quantity letter:

    - ``i``, ``j``: 0-based source and neighbour site indices, shape (P,).
    - ``d``: scalar distances, shape (P,).
    - ``D``: displacement vectors x_j + S @ cell - x_i, shape (P, 3).
    - ``S``: integer cell shifts, shape (P, 3).

    No ordering of the pairs is promised.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return enumerator name."""
        ...

    @property
    @abstractmethod
    def bothways(self) -> bool:
        """
        Whether the output is a full list.

        True if both (i, j) and (j, i) are reported for every pair,
        False if each pair appears once.
        """
        ...

    def enumerate(
        self, config: Configuration, cutoff: float, quantities: str
    ) -> tuple[NDArray, ...]:
        """
        Find all pairs within cutoff.

        Args:
            config: Configuration to search.
            cutoff: Interaction cutoff distance.
            quantities: Requested quantity letters, e.g. "ijdDS".

        Returns:
            One array per letter of ``quantities``, in the same order.
        """
        check_request(cutoff, quantities)
        return self._enumerate(config, float(cutoff), quantities)

    @abstractmethod
    def _enumerate(
        self, config: Configuration, cutoff: float, quantities: str
    ) -> tuple[NDArray, ...]:
        """Compute the requested arrays for an already validated request."""
        ...
