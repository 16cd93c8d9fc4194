"""Brute-force pair enumerator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .base import PairEnumerator

if TYPE_CHECKING:
    from ..system import Configuration

logger = logging.getLogger(__name__)


class BruteForceEnumerator(PairEnumerator):
    """
    All-pairs search over every periodic image within the cutoff.

    Uses O(N^2) distance calculations per image. The cutoff may exceed half
    the box, in which case a site can see several images of the same
    neighbour (and of itself), each reported with its own shift.

    The output is a full list: (i, j, S) and (j, i, -S) are both present.
    A site is never paired with itself at zero shift. Pairs come out ordered
    by source site.
    """

    @property
    def name(self) -> str:
        """Return enumerator name."""
        return "brute-force"

    @property
    def bothways(self) -> bool:
        """Brute-force search always reports full lists."""
        return True

    def _shifts_and_cell(
        self, config: Configuration, cutoff: float
    ) -> tuple[NDArray[np.integer], NDArray[np.floating]]:
        """Return candidate cell shifts and the cell matrix."""
        box = config.box
        if box is None or not box.is_periodic or config.size == 0:
            cell = np.zeros((3, 3)) if box is None else box.vectors
            return np.zeros((1, 3), dtype=np.int64), cell

        frac = box.fractional(config.positions)
        extent = frac.max(axis=0) - frac.min(axis=0)
        return box.shift_vectors(cutoff, extent), box.vectors

    def _enumerate(
        self, config: Configuration, cutoff: float, quantities: str
    ) -> tuple[NDArray, ...]:
        """
        Find all pairs within cutoff.

        Args:
            config: Configuration to search.
            cutoff: Interaction cutoff distance.
            quantities: Requested quantity letters.

        Returns:
            One array per requested letter.
        """
        positions = config.positions
        shifts, cell = self._shifts_and_cell(config, cutoff)

        first, second, distances, vectors, images = [], [], [], [], []

        for shift in shifts:
            # dr[a, b] = x_b + shift @ cell - x_a
            offset = shift @ cell
            dr = positions[np.newaxis, :, :] + offset - positions[:, np.newaxis, :]
            r = np.linalg.norm(dr, axis=-1)

            mask = r < cutoff
            if not shift.any():
                np.fill_diagonal(mask, False)

            i_idx, j_idx = np.nonzero(mask)
            first.append(i_idx)
            second.append(j_idx)
            distances.append(r[i_idx, j_idx])
            vectors.append(dr[i_idx, j_idx].reshape(-1, 3))
            images.append(np.tile(shift, (len(i_idx), 1)))

        i = np.concatenate(first).astype(np.int64)
        order = np.argsort(i, kind="stable")

        results = {
            "i": i[order],
            "j": np.concatenate(second).astype(np.int64)[order],
            "d": np.concatenate(distances)[order],
            "D": np.concatenate(vectors)[order],
            "S": np.concatenate(images).astype(np.int64)[order],
        }

        logger.debug(
            "%s: %d sites, %d images, %d pairs within %g",
            self.name,
            config.size,
            len(shifts),
            len(i),
            cutoff,
        )

        return tuple(results[q] for q in quantities)
