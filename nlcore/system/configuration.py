"""Particle configuration representation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .box import Box


@dataclass(frozen=True)
class Configuration:
    """
    Immutable snapshot of site positions in a (possibly periodic) cell.

    This is a pure data container. Neighbour lists only read the site count
    from it; everything else is handed to a pair enumerator untouched.

    Attributes:
        positions: Site positions, shape (N, 3).
        box: Simulation cell, or None for an open (non-periodic) system.
        species: Optional chemical symbol per site.
    """

    positions: NDArray[np.floating]
    box: Box | None = None
    species: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        """Validate and freeze arrays."""
        positions = np.array(self.positions, dtype=np.float64)
        if positions.ndim == 1 and positions.size == 0:
            positions = positions.reshape(0, 3)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(f"positions must have shape (N, 3), got {positions.shape}")
        positions.flags.writeable = False
        object.__setattr__(self, "positions", positions)

        if self.species is not None:
            species = tuple(str(s) for s in self.species)
            if len(species) != len(positions):
                raise ValueError(
                    f"species length {len(species)} incompatible with "
                    f"{len(positions)} sites"
                )
            object.__setattr__(self, "species", species)

    @classmethod
    def create(
        cls,
        positions: ArrayLike,
        box: Box | None = None,
        species: Sequence[str] | None = None,
    ) -> Configuration:
        """
        Create a Configuration from array-like positions.

        Args:
            positions: Site positions, shape (N, 3).
            box: Simulation cell. Defaults to an open system.
            species: Chemical symbol per site.

        Returns:
            New Configuration instance.
        """
        return cls(
            positions=np.asarray(positions, dtype=np.float64),
            box=box,
            species=tuple(species) if species is not None else None,
        )

    @property
    def size(self) -> int:
        """Return number of sites."""
        return len(self.positions)

    @property
    def pbc(self) -> tuple[bool, bool, bool]:
        """Return per-axis periodicity (all False without a box)."""
        if self.box is None:
            return (False, False, False)
        return self.box.pbc

    def __len__(self) -> int:
        return self.size
