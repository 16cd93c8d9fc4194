"""Periodic cell representation."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import ArrayLike, NDArray


@dataclass(frozen=True)
class Box:
    """
    Simulation cell with per-axis periodicity.

    Supports orthorhombic and triclinic cells via a 3x3 matrix representation.
    For orthorhombic cells, the matrix is diagonal with box lengths on the diagonal.

    Attributes:
        vectors: 3x3 array where rows are cell vectors [a, b, c].
        pbc: Periodic flag for each cell vector.
    """

    vectors: NDArray[np.floating]
    pbc: tuple[bool, bool, bool] = field(default=(True, True, True))

    def __post_init__(self) -> None:
        """Validate and convert vectors to proper shape."""
        vectors = np.array(self.vectors, dtype=np.float64)
        if vectors.shape == (3,):
            # Orthorhombic box specified by lengths
            vectors = np.diag(vectors)
        if vectors.shape != (3, 3):
            raise ValueError(f"Box vectors must be (3,) or (3, 3), got {vectors.shape}")

        pbc = np.broadcast_to(np.asarray(self.pbc, dtype=bool), (3,))
        pbc = tuple(bool(p) for p in pbc)

        # Only the periodic rows must span; open axes may be zero or flat
        periodic = vectors[np.array(pbc)]
        if len(periodic) and np.linalg.matrix_rank(periodic) < len(periodic):
            raise ValueError("Periodic box requires linearly independent cell vectors")

        vectors.flags.writeable = False
        # Use object.__setattr__ since dataclass is frozen
        object.__setattr__(self, "vectors", vectors)
        object.__setattr__(self, "pbc", pbc)

    @classmethod
    def orthorhombic(
        cls, lx: float, ly: float, lz: float, pbc: ArrayLike = True
    ) -> Box:
        """Create an orthorhombic box with given side lengths."""
        return cls(np.array([lx, ly, lz]), pbc=pbc)

    @classmethod
    def cubic(cls, length: float, pbc: ArrayLike = True) -> Box:
        """Create a cubic box with given side length."""
        return cls.orthorhombic(length, length, length, pbc=pbc)

    @classmethod
    def triclinic(cls, vectors: ArrayLike, pbc: ArrayLike = True) -> Box:
        """Create a triclinic box from 3x3 matrix of box vectors."""
        return cls(np.asarray(vectors), pbc=pbc)

    @property
    def is_periodic(self) -> bool:
        """Check if any axis is periodic."""
        return any(self.pbc)

    @property
    def complete_vectors(self) -> NDArray[np.floating]:
        """
        Return a non-singular cell that keeps the periodic vectors.

        Open axes given as zero or flat vectors (a slab or a wire read from
        ASE, say) are replaced by unit vectors orthogonal to the periodic
        ones. A cell that already spans space is returned unchanged.
        """
        vectors = self.vectors.copy()
        if np.linalg.matrix_rank(vectors) == 3:
            return vectors

        periodic = [axis for axis in range(3) if self.pbc[axis]]
        if len(periodic) == 0:
            return np.eye(3)
        if len(periodic) == 1:
            (p,) = periodic
            v = vectors[p]
            helper = np.eye(3)[np.argmin(np.abs(v))]
            e1 = np.cross(v, helper)
            e1 /= np.linalg.norm(e1)
            e2 = np.cross(v, e1)
            e2 /= np.linalg.norm(e2)
            vectors[(p + 1) % 3] = e1
            vectors[(p + 2) % 3] = e2
            return vectors

        (k,) = [axis for axis in range(3) if not self.pbc[axis]]
        normal = np.cross(vectors[(k + 1) % 3], vectors[(k + 2) % 3])
        vectors[k] = normal / np.linalg.norm(normal)
        return vectors

    @property
    def plane_spacings(self) -> NDArray[np.floating]:
        """
        Return the distance between opposite faces of the cell.

        For cell vector a the spacing is V / |b x c|, and cyclically for b, c.
        For an orthorhombic box this equals the box lengths. Open axes are
        measured on the completed cell.
        """
        vectors = self.complete_vectors
        a, b, c = vectors
        areas = np.linalg.norm(
            np.array([np.cross(b, c), np.cross(c, a), np.cross(a, b)]), axis=1
        )
        return np.abs(np.linalg.det(vectors)) / areas

    def fractional(self, positions: ArrayLike) -> NDArray[np.floating]:
        """
        Convert Cartesian positions to fractional coordinates.

        Args:
            positions: Positions array of shape (N, 3).

        Returns:
            Fractional coordinates of shape (N, 3), relative to the completed cell.
        """
        positions = np.asarray(positions, dtype=np.float64)
        inv_vectors = np.linalg.inv(self.complete_vectors)
        return positions @ inv_vectors

    def n_images(
        self, cutoff: float, extent: ArrayLike | None = None
    ) -> NDArray[np.integer]:
        """
        Number of periodic images needed along each axis to cover a cutoff.

        Args:
            cutoff: Interaction cutoff distance.
            extent: Spread of the fractional coordinates along each axis.
                Positions that are not wrapped into the cell need extra images.

        Returns:
            Integer array of shape (3,); zero along non-periodic axes.
        """
        if not self.is_periodic:
            return np.zeros(3, dtype=np.int64)
        extent = np.zeros(3) if extent is None else np.asarray(extent, dtype=np.float64)
        counts = np.ceil(cutoff / self.plane_spacings + extent).astype(np.int64)
        return np.where(self.pbc, counts, 0)

    def shift_vectors(
        self, cutoff: float, extent: ArrayLike | None = None
    ) -> NDArray[np.integer]:
        """
        Enumerate integer cell shifts that can hold a neighbour within cutoff.

        Args:
            cutoff: Interaction cutoff distance.
            extent: Spread of the fractional coordinates along each axis.

        Returns:
            Array of shape (n_shifts, 3), the zero shift first.
        """
        nx, ny, nz = self.n_images(cutoff, extent)
        grid = np.mgrid[-nx : nx + 1, -ny : ny + 1, -nz : nz + 1].reshape(3, -1).T
        # Put the zero shift first so that in-cell pairs come out ahead of images
        order = np.argsort(np.abs(grid).sum(axis=1), kind="stable")
        return grid[order].astype(np.int64)
