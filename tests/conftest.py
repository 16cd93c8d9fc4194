"""Shared fixtures for neighbour list tests."""

import numpy as np
import pytest

from nlcore.enumerators import PairEnumerator
from nlcore.system import Box, Configuration


class FixedEnumerator(PairEnumerator):
    """
    Enumerator returning pre-set arrays, ignoring the geometry.

    Arrays are given with 0-based indices and pair-major vectors, exactly
    as a real enumerator would return them.
    """

    def __init__(self, bothways=True, **arrays):
        self._bothways = bothways
        self.arrays = {q: np.asarray(v) for q, v in arrays.items()}
        self.calls = []

    @property
    def name(self):
        return "fixed"

    @property
    def bothways(self):
        return self._bothways

    def _enumerate(self, config, cutoff, quantities):
        self.calls.append((config, cutoff, quantities))
        return tuple(self.arrays[q] for q in quantities)


def fixed_arrays(i, j):
    """Build consistent d, D, S arrays for 0-based index lists."""
    i = np.asarray(i)
    j = np.asarray(j)
    D = np.column_stack([j - i, 2.0 * (j - i), np.arange(len(i), dtype=float)])
    return {
        "i": i,
        "j": j,
        "d": np.linalg.norm(D, axis=1),
        "D": D,
        "S": np.column_stack([i, j, np.zeros_like(i)]),
    }


@pytest.fixture
def make_enumerator():
    """Factory for FixedEnumerator instances."""

    def _make(i, j, bothways=True, **overrides):
        arrays = fixed_arrays(i, j)
        arrays.update(overrides)
        return FixedEnumerator(bothways=bothways, **arrays)

    return _make


@pytest.fixture
def four_sites():
    """Open configuration with four sites on a line."""
    positions = np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [2.0, 0.0, 0.0],
            [3.0, 0.0, 0.0],
        ]
    )
    return Configuration.create(positions)


@pytest.fixture
def random_periodic():
    """Random configuration in a periodic triclinic cell."""
    rng = np.random.default_rng(42)
    box = Box.triclinic(
        [
            [5.0, 0.0, 0.0],
            [1.0, 5.0, 0.0],
            [0.5, 0.5, 5.0],
        ]
    )
    frac = rng.uniform(0, 1, (20, 3))
    return Configuration.create(frac @ box.vectors, box=box)
