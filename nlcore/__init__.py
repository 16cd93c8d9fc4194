"""
nlcore - Neighbour lists for pairwise interactions.

Builds the list of site pairs within a cutoff of a (possibly periodic)
configuration and serves it pair by pair or grouped per site.

Quick Start:
    >>> import numpy as np
    >>> from nlcore import Box, Configuration, build
    >>> config = Configuration.create(np.random.rand(8, 3) * 4.0, box=Box.cubic(4.0))
    >>> nlist = build(config, cutoff=1.5)
    >>> for site, j, r, D in nlist.sites():
    ...     pass
"""

__version__ = "0.1.0"

from .enumerators import (
    DEFAULT_QUANTITIES,
    QUANTITY_LETTERS,
    ASEEnumerator,
    BruteForceEnumerator,
    PairEnumerator,
)
from .neighbourlists import (
    ListBuilder,
    NeighbourList,
    SiteIterator,
    SiteNeighbours,
    Sites,
    build,
)
from .system import Box, Configuration

__all__ = [
    "build",
    "ListBuilder",
    "NeighbourList",
    "SiteIterator",
    "SiteNeighbours",
    "Sites",
    "PairEnumerator",
    "BruteForceEnumerator",
    "ASEEnumerator",
    "Box",
    "Configuration",
    "QUANTITY_LETTERS",
    "DEFAULT_QUANTITIES",
]
