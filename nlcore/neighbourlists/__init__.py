"""Neighbour list container, builder and per-site iteration."""

from .builder import ListBuilder, build, to_one_based, to_pair_layout, to_vector_layout
from .container import PAIR_LAYOUT, VECTOR_LAYOUT, NeighbourList
from .sites import SiteIterator, SiteNeighbours, Sites

__all__ = [
    "NeighbourList",
    "ListBuilder",
    "build",
    "SiteIterator",
    "SiteNeighbours",
    "Sites",
    "to_one_based",
    "to_vector_layout",
    "to_pair_layout",
    "VECTOR_LAYOUT",
    "PAIR_LAYOUT",
]
