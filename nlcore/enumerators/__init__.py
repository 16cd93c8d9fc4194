"""Pair enumerator implementations."""

from .ase_enumerator import ASEEnumerator
from .base import DEFAULT_QUANTITIES, QUANTITY_LETTERS, PairEnumerator, check_request
from .brute import BruteForceEnumerator

__all__ = [
    "PairEnumerator",
    "BruteForceEnumerator",
    "ASEEnumerator",
    "QUANTITY_LETTERS",
    "DEFAULT_QUANTITIES",
    "check_request",
]
