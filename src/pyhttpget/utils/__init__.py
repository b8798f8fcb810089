"""Utility functions for pyhttpget."""

from pyhttpget.utils.text import (
    BetweenIterator,
    ScanCursor,
    extract_between,
    find_all_between,
    find_between,
)

__all__ = [
    "BetweenIterator",
    "ScanCursor",
    "extract_between",
    "find_all_between",
    "find_between",
]
