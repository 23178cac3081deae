"""
Utility functions shared across modules: limit handling and ordered candidate lists.
"""

from typing import Callable, Iterable, List, Optional, TypeVar

from nodeimport.core.settings import DEFAULT_LIMIT

T = TypeVar("T")


def normalize_limit(limit: Optional[int]) -> int:
    """
    Return the effective row limit. Missing or non-positive values fall back to DEFAULT_LIMIT.
    """
    if limit is None or limit <= 0:
        return DEFAULT_LIMIT
    return limit


def ordered_unique(*groups: Iterable[T]) -> List[T]:
    """
    Merge candidate groups in priority order, keeping the first occurrence of each item.

    Falsy items (empty names, None) are dropped.
    """
    merged: List[T] = []
    seen = set()
    for group in groups:
        for item in group:
            if not item or item in seen:
                continue
            seen.add(item)
            merged.append(item)
    return merged


def first_match(items: Iterable[T], predicate: Callable[[T], bool]) -> Optional[T]:
    """Return the first item satisfying predicate, or None."""
    for item in items:
        if predicate(item):
            return item
    return None
