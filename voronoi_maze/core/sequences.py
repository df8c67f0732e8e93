"""
Small sequence helpers shared by the geometry and graph modules.

This module provides:
- Indexed searches (first match, all matches)
- Consecutive pair enumeration (open or closed)
- Stable min/max search by key
- A heap-backed priority queue with max- or min-first extraction
"""

import heapq
import itertools
from typing import Any, Callable, List, Sequence, Tuple, TypeVar

from .exceptions import InvalidInputError

T = TypeVar("T")

_MISSING = object()


def indexed_search(seq: Sequence[T], predicate: Callable[[T], bool]) -> int:
    """Return the index of the first element matching predicate, or -1."""
    for i, item in enumerate(seq):
        if predicate(item):
            return i
    return -1


def select_index_where(seq: Sequence[T], predicate: Callable[[T], bool]) -> List[int]:
    """Return the indices of all elements matching predicate."""
    return [i for i, item in enumerate(seq) if predicate(item)]


def consecutive_pairs(seq: Sequence[T], closed: bool = False) -> List[Tuple[T, T]]:
    """
    Enumerate all consecutive pairs of a sequence.

    For [1, 2, 3, 4] this yields [(1, 2), (2, 3), (3, 4)] when closed is
    False, and additionally (4, 1) when closed is True. Empty and single
    element inputs give no pairs.

    Args:
        seq: Input sequence
        closed: Whether to add the pair (last, first)

    Returns:
        List of (previous, next) tuples
    """
    items = list(seq)
    if len(items) < 2:
        return []

    pairs = list(zip(items, items[1:]))
    if closed:
        pairs.append((items[-1], items[0]))
    return pairs


def _extreme_by(seq: Sequence[T], key: Callable[[T], Any], better: Callable[[Any, Any], bool],
                default: Any) -> Tuple[int, T]:
    best_index = -1
    best_item = None
    best_key = None

    for i, item in enumerate(seq):
        k = key(item)
        if best_index == -1 or better(k, best_key):
            best_index, best_item, best_key = i, item, k

    if best_index == -1:
        if default is _MISSING:
            raise InvalidInputError("Sequence contains no elements")
        return default
    return best_index, best_item


def min_by(seq: Sequence[T], key: Callable[[T], Any], default: Any = _MISSING) -> Tuple[int, T]:
    """
    Find the first element with the smallest key.

    Args:
        seq: Input sequence
        key: Selector computing the comparison key
        default: Returned instead of raising when seq is empty

    Returns:
        Tuple of (index, element)

    Raises:
        InvalidInputError: If seq is empty and no default is given
    """
    return _extreme_by(seq, key, lambda a, b: a < b, default)


def max_by(seq: Sequence[T], key: Callable[[T], Any], default: Any = _MISSING) -> Tuple[int, T]:
    """Find the first element with the largest key. See min_by."""
    return _extreme_by(seq, key, lambda a, b: a > b, default)


class PriorityQueue:
    """
    Priority queue over arbitrary items.

    Extracts the largest weight first by default, or the smallest with
    largest_first=False. Equal weights come out in insertion order.
    """

    def __init__(self, largest_first: bool = True):
        self.largest_first = largest_first
        self._heap = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def add(self, item: Any, weight: float) -> None:
        """Insert item with the given weight."""
        key = -weight if self.largest_first else weight
        heapq.heappush(self._heap, (key, next(self._counter), item))

    def peek(self) -> Tuple[Any, float]:
        """Return the next (item, weight) without removing it."""
        if not self._heap:
            raise InvalidInputError("Priority queue is empty")
        key, _, item = self._heap[0]
        return item, (-key if self.largest_first else key)

    def extract(self) -> Tuple[Any, float]:
        """Remove and return the next (item, weight)."""
        if not self._heap:
            raise InvalidInputError("Priority queue is empty")
        key, _, item = heapq.heappop(self._heap)
        return item, (-key if self.largest_first else key)
