"""Tests for the sequence helpers."""

import pytest

from voronoi_maze.core.exceptions import InvalidInputError
from voronoi_maze.core.sequences import (
    PriorityQueue, consecutive_pairs, indexed_search, max_by, min_by, select_index_where
)


class TestConsecutivePairs:
    """Test consecutive pair enumeration."""

    def test_open_pairs(self):
        assert consecutive_pairs([1, 2, 3, 4], closed=False) == [(1, 2), (2, 3), (3, 4)]

    def test_closed_pairs(self):
        assert consecutive_pairs([1, 2, 3, 4], closed=True) == [(1, 2), (2, 3), (3, 4), (4, 1)]

    @pytest.mark.parametrize("closed", [False, True])
    def test_empty_and_singleton(self, closed):
        """Test that short inputs yield no pairs in both modes."""
        assert consecutive_pairs([], closed=closed) == []
        assert consecutive_pairs([7], closed=closed) == []

    def test_accepts_iterables(self):
        assert consecutive_pairs("abc", closed=True) == [("a", "b"), ("b", "c"), ("c", "a")]


class TestSearch:
    """Test indexed searches."""

    def test_indexed_search_first_match(self):
        assert indexed_search([5, 8, 9, 8], lambda x: x == 8) == 1

    def test_indexed_search_sentinel(self):
        assert indexed_search([5, 8, 9], lambda x: x > 100) == -1
        assert indexed_search([], lambda x: True) == -1

    def test_select_index_where(self):
        assert select_index_where([1, 4, 6, 7, 10], lambda x: x % 2 == 0) == [1, 2, 4]


class TestMinMaxBy:
    """Test stable extreme searches."""

    def test_min_by_returns_first_of_ties(self):
        data = ["ccc", "a", "b", "dd"]
        assert min_by(data, len) == (1, "a")

    def test_max_by_returns_first_of_ties(self):
        data = ["ab", "xyz", "cd", "uvw"]
        assert max_by(data, len) == (1, "xyz")

    def test_empty_raises_without_default(self):
        with pytest.raises(InvalidInputError):
            min_by([], lambda x: x)
        with pytest.raises(InvalidInputError):
            max_by([], lambda x: x)

    def test_empty_with_default(self):
        assert min_by([], lambda x: x, default=(-1, None)) == (-1, None)


class TestPriorityQueue:
    """Test the heap-backed priority queue."""

    def test_largest_first(self):
        queue = PriorityQueue()
        for item, weight in [("a", 1.0), ("b", 3.0), ("c", 2.0)]:
            queue.add(item, weight)

        assert len(queue) == 3
        assert queue.peek() == ("b", 3.0)
        assert [queue.extract()[0] for _ in range(3)] == ["b", "c", "a"]
        assert not queue

    def test_smallest_first(self):
        queue = PriorityQueue(largest_first=False)
        queue.add("a", 1.0)
        queue.add("b", -2.0)
        assert queue.extract() == ("b", -2.0)

    def test_equal_weights_keep_insertion_order(self):
        queue = PriorityQueue()
        queue.add("first", 1.0)
        queue.add("second", 1.0)
        assert queue.extract()[0] == "first"

    def test_empty_queue_raises(self):
        queue = PriorityQueue()
        with pytest.raises(InvalidInputError):
            queue.extract()
        with pytest.raises(InvalidInputError):
            queue.peek()
