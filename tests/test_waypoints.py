"""Tests for waypoint placement."""

import itertools

import pytest

from voronoi_maze.core.alea_prng import AleaPRNG
from voronoi_maze.core.distances import compute_distances
from voronoi_maze.core.exceptions import InvalidInputError, PlacementExhausted
from voronoi_maze.core.waypoints import place_waypoints, split_start


def path_distances(n):
    return compute_distances(n, [(i, i + 1) for i in range(n - 1)])


class TestPlaceWaypoints:
    """Test greedy placement with retries."""

    def test_spacing_is_respected(self):
        distances = path_distances(7)
        waypoints = place_waypoints(distances, 3, 3, AleaPRNG("spacing"))

        assert len(set(waypoints)) == 3
        for a, b in itertools.combinations(waypoints, 2):
            assert distances[a, b] >= 3

    def test_exhausts_when_graph_too_small(self):
        """A star has diameter 2, so distance 3 can never be met."""
        distances = compute_distances(4, [(0, 1), (0, 2), (0, 3)])

        with pytest.raises(PlacementExhausted) as excinfo:
            place_waypoints(distances, 2, 3, AleaPRNG("star"), retry_budget=5)
        assert excinfo.value.attempts == 5

    def test_single_waypoint(self):
        waypoints = place_waypoints(path_distances(4), 1, 3, AleaPRNG("one"))
        assert len(waypoints) == 1
        assert 0 <= waypoints[0] < 4

    def test_deterministic(self):
        distances = path_distances(10)
        a = place_waypoints(distances, 3, 2, AleaPRNG("repeat"))
        b = place_waypoints(distances, 3, 2, AleaPRNG("repeat"))
        assert a == b

    def test_invalid_arguments(self):
        with pytest.raises(InvalidInputError):
            place_waypoints(path_distances(4), 0, 1, AleaPRNG("zero"))
        with pytest.raises(InvalidInputError):
            place_waypoints(compute_distances(0, []), 1, 1, AleaPRNG("empty"))


class TestSplitStart:
    """Test start/target separation."""

    def test_split(self):
        assert split_start([4, 1, 7]) == (4, [1, 7])
        assert split_start([2]) == (2, [])

    def test_empty(self):
        with pytest.raises(InvalidInputError):
            split_start([])
