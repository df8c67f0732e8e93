"""Tests for spanning tree maze generation."""

from collections import deque

import pytest

from voronoi_maze.core.alea_prng import AleaPRNG
from voronoi_maze.core.exceptions import InvalidInputError
from voronoi_maze.core.maze import build_spanning_tree
from voronoi_maze.core.serial_source import SerialNumberSource
from voronoi_maze.core.site_graph import SiteGraph


def reachable_sites(maze, start):
    """BFS over passable edges only."""
    seen = {start}
    queue = deque([start])
    while queue:
        site = queue.popleft()
        for neighbor in maze.exits(site):
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


class TestSpanningTree:
    """Test the structural guarantees of the maze."""

    @pytest.mark.parametrize("seed", ["maze_a", "maze_b", "maze_c"])
    def test_is_spanning_tree(self, random_graph, seed):
        maze = build_spanning_tree(random_graph, 0, AleaPRNG(seed))

        assert len(maze.passable) == random_graph.num_sites - 1
        # N - 1 edges reaching all N sites means no cycle
        assert reachable_sites(maze, 0) == set(range(random_graph.num_sites))

    def test_visit_order(self, random_graph):
        maze = build_spanning_tree(random_graph, 3, AleaPRNG("order"))

        assert maze.root_site == 3
        assert maze.visit_order[0] == 3
        assert sorted(maze.visit_order) == list(range(random_graph.num_sites))

    def test_passable_pairs_are_adjacent(self, random_graph):
        maze = build_spanning_tree(random_graph, 0, AleaPRNG("pairs"))
        for site_a, site_b in maze.passable_pairs():
            assert site_b in random_graph.neighbors(site_a)
        assert maze.passable_edges() == sorted(maze.passable)

    def test_deterministic(self, random_graph):
        a = build_spanning_tree(random_graph, 0, AleaPRNG("same"))
        b = build_spanning_tree(random_graph, 0, AleaPRNG("same"))
        assert a.passable == b.passable
        assert a.visit_order == b.visit_order

    def test_serial_number_source(self, random_graph):
        a = build_spanning_tree(random_graph, 0, SerialNumberSource("AB3CD5"))
        b = build_spanning_tree(random_graph, 0, SerialNumberSource("AB3CD5"))
        assert a.passable == b.passable
        assert len(a.passable) == random_graph.num_sites - 1

    def test_two_sites(self, two_site_subdivision):
        maze = build_spanning_tree(SiteGraph(two_site_subdivision), 1, AleaPRNG("two"))
        assert maze.passable == {0}
        assert maze.exits(0) == [1]

    def test_invalid_start(self, random_graph):
        with pytest.raises(InvalidInputError):
            build_spanning_tree(random_graph, random_graph.num_sites, AleaPRNG("bad"))


class TestReveal:
    """Test wall reveal bookkeeping."""

    def test_reveal(self, random_graph):
        maze = build_spanning_tree(random_graph, 0, AleaPRNG("reveal"))
        maze.reveal(0)
        assert maze.revealed == {0}

        with pytest.raises(InvalidInputError):
            maze.reveal(len(random_graph.edges))
