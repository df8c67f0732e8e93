"""Tests for the site adjacency graph."""

import pytest

from voronoi_maze.core.exceptions import InvalidInputError
from voronoi_maze.core.geometry import Point
from voronoi_maze.core.site_graph import SiteGraph


class TestTwoSiteGraph:
    """Test adjacency on the hand-checkable subdivision."""

    def test_adjacency(self, two_site_subdivision):
        graph = SiteGraph(two_site_subdivision)

        assert graph.neighbors(0) == [1]
        assert graph.neighbors(1) == [0]
        assert graph.edge_between(0, 1) == 0
        assert graph.edge_between(1, 0) == 0
        assert graph.edge_between(0, 0) == -1
        assert graph.other_site(0, 0) == 1

    def test_fringe_and_border(self, two_site_subdivision):
        graph = SiteGraph(two_site_subdivision)

        # site 0 reaches x=0.7 along the bottom, site 1 the corner x=1
        assert graph.fringe_sites() == [0, 1]
        vertex = graph.border_vertex(0)
        assert vertex.x in (0.0, 1.0) or vertex.y in (0.0, 1.0)

    def test_invalid_site(self, two_site_subdivision):
        graph = SiteGraph(two_site_subdivision)
        with pytest.raises(InvalidInputError):
            graph.site_edges(2)
        with pytest.raises(InvalidInputError):
            graph.edges_from_site(-1)


class TestRandomGraph:
    """Test adjacency on a random subdivision."""

    def test_connected(self, random_graph):
        assert random_graph.is_connected()

    def test_neighbors_are_symmetric(self, random_graph):
        for site in range(random_graph.num_sites):
            for neighbor in random_graph.neighbors(site):
                assert site in random_graph.neighbors(neighbor)

    def test_edge_between_matches_edge_list(self, random_graph):
        for index, (_, site_a, site_b) in enumerate(random_graph.edges):
            assert random_graph.edge_between(site_a, site_b) == index

    def test_edges_from_site_covers_site_edges(self, random_graph):
        for site in range(random_graph.num_sites):
            ordered = random_graph.edges_from_site(site, random_graph.border_vertex(site))
            assert sorted(ordered) == sorted(random_graph.site_edges(site))
            assert len(set(ordered)) == len(ordered)

    def test_unknown_start_point_falls_back_to_first_vertex(self, random_graph):
        assert random_graph.edges_from_site(0, Point(9.0, 9.0)) == random_graph.edges_from_site(0)

    def test_fringe_sites(self, random_graph):
        fringe = random_graph.fringe_sites()
        assert len(fringe) == len(set(fringe))
        assert fringe
        for site in fringe:
            assert random_graph.border_vertex(site) is not None
        for site in set(range(random_graph.num_sites)) - set(fringe):
            assert random_graph.border_vertex(site) is None
