"""Shared fixtures for maze tests."""

import pytest

from voronoi_maze.core.alea_prng import AleaPRNG
from voronoi_maze.core.layout import random_points
from voronoi_maze.core.site_graph import SiteGraph
from voronoi_maze.core.voronoi_graph import generate_subdivision


@pytest.fixture
def two_site_subdivision():
    """Unit square split by the bisector from (0.7, 0) to (0.3, 1)."""
    return generate_subdivision([[0.25, 0.4], [0.75, 0.6]])


@pytest.fixture
def random_subdivision():
    """Ten random sites, reproducible from a fixed seed."""
    points = random_points(10, AleaPRNG("subdivision_test"))
    return generate_subdivision(points)


@pytest.fixture
def random_graph(random_subdivision):
    return SiteGraph(random_subdivision)
