"""
Core maze generation functionality.
"""

from .exceptions import (DegenerateGeometryError, InvalidInputError, LayoutExhausted,
                         LayoutRejected, MazeError, PlacementExhausted)
from .geometry import Edge, Point, Polygon
from .voronoi_graph import SiteEdge, SiteSubdivision, generate_subdivision
from .site_graph import SiteGraph
from .alea_prng import AleaPRNG, RandomSource
from .serial_source import SerialNumberSource

__all__ = ['DegenerateGeometryError', 'InvalidInputError', 'LayoutExhausted', 'LayoutRejected',
           'MazeError', 'PlacementExhausted', 'Edge', 'Point', 'Polygon', 'SiteEdge', 'SiteSubdivision',
           'generate_subdivision', 'SiteGraph', 'AleaPRNG', 'RandomSource', 'SerialNumberSource']
