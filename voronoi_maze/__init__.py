"""
Voronoi maze generator.

Builds a random maze over a Voronoi subdivision of the unit square, with
room distances and distance-constrained waypoints.
"""

from .core.generator import MazeOptions, VoronoiMaze, generate_maze

__version__ = "0.1.0"

__all__ = ['MazeOptions', 'VoronoiMaze', 'generate_maze']
