"""Voronoi subdivision of the unit rectangle into maze rooms."""

import numpy as np
from scipy.spatial import Voronoi
from typing import List, NamedTuple, Optional
from dataclasses import dataclass
import math
import structlog

from .exceptions import InvalidInputError
from .geometry import Edge, Point, Polygon

logger = structlog.get_logger()

# Vertices closer than this to the bounding rectangle are snapped onto it
SNAP_TOLERANCE = 1e-9


class SiteEdge(NamedTuple):
    """Boundary segment separating two sites."""
    edge: Edge
    site_a: int
    site_b: int


@dataclass
class SiteSubdivision:
    """Planar subdivision of a rectangle into one convex polygon per site.

    Polygons are index-aligned with the input points. Only segments shared by
    two sites are listed in edges; segments on the bounding rectangle are not.
    """
    points: np.ndarray                   # input sites, shape (N, 2)
    polygons: List[Optional[Polygon]]    # None for border cells without edge polygons
    edges: List[SiteEdge]
    width: float
    height: float

    @property
    def num_sites(self) -> int:
        return len(self.points)

    @property
    def sites(self) -> List[Point]:
        return [Point(float(x), float(y)) for x, y in self.points]

    def edge_lengths(self) -> np.ndarray:
        return np.array([e.edge.length for e in self.edges], dtype=float)


def _validate_points(points: np.ndarray, width: float, height: float) -> None:
    if points.ndim != 2 or points.shape[1] != 2:
        raise InvalidInputError(f"Expected an (N, 2) point array, got shape {points.shape}")
    if len(points) == 0:
        raise InvalidInputError("Cannot build a subdivision from zero points")

    inside = ((points[:, 0] > 0) & (points[:, 0] < width) &
              (points[:, 1] > 0) & (points[:, 1] < height))
    if not np.all(inside):
        raise InvalidInputError("All points must lie strictly inside the bounding rectangle")

    if len(np.unique(points, axis=0)) != len(points):
        raise InvalidInputError("Points must be distinct")


def mirror_points(points: np.ndarray, width: float, height: float) -> np.ndarray:
    """
    Reflect points across the four sides of the bounding rectangle.

    The Voronoi cells of the original points within the combined set are
    exactly their cells clipped to the rectangle.

    Args:
        points: Site coordinates, shape (N, 2)
        width: Rectangle width
        height: Rectangle height

    Returns:
        Array of shape (5N, 2), originals first
    """
    x = points[:, 0]
    y = points[:, 1]
    return np.vstack([
        points,
        np.column_stack([-x, y]),
        np.column_stack([2 * width - x, y]),
        np.column_stack([x, -y]),
        np.column_stack([x, 2 * height - y]),
    ])


def _snap_vertices(vertices: np.ndarray, width: float, height: float) -> np.ndarray:
    snapped = vertices.copy()
    for axis, limit in ((0, width), (1, height)):
        column = snapped[:, axis]
        column[np.abs(column) < SNAP_TOLERANCE] = 0.0
        column[np.abs(column - limit) < SNAP_TOLERANCE] = limit
        np.clip(column, 0.0, limit, out=column)
    return snapped


def _ordered_ring(site: Point, vertices: List[Point]) -> List[Point]:
    """Order cell vertices counter-clockwise around their site, dropping duplicates."""
    ordered = sorted(vertices, key=lambda v: math.atan2(v.y - site.y, v.x - site.x))
    ring = []
    for v in ordered:
        if not ring or ring[-1] != v:
            ring.append(v)
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring.pop()
    return ring


def _touches_border(polygon: Polygon, width: float, height: float) -> bool:
    return any(v.x == 0 or v.y == 0 or v.x == width or v.y == height for v in polygon.vertices)


def generate_subdivision(points, width: float = 1.0, height: float = 1.0,
                         include_edge_polygons: bool = True) -> SiteSubdivision:
    """
    Build the Voronoi subdivision of the rectangle [0, width] x [0, height].

    Args:
        points: Distinct site coordinates strictly inside the rectangle
        width: Bounding rectangle width
        height: Bounding rectangle height
        include_edge_polygons: If False, cells touching the rectangle get no polygon

    Returns:
        SiteSubdivision with polygons aligned to points

    Raises:
        InvalidInputError: For empty, duplicate or out-of-bounds points
    """
    points = np.asarray(points, dtype=float)
    _validate_points(points, width, height)
    n_sites = len(points)

    vor = Voronoi(mirror_points(points, width, height))
    vertices = _snap_vertices(vor.vertices, width, height)
    vertex_points = [Point(float(x), float(y)) for x, y in vertices]

    polygons: List[Optional[Polygon]] = []
    for i in range(n_sites):
        region = vor.regions[vor.point_region[i]]
        site = Point(float(points[i][0]), float(points[i][1]))
        ring = _ordered_ring(site, [vertex_points[v] for v in region if v != -1])
        polygon = Polygon(ring)
        if not include_edge_polygons and _touches_border(polygon, width, height):
            polygon = None
        polygons.append(polygon)

    edges: List[SiteEdge] = []
    skipped = 0
    for (a, b), (v0, v1) in zip(vor.ridge_points, vor.ridge_vertices):
        if a >= n_sites or b >= n_sites:
            continue
        start, end = vertex_points[v0], vertex_points[v1]
        if start == end:
            # sites touching in a single point are not neighbours
            skipped += 1
            continue
        edges.append(SiteEdge(Edge(start, end), int(a), int(b)))

    logger.debug("Subdivision generated", sites=n_sites, edges=len(edges),
                 skipped_point_contacts=skipped)

    return SiteSubdivision(
        points=points,
        polygons=polygons,
        edges=edges,
        width=width,
        height=height,
    )
