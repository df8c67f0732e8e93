"""
Planar geometry primitives for maze rooms.

This module implements:
- Point: immutable 2D vector
- Edge: line segment with undirected equality
- Polygon: closed vertex ring with containment, area, centroid, convexity,
  signed outline distance and pole-of-inaccessibility (label point) search
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Tuple, Union

from .exceptions import DegenerateGeometryError
from .sequences import PriorityQueue, consecutive_pairs

# Tolerance for treating a point as lying on an edge
ON_EDGE_TOLERANCE = 1e-12


@dataclass(frozen=True)
class Point:
    """Immutable 2D coordinate."""
    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Point":
        return Point(self.x / divisor, self.y / divisor)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point") -> float:
        """Z component of the cross product."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance(self, other: "Point" = None) -> float:
        """Euclidean distance to other, or to the origin if omitted."""
        if other is None:
            return self.length()
        return math.hypot(self.x - other.x, self.y - other.y)

    def rotated(self, angle: float) -> "Point":
        """Rotate counter-clockwise about the origin by angle (radians)."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Point(self.x * cos_a - self.y * sin_a, self.x * sin_a + self.y * cos_a)


PointLike = Union[Point, Tuple[float, float]]


def as_point(value: PointLike) -> Point:
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(float(x), float(y))


@dataclass(frozen=True, eq=False)
class Edge:
    """
    Line segment from start to end.

    Equality and hashing ignore direction, so the edge A-B equals B-A, while
    start and end keep their order for consumers that care about it.
    """
    start: Point
    end: Point

    def __eq__(self, other) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return ((self.start == other.start and self.end == other.end) or
                (self.start == other.end and self.end == other.start))

    def __hash__(self) -> int:
        return hash(frozenset((self.start, self.end)))

    @property
    def length(self) -> float:
        return self.start.distance(self.end)

    @property
    def midpoint(self) -> Point:
        return (self.start + self.end) / 2

    def reversed(self) -> "Edge":
        return Edge(self.end, self.start)

    def interpolate(self, t: float) -> Point:
        """Point at fraction t along the edge (0 = start, 1 = end)."""
        return self.start * (1 - t) + self.end * t

    def distance_to_point(self, p: Point) -> float:
        """Distance from p to the closest point of the segment."""
        return math.sqrt(_segment_distance_sq(p.x, p.y, self.start, self.end))

    def contains_point(self, p: Point) -> bool:
        """Whether p lies on the segment."""
        return self.distance_to_point(p) <= ON_EDGE_TOLERANCE


def _segment_distance_sq(px: float, py: float, a: Point, b: Point) -> float:
    """Squared distance from (px, py) to segment a-b (clamped projection)."""
    x, y = a.x, a.y
    dx = b.x - x
    dy = b.y - y

    if dx != 0 or dy != 0:
        t = ((px - x) * dx + (py - y) * dy) / (dx * dx + dy * dy)
        if t > 1:
            x, y = b.x, b.y
        elif t > 0:
            x += dx * t
            y += dy * t

    dx = px - x
    dy = py - y
    return dx * dx + dy * dy


class _Cell(NamedTuple):
    """Square search cell for the label point search."""
    center: Point
    half: float       # half the cell size
    distance: float   # signed distance from center to the outline
    max_distance: float  # upper bound of the distance anywhere inside the cell


def _make_cell(polygon: "Polygon", center: Point, half: float) -> _Cell:
    d = polygon.distance_from_point(center)
    return _Cell(center, half, d, d + half * math.sqrt(2))


class Polygon:
    """Closed polygon given by its vertices; the last vertex connects to the first."""

    def __init__(self, vertices: Iterable[PointLike]):
        self.vertices: List[Point] = [as_point(v) for v in vertices]

    def __repr__(self) -> str:
        return f"Polygon({self.vertices!r})"

    def __len__(self) -> int:
        return len(self.vertices)

    @property
    def edges(self) -> List[Edge]:
        """Edges in vertex order, derived from the current vertex list."""
        return [Edge(a, b) for a, b in consecutive_pairs(self.vertices, closed=True)]

    def bounding_box(self) -> Tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y)."""
        xs = [v.x for v in self.vertices]
        ys = [v.y for v in self.vertices]
        return min(xs), min(ys), max(xs), max(ys)

    def perimeter(self) -> float:
        return sum(edge.length for edge in self.edges)

    def contains_point(self, point: Point) -> bool:
        """
        Determine whether the polygon contains point.

        Points lying on an edge count as contained; everything else is
        decided by the even-odd rule with a horizontal ray.
        """
        if any(edge.contains_point(point) for edge in self.edges):
            return True

        inside = False
        p = self.vertices[-1]
        for q in self.vertices:
            if (((q.y <= point.y < p.y) or (p.y <= point.y < q.y)) and
                    point.x < (p.x - q.x) * (point.y - q.y) / (p.y - q.y) + q.x):
                inside = not inside
            p = q
        return inside

    def area(self) -> float:
        """Signed area (shoelace); positive for counter-clockwise vertex order."""
        total = 0.0
        p = self.vertices[-1]
        for q in self.vertices:
            total += p.x * q.y - q.x * p.y
            p = q
        return total / 2

    def centroid(self) -> Point:
        """Area-weighted centroid."""
        signed_area = 0.0
        cx = 0.0
        cy = 0.0

        for a, b in consecutive_pairs(self.vertices, closed=True):
            cross = a.x * b.y - b.x * a.y
            signed_area += cross
            cx += (a.x + b.x) * cross
            cy += (a.y + b.y) * cross

        if signed_area == 0:
            raise DegenerateGeometryError("Centroid is undefined for a polygon with zero area")

        signed_area *= 0.5
        return Point(cx / (6.0 * signed_area), cy / (6.0 * signed_area))

    def is_convex(self) -> bool:
        """
        Determine whether the polygon is convex.

        Raises:
            DegenerateGeometryError: With 2 or fewer vertices, or if all
                vertices lie on a straight line
        """
        n = len(self.vertices)
        if n <= 2:
            raise DegenerateGeometryError(f"Convexity needs at least 3 vertices, got {n}")

        cross_positive = None
        for i in range(n):
            pt0 = self.vertices[i - 1]
            pt1 = self.vertices[i]
            pt2 = self.vertices[(i + 1) % n]
            cross_z = (pt1 - pt0).cross(pt2 - pt1)
            if cross_z != 0:
                if cross_positive is None:
                    cross_positive = cross_z > 0
                elif cross_positive != (cross_z > 0):
                    return False

        if cross_positive is None:
            raise DegenerateGeometryError("All polygon points lie on a straight line")
        return True

    def distance_from_point(self, p: Point) -> float:
        """
        Signed distance from p to the polygon outline.

        Positive inside, negative outside, exactly 0 on the outline.
        """
        inside = False
        min_dist_sq = math.inf

        n = len(self.vertices)
        j = n - 1
        for i in range(n):
            a = self.vertices[i]
            b = self.vertices[j]

            if (a.y > p.y) != (b.y > p.y) and p.x < (b.x - a.x) * (p.y - a.y) / (b.y - a.y) + a.x:
                inside = not inside

            min_dist_sq = min(min_dist_sq, _segment_distance_sq(p.x, p.y, a, b))
            j = i

        if min_dist_sq == 0:
            return 0.0
        return (1 if inside else -1) * math.sqrt(min_dist_sq)

    def label_point(self, precision: float = 1.0) -> Point:
        """
        Find the pole of inaccessibility: the interior point farthest from the outline.

        Branch-and-bound over square cells. Cells are explored in order of the
        best distance they could possibly contain, and dropped once they cannot
        beat the current best by more than precision.

        Args:
            precision: Absolute tolerance on the distance to the outline

        Returns:
            Point suitable for placing a label inside the polygon

        Raises:
            DegenerateGeometryError: With fewer than 3 vertices or a
                zero-extent bounding box
        """
        if len(self.vertices) < 3:
            raise DegenerateGeometryError(
                f"Label point needs at least 3 vertices, got {len(self.vertices)}")

        min_x, min_y, max_x, max_y = self.bounding_box()
        width = max_x - min_x
        height = max_y - min_y
        cell_size = min(width, height)
        if cell_size == 0:
            raise DegenerateGeometryError("Polygon has a zero-extent bounding box")
        h = cell_size / 2

        cell_queue = PriorityQueue(largest_first=True)

        def enqueue(cell: _Cell) -> None:
            cell_queue.add(cell, cell.max_distance)

        # cover polygon with initial cells
        x = min_x
        while x < max_x:
            y = min_y
            while y < max_y:
                enqueue(_make_cell(self, Point(x + h, y + h), h))
                y += cell_size
            x += cell_size

        # bounding box center as first guess
        best = _make_cell(self, Point(min_x + width / 2, min_y + height / 2), 0)

        while cell_queue:
            cell, _ = cell_queue.extract()

            if cell.distance > best.distance:
                best = cell

            if cell.max_distance - best.distance <= precision:
                continue

            h = cell.half / 2
            enqueue(_make_cell(self, cell.center + Point(-h, -h), h))
            enqueue(_make_cell(self, cell.center + Point(h, -h), h))
            enqueue(_make_cell(self, cell.center + Point(-h, h), h))
            enqueue(_make_cell(self, cell.center + Point(h, h), h))

        return best.center
