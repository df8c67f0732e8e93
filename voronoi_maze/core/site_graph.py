"""
Graph view of a site subdivision.

Sites are nodes; the boundary segments shared by two sites are edges. The
edge list is kept exactly as the subdivision provides it so that edge
indices mean the same thing everywhere.
"""

from collections import deque
from typing import Dict, List, Optional

import structlog

from .exceptions import InvalidInputError
from .geometry import Edge, Point
from .sequences import consecutive_pairs, indexed_search
from .voronoi_graph import SiteEdge, SiteSubdivision

logger = structlog.get_logger()


class SiteGraph:
    """Explicit adjacency structure over a SiteSubdivision."""

    def __init__(self, subdivision: SiteSubdivision):
        self.subdivision = subdivision
        self.num_sites = subdivision.num_sites
        self.edges: List[SiteEdge] = list(subdivision.edges)

        self._site_edges: List[List[int]] = [[] for _ in range(self.num_sites)]
        self._edge_lookup: Dict[Edge, int] = {}
        for edge_index, (edge, site_a, site_b) in enumerate(self.edges):
            self._site_edges[site_a].append(edge_index)
            self._site_edges[site_b].append(edge_index)
            self._edge_lookup[edge] = edge_index

    def _check_site(self, site: int) -> None:
        if not 0 <= site < self.num_sites:
            raise InvalidInputError(f"Site {site} out of range 0..{self.num_sites - 1}")

    def site_edges(self, site: int) -> List[int]:
        """Indices of all edges touching site, in edge list order."""
        self._check_site(site)
        return list(self._site_edges[site])

    def neighbors(self, site: int) -> List[int]:
        """Sites sharing an edge with site, sorted."""
        return sorted({self.other_site(e, site) for e in self.site_edges(site)})

    def other_site(self, edge_index: int, site: int) -> int:
        """The site on the other side of edge_index from site."""
        _, site_a, site_b = self.edges[edge_index]
        if site == site_a:
            return site_b
        if site == site_b:
            return site_a
        raise InvalidInputError(f"Edge {edge_index} does not touch site {site}")

    def edge_between(self, site_a: int, site_b: int) -> int:
        """Index of the edge separating two sites, or -1 if they are not adjacent."""
        return indexed_search(
            self.edges,
            lambda e: (e.site_a == site_a and e.site_b == site_b) or
                      (e.site_a == site_b and e.site_b == site_a))

    def edges_from_site(self, site: int, start_point: Optional[Point] = None) -> List[int]:
        """
        Edges of a site in the order they occur along its polygon.

        Args:
            site: Site index
            start_point: Polygon vertex to start walking from; defaults to the
                first vertex (also used when start_point is not a vertex)

        Returns:
            Edge indices touching site; segments on the bounding rectangle
            are skipped
        """
        self._check_site(site)
        polygon = self.subdivision.polygons[site]
        if polygon is None:
            return self.site_edges(site)

        vertices = polygon.vertices
        start_index = 0
        if start_point is not None:
            start_index = max(indexed_search(vertices, lambda v: v == start_point), 0)
        rotated = vertices[start_index:] + vertices[:start_index]

        result = []
        for a, b in consecutive_pairs(rotated, closed=True):
            edge_index = self._edge_lookup.get(Edge(a, b))
            if edge_index is not None:
                result.append(edge_index)

        # edges whose endpoints are not consecutive polygon vertices go last
        result.extend(e for e in self._site_edges[site] if e not in result)
        return result

    def border_vertex(self, site: int) -> Optional[Point]:
        """First polygon vertex of site lying on the bounding rectangle, if any."""
        polygon = self.subdivision.polygons[site]
        if polygon is None:
            return None
        width, height = self.subdivision.width, self.subdivision.height
        for v in polygon.vertices:
            if v.x == 0 or v.x == width or v.y == 0 or v.y == height:
                return v
        return None

    def fringe_sites(self) -> List[int]:
        """
        Sites whose polygon touches the bounding rectangle.

        Ordered counter-clockwise around the rectangle: bottom side by
        rightmost x, right side by topmost y, top side by leftmost x
        descending, left side by lowest y descending. Each site appears once.
        """
        width, height = self.subdivision.width, self.subdivision.height
        polygons = [(i, p) for i, p in enumerate(self.subdivision.polygons) if p is not None]

        def side(on_side, key, descending):
            touching = [(i, [v for v in p.vertices if on_side(v)]) for i, p in polygons]
            touching = [(i, vs) for i, vs in touching if vs]
            touching.sort(key=lambda item: key(item[1]), reverse=descending)
            return [i for i, _ in touching]

        ordered = (
            side(lambda v: v.y == 0, lambda vs: max(v.x for v in vs), False) +
            side(lambda v: v.x == width, lambda vs: max(v.y for v in vs), False) +
            side(lambda v: v.y == height, lambda vs: min(v.x for v in vs), True) +
            side(lambda v: v.x == 0, lambda vs: min(v.y for v in vs), True)
        )

        seen = set()
        fringe = []
        for site in ordered:
            if site not in seen:
                seen.add(site)
                fringe.append(site)
        return fringe

    def is_connected(self) -> bool:
        """Whether every site can be reached from site 0 through shared edges."""
        if self.num_sites == 0:
            return True

        visited = [False] * self.num_sites
        visited[0] = True
        queue = deque([0])
        while queue:
            site = queue.popleft()
            for neighbor in self.neighbors(site):
                if not visited[neighbor]:
                    visited[neighbor] = True
                    queue.append(neighbor)
        return all(visited)
