"""
Maze generation over a site graph.

The maze is a random spanning tree grown from a root site: a frontier of
candidate edges is kept, one is picked at random and made passable, the
newly reached site's edges join the frontier, and edges between two
visited sites are dropped so that no cycle can form.
"""

from dataclasses import dataclass, field
from typing import List, Set, Tuple

import structlog

from .alea_prng import RandomSource
from .exceptions import InvalidInputError
from .site_graph import SiteGraph

logger = structlog.get_logger()


@dataclass
class MazeGraph:
    """Passable edges of the maze: a spanning tree over all sites."""
    graph: SiteGraph
    root_site: int
    passable: Set[int]
    visit_order: List[int]
    revealed: Set[int] = field(default_factory=set)

    def is_passable(self, edge_index: int) -> bool:
        return edge_index in self.passable

    def passable_edges(self) -> List[int]:
        return sorted(self.passable)

    def passable_pairs(self) -> List[Tuple[int, int]]:
        """(site_a, site_b) for every passable edge, in edge index order."""
        return [(self.graph.edges[i].site_a, self.graph.edges[i].site_b)
                for i in self.passable_edges()]

    def exits(self, site: int) -> List[int]:
        """Sites reachable from site through a single passable edge."""
        return sorted(self.graph.other_site(e, site)
                      for e in self.graph.site_edges(site) if e in self.passable)

    def reveal(self, edge_index: int) -> None:
        """Mark a wall as revealed (bookkeeping for presentation layers)."""
        if not 0 <= edge_index < len(self.graph.edges):
            raise InvalidInputError(f"Edge {edge_index} does not exist")
        self.revealed.add(edge_index)


def build_spanning_tree(graph: SiteGraph, start_site: int, rng: RandomSource) -> MazeGraph:
    """
    Grow a random spanning tree from start_site.

    Args:
        graph: Site graph to carve the maze from
        start_site: Root site
        rng: Random source used for every frontier pick

    Returns:
        MazeGraph with exactly num_sites - 1 passable edges

    Raises:
        InvalidInputError: If start_site is invalid or the graph is not connected
    """
    n_sites = graph.num_sites
    if not 0 <= start_site < n_sites:
        raise InvalidInputError(f"Start site {start_site} out of range 0..{n_sites - 1}")

    visited = [False] * n_sites
    passable: Set[int] = set()
    visit_order = [start_site]
    visited[start_site] = True

    frontier = graph.edges_from_site(start_site, graph.border_vertex(start_site))

    while frontier:
        pick = rng.randrange(len(frontier))
        edge_index = frontier[pick]
        edge, site_a, site_b = graph.edges[edge_index]
        new_site = site_b if visited[site_a] else site_a

        logger.debug("Maze step", options=len(frontier), index=pick, edge=edge_index,
                     new_site=new_site, passable=sorted(passable))

        passable.add(edge_index)
        visited[new_site] = True
        visit_order.append(new_site)

        known = set(frontier)
        frontier.extend(e for e in graph.edges_from_site(new_site, edge.start) if e not in known)
        frontier = [e for e in frontier
                    if not (visited[graph.edges[e].site_a] and visited[graph.edges[e].site_b])]

    if not all(visited) or len(passable) != n_sites - 1:
        raise InvalidInputError(
            f"Site graph is not connected: reached {sum(visited)} of {n_sites} sites")

    logger.info("Maze generated", sites=n_sites, passable_edges=len(passable),
                total_edges=len(graph.edges), root_site=start_site)
    return MazeGraph(graph=graph, root_site=start_site, passable=passable, visit_order=visit_order)
