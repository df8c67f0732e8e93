"""
Maze generation pipeline.

Stages:
1. Layout selection (random sites, Voronoi subdivision, exclusion checks)
2. Site graph construction
3. Spanning tree maze from a root site
4. All-pairs room distances
5. Waypoint placement; on failure the whole pipeline starts over
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import structlog

from ..config import settings
from ..utils.random import create_rng, new_seed
from .alea_prng import RandomSource
from .distances import compute_distances, max_distance
from .exceptions import InvalidInputError, PlacementExhausted
from .geometry import Point
from .layout import (
    LayoutCandidate,
    combine_exclusions,
    endpoint_exclusion,
    label_clearance_exclusion,
    min_edge_length_exclusion,
    sampled_edge_exclusion,
    select_first_layout,
    select_layout,
)
from .maze import MazeGraph, build_spanning_tree
from .serial_source import SerialNumberSource
from .site_graph import SiteGraph
from .voronoi_graph import SiteSubdivision
from .waypoints import place_waypoints, split_start

logger = structlog.get_logger()

LAYOUT_STRATEGIES = ("first_fit", "best_of")
ROOT_STRATEGIES = ("fringe", "random")


@dataclass
class MazeOptions:
    """Maze generation options; defaults come from settings."""
    num_sites: int = field(default_factory=lambda: settings.num_sites)
    min_point_separation: float = field(default_factory=lambda: settings.min_point_separation)
    label_precision: float = field(default_factory=lambda: settings.label_precision)
    layout_strategy: str = field(default_factory=lambda: settings.layout_strategy)
    min_edge_length: float = field(default_factory=lambda: settings.min_edge_length)
    corner_clearance: float = field(default_factory=lambda: settings.corner_clearance)
    label_clearance: float = field(default_factory=lambda: settings.label_clearance)
    trial_count: int = field(default_factory=lambda: settings.trial_count)
    max_layout_trials: Optional[int] = field(default_factory=lambda: settings.max_layout_trials)
    exclusion_anchor: Point = field(
        default_factory=lambda: Point(settings.exclusion_anchor_x, settings.exclusion_anchor_y))
    exclusion_radius: float = field(default_factory=lambda: settings.exclusion_radius)
    root_strategy: str = field(default_factory=lambda: settings.root_strategy)
    num_waypoints: int = field(default_factory=lambda: settings.num_waypoints)
    min_waypoint_distance: int = field(default_factory=lambda: settings.min_waypoint_distance)
    placement_retry_budget: int = field(default_factory=lambda: settings.placement_retry_budget)

    def __post_init__(self):
        if self.layout_strategy not in LAYOUT_STRATEGIES:
            raise InvalidInputError(
                f"Unknown layout strategy {self.layout_strategy!r}; expected one of {LAYOUT_STRATEGIES}")
        if self.root_strategy not in ROOT_STRATEGIES:
            raise InvalidInputError(
                f"Unknown root strategy {self.root_strategy!r}; expected one of {ROOT_STRATEGIES}")
        if self.num_sites < 1:
            raise InvalidInputError(f"Need at least one site, got {self.num_sites}")
        if self.num_waypoints > self.num_sites:
            raise InvalidInputError(
                f"Cannot place {self.num_waypoints} waypoints in {self.num_sites} rooms")
        # even a maze that is a single corridor is too short for this spacing
        if (self.num_waypoints - 1) * self.min_waypoint_distance > self.num_sites - 1:
            raise InvalidInputError(
                f"{self.num_waypoints} waypoints at distance {self.min_waypoint_distance} "
                f"do not fit in {self.num_sites} rooms")


@dataclass
class VoronoiMaze:
    """Complete, internally consistent maze generation result."""
    seed: Optional[str]
    serial_number: Optional[str]
    subdivision: SiteSubdivision
    label_points: List[Point]
    maze: MazeGraph
    distances: np.ndarray
    start_site: int
    targets: List[int]
    regenerations: int = 0
    layout_trials: int = 0

    @property
    def num_sites(self) -> int:
        return self.subdivision.num_sites

    @property
    def waypoints(self) -> List[int]:
        return [self.start_site] + self.targets

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation for presentation layers."""
        return {
            "seed": self.seed,
            "serial_number": self.serial_number,
            "width": self.subdivision.width,
            "height": self.subdivision.height,
            "sites": [[float(x), float(y)] for x, y in self.subdivision.points],
            "polygons": [[[v.x, v.y] for v in polygon.vertices] if polygon is not None else None
                         for polygon in self.subdivision.polygons],
            "label_points": [[p.x, p.y] for p in self.label_points],
            "edges": [
                {
                    "start": [edge.start.x, edge.start.y],
                    "end": [edge.end.x, edge.end.y],
                    "site_a": site_a,
                    "site_b": site_b,
                    "passable": self.maze.is_passable(i),
                }
                for i, (edge, site_a, site_b) in enumerate(self.subdivision.edges)
            ],
            "root_site": self.maze.root_site,
            "passable": self.maze.passable_edges(),
            "distances": self.distances.tolist(),
            "start_site": self.start_site,
            "targets": list(self.targets),
            "regenerations": self.regenerations,
            "layout_trials": self.layout_trials,
        }


def _select(options: MazeOptions, rng: RandomSource) -> LayoutCandidate:
    if options.layout_strategy == "best_of":
        exclusion = sampled_edge_exclusion(options.exclusion_anchor, options.exclusion_radius)
        return select_layout(options.num_sites, rng, exclusion=exclusion,
                             trial_count=options.trial_count,
                             min_separation=options.min_point_separation,
                             label_precision=options.label_precision,
                             max_trials=options.max_layout_trials)

    exclusion = combine_exclusions(
        min_edge_length_exclusion(options.min_edge_length),
        endpoint_exclusion(Point(0.0, 0.0), options.corner_clearance),
        label_clearance_exclusion(options.label_clearance, options.label_precision),
    )
    return select_first_layout(options.num_sites, rng, exclusion,
                               min_separation=options.min_point_separation,
                               label_precision=options.label_precision,
                               max_trials=options.max_layout_trials)


def _choose_root(graph: SiteGraph, options: MazeOptions, source: RandomSource) -> int:
    candidates = graph.fringe_sites() if options.root_strategy == "fringe" else []
    if not candidates:
        candidates = list(range(graph.num_sites))
    return candidates[source.randrange(len(candidates))]


def generate_maze(options: Optional[MazeOptions] = None, seed: Optional[str] = None,
                  rng: Optional[RandomSource] = None,
                  serial_number: Optional[str] = None) -> VoronoiMaze:
    """
    Run the whole generation pipeline.

    Args:
        options: Generation options (settings defaults if omitted)
        seed: Seed for the Alea PRNG; ignored when rng is given
        rng: Random source for layouts and waypoints
        serial_number: If given, the root site and spanning tree are derived
            from it (restarting from the full serial on every regeneration)
            instead of from rng

    Returns:
        VoronoiMaze satisfying every structural invariant
    """
    options = options or MazeOptions()
    if rng is None:
        seed = seed if seed is not None else new_seed()
        rng = create_rng(seed)
    if serial_number is not None:
        # fail fast on malformed serials
        SerialNumberSource(serial_number)

    logger.info("Generating maze", seed=seed, serial_number=serial_number,
                sites=options.num_sites, layout_strategy=options.layout_strategy,
                waypoints=options.num_waypoints)

    regenerations = 0
    while True:
        layout = _select(options, rng)
        maze_source = SerialNumberSource(serial_number) if serial_number is not None else rng
        graph = SiteGraph(layout.subdivision)
        root = _choose_root(graph, options, maze_source)
        maze = build_spanning_tree(graph, root, maze_source)
        distances = compute_distances(graph.num_sites, maze.passable_pairs())

        try:
            waypoints = place_waypoints(distances, options.num_waypoints,
                                        options.min_waypoint_distance, rng,
                                        options.placement_retry_budget)
        except PlacementExhausted as exhausted:
            regenerations += 1
            logger.info("Regenerating layout", reason="placement_exhausted",
                        attempts=exhausted.attempts, regenerations=regenerations,
                        max_distance=max_distance(distances))
            continue

        start_site, targets = split_start(waypoints)
        logger.info("Maze complete", seed=seed, start_site=start_site, targets=targets,
                    regenerations=regenerations, layout_trials=layout.trials)
        return VoronoiMaze(
            seed=seed,
            serial_number=serial_number,
            subdivision=layout.subdivision,
            label_points=layout.label_points,
            maze=maze,
            distances=distances,
            start_site=start_site,
            targets=targets,
            regenerations=regenerations,
            layout_trials=layout.trials,
        )
