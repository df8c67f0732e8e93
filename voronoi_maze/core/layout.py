"""
Layout selection: random site sets scored and filtered before a maze is built.

Two strategies are provided:
- select_layout: best of a fixed number of trials, scored by shortest edge
- select_first_layout: first candidate that passes every exclusion check

Exclusion predicates take (subdivision, label_points) and return True to
reject the candidate.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np
import structlog

from .alea_prng import RandomSource
from .exceptions import LayoutExhausted, LayoutRejected
from .geometry import Point
from .sequences import min_by
from .voronoi_graph import SiteSubdivision, generate_subdivision

logger = structlog.get_logger()

ExclusionPredicate = Callable[[SiteSubdivision, Optional[List[Point]]], bool]

DEFAULT_MIN_SEPARATION = 1 / 128
DEFAULT_LABEL_PRECISION = 0.005

# Rejected trials between progress log lines on the unbounded retry paths
REJECTION_LOG_INTERVAL = 100


@dataclass
class LayoutCandidate:
    """An accepted subdivision together with its score."""
    subdivision: SiteSubdivision
    label_points: List[Point]
    score: float
    trials: int = 1

    @property
    def points(self) -> np.ndarray:
        return self.subdivision.points


def random_points(count: int, rng: RandomSource, min_separation: float = DEFAULT_MIN_SEPARATION,
                  width: float = 1.0, height: float = 1.0) -> np.ndarray:
    """
    Sample points uniformly in the rectangle, at least min_separation apart.

    Candidates closer than min_separation to an accepted point (or lying on
    the rectangle's lower/left side) are discarded and redrawn.

    Args:
        count: Number of points
        rng: Random source
        min_separation: Minimum pairwise distance
        width: Rectangle width
        height: Rectangle height

    Returns:
        Array of shape (count, 2)
    """
    accepted: List[Point] = []
    while len(accepted) < count:
        candidate = Point(rng.random() * width, rng.random() * height)
        if candidate.x <= 0 or candidate.y <= 0:
            continue
        if any(p.distance(candidate) < min_separation for p in accepted):
            continue
        accepted.append(candidate)
    return np.array([[p.x, p.y] for p in accepted], dtype=float).reshape(-1, 2)


def shortest_edge_length(subdivision: SiteSubdivision) -> float:
    """Length of the shortest shared edge (0 if there are none)."""
    _, shortest = min_by(subdivision.edges, lambda e: e.edge.length, default=(-1, None))
    return shortest.edge.length if shortest is not None else 0.0


def compute_label_points(subdivision: SiteSubdivision,
                         precision: float = DEFAULT_LABEL_PRECISION) -> List[Point]:
    """Label point of every site; sites without a polygon use the site itself."""
    labels = []
    for site, polygon in zip(subdivision.sites, subdivision.polygons):
        labels.append(site if polygon is None else polygon.label_point(precision))
    return labels


def min_edge_length_exclusion(threshold: float) -> ExclusionPredicate:
    """Reject layouts with any edge shorter than threshold."""
    def edge_too_short(subdivision, label_points=None):
        return any(e.edge.length < threshold for e in subdivision.edges)
    return edge_too_short


def endpoint_exclusion(anchor: Point, radius: float) -> ExclusionPredicate:
    """Reject layouts with an edge endpoint closer than radius to anchor."""
    def endpoint_near_anchor(subdivision, label_points=None):
        return any(min(e.edge.start.distance(anchor), e.edge.end.distance(anchor)) < radius
                   for e in subdivision.edges)
    return endpoint_near_anchor


def sampled_edge_exclusion(anchor: Point, radius: float, samples: int = 9) -> ExclusionPredicate:
    """Reject layouts where any of samples evenly spaced points on an edge lies within radius of anchor."""
    fractions = [cut / (samples - 1) for cut in range(samples)] if samples > 1 else [0.5]

    def edge_crosses_zone(subdivision, label_points=None):
        return any(e.edge.interpolate(t).distance(anchor) < radius
                   for e in subdivision.edges for t in fractions)
    return edge_crosses_zone


def label_clearance_exclusion(clearance: float,
                              precision: float = DEFAULT_LABEL_PRECISION) -> ExclusionPredicate:
    """Reject layouts where an edge passes closer than clearance to an adjacent site's label point."""
    def edge_near_label(subdivision, label_points=None):
        if label_points is None:
            label_points = compute_label_points(subdivision, precision)
        return any(edge.distance_to_point(label_points[a]) < clearance or
                   edge.distance_to_point(label_points[b]) < clearance
                   for edge, a, b in subdivision.edges)
    return edge_near_label


class CombinedExclusion:
    """Rejects when any of its predicates rejects, and can name which one did."""

    def __init__(self, *predicates: ExclusionPredicate):
        self.predicates = list(predicates)

    def __call__(self, subdivision: SiteSubdivision,
                 label_points: Optional[List[Point]] = None) -> bool:
        return self.reason(subdivision, label_points) is not None

    def reason(self, subdivision: SiteSubdivision,
               label_points: Optional[List[Point]] = None) -> Optional[str]:
        """Name of the first rejecting predicate, or None if the layout passes."""
        for predicate in self.predicates:
            if isinstance(predicate, CombinedExclusion):
                nested = predicate.reason(subdivision, label_points)
                if nested is not None:
                    return nested
            elif predicate(subdivision, label_points):
                return predicate.__name__
        return None


def combine_exclusions(*predicates: ExclusionPredicate) -> CombinedExclusion:
    """Reject when any of the predicates rejects."""
    return CombinedExclusion(*predicates)


def _rejection_reason(exclusion: Optional[ExclusionPredicate], subdivision: SiteSubdivision,
                      label_points: Optional[List[Point]]) -> Optional[str]:
    if exclusion is None:
        return None
    if isinstance(exclusion, CombinedExclusion):
        return exclusion.reason(subdivision, label_points)
    return exclusion.__name__ if exclusion(subdivision, label_points) else None


def _build_candidate(num_sites: int, rng: RandomSource, exclusion: Optional[ExclusionPredicate],
                     min_separation: float, width: float, height: float,
                     label_precision: Optional[float]) -> LayoutCandidate:
    """Sample one layout; raises LayoutRejected if an exclusion applies."""
    points = random_points(num_sites, rng, min_separation, width, height)
    subdivision = generate_subdivision(points, width, height, include_edge_polygons=True)
    labels = None
    if label_precision is not None:
        labels = compute_label_points(subdivision, label_precision)

    reason = _rejection_reason(exclusion, subdivision, labels)
    if reason is not None:
        raise LayoutRejected(reason)

    return LayoutCandidate(subdivision, labels, shortest_edge_length(subdivision))


def select_layout(num_sites: int, rng: RandomSource, exclusion: Optional[ExclusionPredicate] = None,
                  trial_count: int = 100, min_separation: float = DEFAULT_MIN_SEPARATION,
                  width: float = 1.0, height: float = 1.0,
                  label_precision: float = DEFAULT_LABEL_PRECISION,
                  max_trials: Optional[int] = None) -> LayoutCandidate:
    """
    Keep the best of trial_count random layouts.

    Candidates are scored by their shortest edge, larger being better, and
    the first candidate with the best score wins. If no candidate passed the
    exclusion within trial_count trials, trials continue until one does;
    without max_trials this loop has no upper bound.

    Args:
        num_sites: Number of sites per layout
        rng: Random source
        exclusion: Optional rejection predicate
        trial_count: Trial budget (at least one trial is always run)
        min_separation: Minimum distance between sites
        width: Rectangle width
        height: Rectangle height
        label_precision: Precision for the winner's label points
        max_trials: Give up after this many trials if nothing was accepted

    Returns:
        Best LayoutCandidate, with label points computed

    Raises:
        LayoutExhausted: If max_trials is set and no candidate passed
    """
    trial_count = max(trial_count, 1)
    best: Optional[LayoutCandidate] = None
    trials = 0
    rejected = 0

    while trials < trial_count or best is None:
        trials += 1
        try:
            candidate = _build_candidate(num_sites, rng, exclusion, min_separation,
                                         width, height, label_precision=None)
        except LayoutRejected as rejection:
            rejected += 1
            if best is None and max_trials is not None and trials >= max_trials:
                raise LayoutExhausted(trials, rejection.reason)
            if trials >= trial_count and rejected % REJECTION_LOG_INTERVAL == 0:
                logger.warning("No layout accepted yet, extending trials",
                               trials=trials, last_reason=rejection.reason)
            continue

        if best is None or candidate.score > best.score:
            best = candidate

    best.label_points = compute_label_points(best.subdivision, label_precision)
    best.trials = trials
    logger.info("Layout selected", strategy="best_of", trials=trials, rejected=rejected,
                shortest_edge=round(best.score, 4))
    return best


def select_first_layout(num_sites: int, rng: RandomSource, exclusion: Optional[ExclusionPredicate],
                        min_separation: float = DEFAULT_MIN_SEPARATION,
                        width: float = 1.0, height: float = 1.0,
                        label_precision: float = DEFAULT_LABEL_PRECISION,
                        max_trials: Optional[int] = None) -> LayoutCandidate:
    """
    Return the first random layout that passes exclusion.

    Label points are computed for every candidate so that exclusions can
    check them. Without max_trials there is no trial cap: an exclusion that
    can never pass makes this loop run forever. With it, LayoutExhausted is
    raised after max_trials rejections.
    """
    trials = 0
    while True:
        trials += 1
        try:
            candidate = _build_candidate(num_sites, rng, exclusion, min_separation,
                                         width, height, label_precision)
        except LayoutRejected as rejection:
            if max_trials is not None and trials >= max_trials:
                raise LayoutExhausted(trials, rejection.reason)
            if trials % REJECTION_LOG_INTERVAL == 0:
                logger.warning("Layout still rejected", trials=trials, last_reason=rejection.reason)
            continue

        candidate.trials = trials
        logger.info("Layout selected", strategy="first_fit", trials=trials,
                    shortest_edge=round(candidate.score, 4))
        return candidate
