"""
Waypoint placement.

Picks a start room and targets that are pairwise far apart in the maze.
The search is greedy with restarts; when the restart budget runs out it
raises PlacementExhausted so the caller can regenerate the whole layout.
"""

from typing import List, Tuple

import numpy as np
import structlog

from .alea_prng import RandomSource
from .exceptions import InvalidInputError, PlacementExhausted

logger = structlog.get_logger()


def place_waypoints(distances: np.ndarray, k: int, min_distance: int, rng: RandomSource,
                    retry_budget: int = 100) -> List[int]:
    """
    Choose k sites whose pairwise graph distance is at least min_distance.

    Each attempt picks a uniformly random first site, then repeatedly picks
    uniformly among the sites far enough from every chosen site. An attempt
    that runs out of eligible sites is abandoned and a new one started.

    Args:
        distances: Square distance matrix
        k: Number of waypoints, start site included
        min_distance: Minimum pairwise distance
        rng: Random source
        retry_budget: Number of attempts before giving up

    Returns:
        Ordered list of k distinct site indices; the first is the start

    Raises:
        PlacementExhausted: If no attempt within the budget succeeded
        InvalidInputError: If k is not positive or the matrix is empty
    """
    num_sites = len(distances)
    if num_sites == 0:
        raise InvalidInputError("Cannot place waypoints without sites")
    if k < 1:
        raise InvalidInputError(f"Need at least one waypoint, got {k}")

    attempts = 0
    while True:
        attempts += 1
        if attempts > retry_budget:
            logger.info("Waypoint placement exhausted", attempts=retry_budget, k=k,
                        min_distance=min_distance)
            raise PlacementExhausted(retry_budget)

        chosen = [rng.randrange(num_sites)]
        while len(chosen) < k:
            eligible = [site for site in range(num_sites)
                        if site not in chosen and
                        all(distances[site, other] >= min_distance for other in chosen)]
            if not eligible:
                break
            chosen.append(eligible[rng.randrange(len(eligible))])

        if len(chosen) == k:
            logger.debug("Waypoints placed", waypoints=chosen, attempts=attempts)
            return chosen


def split_start(waypoints: List[int]) -> Tuple[int, List[int]]:
    """Separate the start site from the ordered targets."""
    if not waypoints:
        raise InvalidInputError("Waypoint list is empty")
    return waypoints[0], list(waypoints[1:])
