"""All-pairs graph distances between maze rooms."""

from typing import Iterable, Tuple

import numpy as np
import structlog

from .exceptions import InvalidInputError

logger = structlog.get_logger()

UNKNOWN = -1


def compute_distances(num_sites: int, passable_pairs: Iterable[Tuple[int, int]]) -> np.ndarray:
    """
    Compute the number of passable edges between every pair of sites.

    Starts from 0 on the diagonal and 1 across each passable edge, then
    sweeps every reference site over every passable edge, extending known
    distances by one step, until nothing is unknown. On a spanning tree the
    result is the unique-path length.

    Args:
        num_sites: Number of sites
        passable_pairs: (site_a, site_b) of each passable edge

    Returns:
        Symmetric (num_sites, num_sites) int array

    Raises:
        InvalidInputError: If some pair of sites is not connected
    """
    pairs = [(int(a), int(b)) for a, b in passable_pairs]
    for a, b in pairs:
        if not (0 <= a < num_sites and 0 <= b < num_sites):
            raise InvalidInputError(f"Edge ({a}, {b}) references a site outside 0..{num_sites - 1}")

    distances = np.full((num_sites, num_sites), UNKNOWN, dtype=int)
    np.fill_diagonal(distances, 0)
    for a, b in pairs:
        distances[a, b] = 1
        distances[b, a] = 1

    sweeps = 0
    while np.any(distances == UNKNOWN):
        sweeps += 1
        changed = False
        for ref in range(num_sites):
            row = distances[ref]
            for a, b in pairs:
                if row[b] == UNKNOWN and row[a] != UNKNOWN:
                    row[b] = row[a] + 1
                    changed = True
                if row[a] == UNKNOWN and row[b] != UNKNOWN:
                    row[a] = row[b] + 1
                    changed = True

        if not changed:
            raise InvalidInputError(
                f"Passable edges do not connect all {num_sites} sites")

    logger.debug("Distances computed", sites=num_sites, sweeps=sweeps,
                 max_distance=max_distance(distances))
    return distances


def max_distance(distances: np.ndarray) -> int:
    """Largest entry of a distance matrix (0 when empty)."""
    return int(distances.max()) if distances.size else 0
