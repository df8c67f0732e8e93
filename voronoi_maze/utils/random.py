"""
Random number generation utilities.

All maze generation draws from the Alea PRNG so that a seed string fully
determines the result. Python's random module is only used where a caller
passes in its own generator.
"""

from typing import Optional
import uuid

from ..core.alea_prng import AleaPRNG


def new_seed() -> str:
    """Short random seed string for callers that did not supply one."""
    return uuid.uuid4().hex[:8]


def create_rng(seed: Optional[str] = None) -> AleaPRNG:
    """
    Create an independent Alea PRNG.

    Args:
        seed: Seed string; "default" if omitted

    Returns:
        AleaPRNG instance
    """
    return AleaPRNG(seed if seed is not None else "default")
