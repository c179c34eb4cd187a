"""Seed patterns for initial cell states.

A seed is any callable taking (x, y) and returning the initial life state
of that coordinate. The cell store calls it exactly once per coordinate, in
row-major order.
"""

from typing import Callable, Dict, Optional
import numpy as np
import logging

logger = logging.getLogger(__name__)

SeedFunction = Callable[[int, int], bool]


# Classic literal patterns, indexed [y, x]
BLOCK_PATTERN = np.array([
    [True, True],
    [True, True]
], dtype=bool)

BEEHIVE_PATTERN = np.array([
    [False, False, True, True, False, False],
    [False, True, False, False, True, False],
    [False, False, True, True, False, False]
], dtype=bool)

# Vertical bar in column 1 of a 3x3 box
BLINKER_PATTERN = np.array([
    [False, True, False],
    [False, True, False],
    [False, True, False]
], dtype=bool)


def all_alive(x: int, y: int) -> bool:
    """Seed every coordinate alive."""
    return True


def all_dead(x: int, y: int) -> bool:
    """Seed every coordinate dead."""
    return False


def random_fill(probability: float = 0.5, seed: Optional[int] = None) -> SeedFunction:
    """Create a seed making each cell alive independently with a probability.

    Args:
        probability: Chance of a cell starting alive (0.0 to 1.0)
        seed: Random generator seed for reproducible fills

    Raises:
        ValueError: If probability is outside [0.0, 1.0]
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"Live probability must be in [0.0, 1.0], got {probability}")

    rng = np.random.default_rng(seed)

    def seed_cell(x: int, y: int) -> bool:
        return bool(rng.random() < probability)

    return seed_cell


def pattern_seed(pattern: np.ndarray, x: int = 0, y: int = 0) -> SeedFunction:
    """Create a seed placing a literal pattern with its top-left corner at (x, y).

    Coordinates outside the pattern start dead; the pattern is clipped by
    whatever grid consumes the seed.

    Args:
        pattern: 2D boolean array representing the pattern
        x: Top-left x-coordinate for placement
        y: Top-left y-coordinate for placement
    """
    if pattern.ndim != 2:
        raise ValueError(f"Pattern must be 2-dimensional, got shape {pattern.shape}")
    if pattern.dtype != bool:
        pattern = pattern.astype(bool)

    pattern_height, pattern_width = pattern.shape

    def seed_cell(cx: int, cy: int) -> bool:
        px, py = cx - x, cy - y
        if 0 <= px < pattern_width and 0 <= py < pattern_height:
            return bool(pattern[py, px])
        return False

    return seed_cell


def _literal(pattern: np.ndarray) -> Callable[..., SeedFunction]:
    def factory(x: int = 0, y: int = 0) -> SeedFunction:
        return pattern_seed(pattern, x, y)
    return factory


SEED_CATALOG: Dict[str, Callable[..., SeedFunction]] = {
    "all_alive": lambda: all_alive,
    "all_dead": lambda: all_dead,
    "random": random_fill,
    "block": _literal(BLOCK_PATTERN),
    "beehive": _literal(BEEHIVE_PATTERN),
    "blinker": _literal(BLINKER_PATTERN),
}


def get_seed(name: str, **options) -> SeedFunction:
    """Resolve a seed by catalog name.

    Args:
        name: Catalog entry ("all_alive", "all_dead", "random", "block", "beehive", "blinker")
        **options: Passed to the entry's factory (e.g. probability, seed, x, y)

    Raises:
        ValueError: If the name is unknown
    """
    try:
        factory = SEED_CATALOG[name]
    except KeyError:
        raise ValueError(f"Unknown seed pattern {name!r}; expected one of {sorted(SEED_CATALOG)}") from None

    logger.debug(f"Using seed pattern {name} with options {options}")
    return factory(**options)
