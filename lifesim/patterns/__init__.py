"""Seed patterns for initial grid states."""

from .seeders import (
    BEEHIVE_PATTERN,
    BLINKER_PATTERN,
    BLOCK_PATTERN,
    SEED_CATALOG,
    all_alive,
    all_dead,
    get_seed,
    pattern_seed,
    random_fill,
)

__all__ = [
    'BEEHIVE_PATTERN',
    'BLINKER_PATTERN',
    'BLOCK_PATTERN',
    'SEED_CATALOG',
    'all_alive',
    'all_dead',
    'get_seed',
    'pattern_seed',
    'random_fill',
]
