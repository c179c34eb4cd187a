"""Tests for seed patterns and the seed catalog."""

import pytest
import numpy as np
from lifesim.core.cells import CellStore
from lifesim.patterns.seeders import (
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


class TestLiteralPatterns:
    """Fixed pattern definitions."""

    def test_block(self):
        """Block is a 2x2 all-alive square."""
        assert BLOCK_PATTERN.shape == (2, 2)
        assert BLOCK_PATTERN.all()

    def test_beehive_offsets(self):
        """Beehive is 6 wide, 3 tall, with six live cells."""
        assert BEEHIVE_PATTERN.shape == (3, 6)
        live = {(int(x), int(y)) for y, x in zip(*np.nonzero(BEEHIVE_PATTERN))}
        assert live == {(2, 0), (3, 0), (1, 1), (4, 1), (2, 2), (3, 2)}

    def test_blinker_offsets(self):
        """Blinker is a vertical bar in column 1."""
        live = {(int(x), int(y)) for y, x in zip(*np.nonzero(BLINKER_PATTERN))}
        assert live == {(1, 0), (1, 1), (1, 2)}


class TestSeedFunctions:
    """Seeds answer per-coordinate aliveness."""

    def test_all_alive_and_dead(self):
        assert all_alive(3, 7) is True
        assert all_dead(3, 7) is False

    def test_pattern_seed_offset(self):
        """Pattern is placed with its top-left at the given corner."""
        seed = pattern_seed(BLOCK_PATTERN, 2, 1)
        store = CellStore(5, 4, seed)
        assert store.live_positions() == {(2, 1), (3, 1), (2, 2), (3, 2)}

    def test_pattern_seed_clipped(self):
        """Only the part of the pattern inside the grid is seeded."""
        store = CellStore(2, 2, pattern_seed(BEEHIVE_PATTERN))
        assert store.live_positions() == {(1, 1)}

        store = CellStore(2, 2, pattern_seed(BEEHIVE_PATTERN, x=1))
        assert store.live_positions() == set()

    def test_pattern_seed_converts_dtype(self):
        """Integer patterns are treated as booleans."""
        seed = pattern_seed(np.array([[0, 1], [1, 0]]))
        assert seed(1, 0) is True
        assert seed(0, 0) is False

    def test_pattern_seed_rejects_1d(self):
        with pytest.raises(ValueError):
            pattern_seed(np.array([True, False]))

    def test_random_fill_reproducible(self):
        """Same generator seed, same fill."""
        first = CellStore(10, 10, random_fill(0.5, seed=42)).to_array()
        second = CellStore(10, 10, random_fill(0.5, seed=42)).to_array()
        assert np.array_equal(first, second)

    @pytest.mark.parametrize("probability,expected", [(0.0, 0), (1.0, 100)])
    def test_random_fill_extremes(self, probability, expected):
        store = CellStore(10, 10, random_fill(probability, seed=1))
        assert store.live_count() == expected

    def test_random_fill_default_density(self):
        """Default probability fills roughly half the grid."""
        store = CellStore(50, 50, random_fill(seed=0))
        assert 0.4 < store.live_count() / store.count() < 0.6

    @pytest.mark.parametrize("probability", [-0.1, 1.5])
    def test_random_fill_invalid_probability(self, probability):
        with pytest.raises(ValueError):
            random_fill(probability)


class TestSeedCatalog:
    """Name-based seed lookup."""

    def test_catalog_names(self):
        assert set(SEED_CATALOG) == {"all_alive", "all_dead", "random", "block", "beehive", "blinker"}

    def test_get_seed_literal(self):
        store = CellStore(3, 3, get_seed("blinker"))
        assert store.live_positions() == {(1, 0), (1, 1), (1, 2)}

    def test_get_seed_with_options(self):
        store = CellStore(4, 4, get_seed("block", x=1, y=1))
        assert store.live_positions() == {(1, 1), (2, 1), (1, 2), (2, 2)}

    def test_get_seed_random_options(self):
        store = CellStore(5, 5, get_seed("random", probability=1.0, seed=3))
        assert store.live_count() == 25

    def test_unknown_seed(self):
        with pytest.raises(ValueError, match="Unknown seed pattern"):
            get_seed("glider")
