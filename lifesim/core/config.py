"""Run configuration for a simulation.

Collects grid size, generation count, neighbor strategy, worker count and
seed selection in one validated object. Values can be given directly or
read from LIFESIM_* environment variables.
"""

import os
from typing import Any, Dict, Optional
import logging

from .cells import validate_dimensions
from .neighbors import NEIGHBOR_STRATEGIES, validate_query_workers
from ..patterns.seeders import SEED_CATALOG

logger = logging.getLogger(__name__)


class SimulationConfig:
    """Configuration for one simulation run."""

    def __init__(self,
                 width: int = 4,
                 height: int = 4,
                 generations: int = 10,
                 strategy: str = "kdtree",
                 workers: int = 1,
                 query_workers: int = 1,
                 seed_pattern: str = "random",
                 live_probability: float = 0.5,
                 random_seed: Optional[int] = None):
        """Initialize and validate a run configuration.

        Args:
            width: Grid width in cells (> 0)
            height: Grid height in cells (> 0)
            generations: Number of generations to run (>= 0)
            strategy: Neighbor index strategy ("kdtree" or "dense")
            workers: Threads used by the neighbor count pass (>= 1)
            query_workers: scipy threads for kd-tree bulk queries (-1 for all cores)
            seed_pattern: Seed catalog name for the initial state
            live_probability: Live chance used by the "random" seed
            random_seed: Generator seed used by the "random" seed

        Raises:
            ValueError: If any value is invalid (GridConfigurationError for geometry)
        """
        self.width = width
        self.height = height
        self.generations = generations
        self.strategy = strategy
        self.workers = workers
        self.query_workers = query_workers
        self.seed_pattern = seed_pattern
        self.live_probability = live_probability
        self.random_seed = random_seed

        self.validate()

    def validate(self) -> None:
        """Fail fast on configuration errors before any generation runs."""
        validate_dimensions(self.width, self.height)

        if isinstance(self.generations, bool) or not isinstance(self.generations, int) or self.generations < 0:
            raise ValueError(f"generations must be a non-negative integer, got {self.generations!r}")

        if self.strategy not in NEIGHBOR_STRATEGIES:
            raise ValueError(f"Unknown neighbor strategy {self.strategy!r}; "
                             f"expected one of {sorted(NEIGHBOR_STRATEGIES)}")

        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise ValueError(f"workers must be a positive integer, got {self.workers!r}")

        validate_query_workers(self.query_workers)

        if self.seed_pattern not in SEED_CATALOG:
            raise ValueError(f"Unknown seed pattern {self.seed_pattern!r}; "
                             f"expected one of {sorted(SEED_CATALOG)}")

        if not 0.0 <= self.live_probability <= 1.0:
            raise ValueError(f"live_probability must be in [0.0, 1.0], got {self.live_probability}")

    def seed_options(self) -> Dict[str, Any]:
        """Keyword options for the configured seed factory."""
        if self.seed_pattern == "random":
            return {"probability": self.live_probability, "seed": self.random_seed}
        return {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "generations": self.generations,
            "strategy": self.strategy,
            "workers": self.workers,
            "query_workers": self.query_workers,
            "seed_pattern": self.seed_pattern,
            "live_probability": self.live_probability,
            "random_seed": self.random_seed,
        }

    def copy(self) -> 'SimulationConfig':
        """Create a copy of the configuration."""
        return SimulationConfig(**self.to_dict())

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'SimulationConfig':
        """Create configuration from LIFESIM_* environment variables.

        Unset variables fall back to the constructor defaults.

        Raises:
            ValueError: If a variable cannot be parsed or fails validation
        """
        env = os.environ if environ is None else environ

        def read_int(name: str, default: Optional[int]) -> Optional[int]:
            raw = env.get(name)
            if raw is None or raw.strip() == "":
                return default
            try:
                return int(raw)
            except ValueError:
                raise ValueError(f"{name} must be an integer, got {raw!r}") from None

        def read_float(name: str, default: float) -> float:
            raw = env.get(name)
            if raw is None or raw.strip() == "":
                return default
            try:
                return float(raw)
            except ValueError:
                raise ValueError(f"{name} must be a number, got {raw!r}") from None

        config = cls(
            width=read_int('LIFESIM_WIDTH', 4),
            height=read_int('LIFESIM_HEIGHT', 4),
            generations=read_int('LIFESIM_GENERATIONS', 10),
            strategy=env.get('LIFESIM_STRATEGY', 'kdtree'),
            workers=read_int('LIFESIM_WORKERS', 1),
            query_workers=read_int('LIFESIM_QUERY_WORKERS', 1),
            seed_pattern=env.get('LIFESIM_SEED_PATTERN', 'random'),
            live_probability=read_float('LIFESIM_LIVE_PROBABILITY', 0.5),
            random_seed=read_int('LIFESIM_RANDOM_SEED', None),
        )
        logger.debug(f"Loaded configuration from environment: {config.to_dict()}")
        return config

    def __repr__(self) -> str:
        return (f"SimulationConfig({self.width}x{self.height}, generations={self.generations}, "
                f"strategy={self.strategy}, workers={self.workers}, seed={self.seed_pattern})")
