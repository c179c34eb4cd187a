"""Generation scheduler for the entity-oriented Game of Life.

One engine owns a cell store, a neighbor index and the change flag that
tells it whether the index is stale. Each generation runs a fixed pipeline:

    rebuild index (if changed) -> count neighbors -> apply rule
    -> rebuild index (if changed) -> count neighbors

The trailing rebuild and recount keep every cached neighbor count consistent
with the latest committed state, so a snapshot taken between generations
never shows stale counts.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple, Union
import logging

from .cells import CellSnapshot, CellStore
from .config import SimulationConfig
from .neighbors import NeighborIndex, create_neighbor_index
from .rules import LifeRule, apply_rule
from ..patterns.seeders import get_seed

logger = logging.getLogger(__name__)


class LifeEngine:
    """Runs generations over a cell store with a pluggable neighbor index.

    Attributes:
        store: Cell records being simulated
        index: Neighbor index used by the count pass
        rule: Survival/birth rule
        workers: Threads used by the count pass
        changed: Change flag; True when the index no longer matches the live set
        generation: Number of completed generations
        rebuilds: Number of index rebuilds performed
    """

    def __init__(self,
                 store: CellStore,
                 index: Union[str, NeighborIndex] = "kdtree",
                 rule: Optional[LifeRule] = None,
                 workers: int = 1,
                 query_workers: int = 1):
        """Initialize the engine.

        Args:
            store: Populated cell store
            index: Strategy name ("kdtree" or "dense") or a NeighborIndex instance
            rule: Life rule (standard Conway rules if None)
            workers: Threads for the neighbor count pass (1 counts inline)
            query_workers: scipy threads for kd-tree bulk queries when index is a name

        Raises:
            ValueError: If the strategy name or worker count is invalid
        """
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise ValueError(f"workers must be a positive integer, got {workers!r}")

        self.store = store
        self.index = (create_neighbor_index(index, query_workers) if isinstance(index, str)
                      else index)
        self.rule = rule or LifeRule.standard()
        self.workers = workers
        self._pool: Optional[ThreadPoolExecutor] = None

        # Forces the first rebuild
        self.changed = True
        self.generation = 0
        self.rebuilds = 0

        logger.debug(f"Created engine for {store!r} using {type(self.index).__name__}")

    def rebuild_index(self) -> bool:
        """Rebuild the neighbor index from the live set if the change flag is set.

        Returns:
            True if the index was rebuilt
        """
        if not self.changed:
            return False

        start = time.perf_counter()
        self.index.rebuild(self.store.live_positions())
        self.changed = False
        self.rebuilds += 1

        logger.debug(f"Rebuilt {self.index.name} index with {self.index.live_count} live cells "
                     f"in {time.perf_counter() - start:.6f}s")
        return True

    def _executor(self) -> ThreadPoolExecutor:
        # One pool serves every count pass until close()
        if self._pool is None:
            self._pool = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="lifesim-count")
        return self._pool

    def close(self) -> None:
        """Shut down the count pass thread pool, if one was started."""
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    def __enter__(self) -> 'LifeEngine':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def _count_chunk(self, positions: List[Tuple[int, int]]) -> List[int]:
        return self.index.query_counts(positions)

    def count_neighbors(self) -> None:
        """Write the live neighbor count of every cell from the current index.

        The index is only read during the pass. With more than one worker
        the cells are split into contiguous chunks counted on a thread pool;
        results are written back on the calling thread.
        """
        start = time.perf_counter()
        cells = self.store.cells
        positions = [cell.position for cell in cells]

        if self.workers == 1 or len(positions) < self.workers:
            counts = self.index.query_counts(positions)
        else:
            chunk_size = -(-len(positions) // self.workers)
            chunks = [positions[i:i + chunk_size] for i in range(0, len(positions), chunk_size)]
            counts = []
            for chunk_counts in self._executor().map(self._count_chunk, chunks):
                counts.extend(chunk_counts)

        for cell, count in zip(cells, counts):
            cell.neighbor_count = count

        logger.debug(f"Updated neighbor counts for {len(cells)} cells "
                     f"in {time.perf_counter() - start:.6f}s")

    def apply_rule(self) -> int:
        """Apply the life rule to every cell, raising the change flag on any flip.

        Returns:
            Number of cells whose state flipped
        """
        flipped = apply_rule(self.store.cells, self.rule)
        if flipped:
            self.changed = True
        return flipped

    def refresh(self) -> None:
        """Bring cached neighbor counts in line with the current states."""
        self.rebuild_index()
        self.count_neighbors()

    def step(self) -> int:
        """Run one generation of the pipeline.

        Returns:
            Number of cells whose state flipped
        """
        self.rebuild_index()
        self.count_neighbors()
        flipped = self.apply_rule()
        self.rebuild_index()
        self.count_neighbors()

        self.generation += 1
        logger.debug(f"Generation {self.generation}: {flipped} cells flipped, "
                     f"{self.index.live_count} alive")
        return flipped

    def run(self, generations: int) -> List[int]:
        """Run exactly the requested number of generations.

        Args:
            generations: Number of generations (0 leaves the state untouched)

        Returns:
            Flipped cell count of each generation

        Raises:
            ValueError: If generations is negative
        """
        if isinstance(generations, bool) or not isinstance(generations, int) or generations < 0:
            raise ValueError(f"generations must be a non-negative integer, got {generations!r}")

        start = time.perf_counter()
        flips = [self.step() for _ in range(generations)]

        logger.info(f"Ran {generations} generations on {self.store.width}x{self.store.height} grid "
                    f"in {time.perf_counter() - start:.3f}s ({self.rebuilds} index rebuilds)")
        return flips

    def snapshot(self) -> Tuple[CellSnapshot, ...]:
        """Read-only (position, alive, neighbor_count) view in row-major order."""
        return self.store.snapshot()

    def __repr__(self) -> str:
        return (f"LifeEngine({self.store.width}x{self.store.height}, index={self.index.name}, "
                f"generation={self.generation}, changed={self.changed})")


def create_engine(config: SimulationConfig) -> LifeEngine:
    """Build a seeded cell store and engine from a configuration."""
    seed = get_seed(config.seed_pattern, **config.seed_options())
    store = CellStore(config.width, config.height, seed)
    return LifeEngine(store, config.strategy, workers=config.workers,
                      query_workers=config.query_workers)


def simulate(config: Optional[SimulationConfig] = None, **overrides) -> LifeEngine:
    """Run a full simulation headlessly and return the finished engine.

    Args:
        config: Run configuration (defaults if None)
        **overrides: SimulationConfig fields replacing those in config

    Returns:
        Engine holding the final state
    """
    if config is None:
        config = SimulationConfig(**overrides)
    elif overrides:
        config = SimulationConfig(**{**config.to_dict(), **overrides})

    logger.info(f"Running Game of Life: {config!r}")
    with create_engine(config) as engine:
        engine.run(config.generations)
    return engine
