"""Neighbor counting strategies.

Two interchangeable indexes answer "how many of the 8 Moore neighbors of P
are alive?" over a snapshot of live coordinates:

- KDTreeNeighborIndex: spatial index (scipy cKDTree) with a fixed-radius
  ball query, filtered to the exact 3x3 box. Cheap when live cells are
  sparse relative to the grid.
- DenseNeighborIndex: coordinate-keyed presence set probed at the 8 fixed
  offsets. Lower constant overhead on small or dense grids.

Both are fully rebuilt from the live set; neither wraps around grid edges,
so off-grid offsets never match a live coordinate.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Type
import numpy as np
import logging
from scipy.spatial import cKDTree

logger = logging.getLogger(__name__)

# Moore neighborhood, center excluded
MOORE_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if not (dx == 0 and dy == 0)
)

# Encloses the diagonal neighbors at sqrt(2) and excludes anything at distance 2
QUERY_RADIUS = 1.5

Coordinate = Tuple[int, int]


class NeighborIndex(ABC):
    """Read-only neighbor count structure over a set of live coordinates."""

    name = "abstract"

    @abstractmethod
    def rebuild(self, live_positions: Iterable[Coordinate]) -> None:
        """Replace the indexed live set entirely."""

    @abstractmethod
    def query_count(self, position: Coordinate) -> int:
        """Number of live Moore neighbors of a position (0-8)."""

    @property
    @abstractmethod
    def live_count(self) -> int:
        """Size of the indexed live set."""

    def query_counts(self, positions: Sequence[Coordinate]) -> List[int]:
        """Neighbor counts for many positions, in input order."""
        return [self.query_count(position) for position in positions]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(live={self.live_count})"


class DenseNeighborIndex(NeighborIndex):
    """Presence-set lookup probing the 8 fixed offsets."""

    name = "dense"

    def __init__(self):
        self._live: Set[Coordinate] = set()

    def rebuild(self, live_positions: Iterable[Coordinate]) -> None:
        self._live = {(int(x), int(y)) for x, y in live_positions}

    def query_count(self, position: Coordinate) -> int:
        x, y = position
        live = self._live
        count = 0
        for dx, dy in MOORE_OFFSETS:
            if (x + dx, y + dy) in live:
                count += 1
        return count

    @property
    def live_count(self) -> int:
        return len(self._live)


class KDTreeNeighborIndex(NeighborIndex):
    """Spatial index over live coordinates using a 2-d k-d tree.

    A ball query of radius QUERY_RADIUS returns candidates around the query
    point; candidates are then filtered to the 8-neighbor box and the query
    point itself is dropped.
    """

    name = "kdtree"

    def __init__(self, workers: int = 1):
        """Initialize an empty index.

        Args:
            workers: Threads scipy may use for bulk ball queries (-1 for all cores)

        Raises:
            ValueError: If workers is not -1 or a positive integer
        """
        validate_query_workers(workers)
        self.workers = workers
        self._points = np.empty((0, 2), dtype=np.int64)
        self._tree: Optional[cKDTree] = None

    def rebuild(self, live_positions: Iterable[Coordinate]) -> None:
        points = np.array(sorted({(int(x), int(y)) for x, y in live_positions}), dtype=np.int64)
        if points.size == 0:
            self._points = np.empty((0, 2), dtype=np.int64)
            self._tree = None
            return

        self._points = points
        self._tree = cKDTree(points.astype(np.float64))

    def _count_candidates(self, position: Coordinate, candidates: Sequence[int]) -> int:
        if len(candidates) == 0:
            return 0
        found = self._points[np.asarray(candidates, dtype=np.intp)]
        dx = np.abs(found[:, 0] - position[0])
        dy = np.abs(found[:, 1] - position[1])
        in_box = (dx <= 1) & (dy <= 1) & ~((dx == 0) & (dy == 0))
        return int(np.count_nonzero(in_box))

    def query_count(self, position: Coordinate) -> int:
        if self._tree is None:
            return 0
        candidates = self._tree.query_ball_point((float(position[0]), float(position[1])), QUERY_RADIUS)
        return self._count_candidates(position, candidates)

    def query_counts(self, positions: Sequence[Coordinate]) -> List[int]:
        """Vectorized ball query over all positions at once."""
        if self._tree is None or len(positions) == 0:
            return [0] * len(positions)

        query_points = np.asarray(positions, dtype=np.float64).reshape(-1, 2)
        candidate_lists = self._tree.query_ball_point(query_points, QUERY_RADIUS, workers=self.workers)
        return [
            self._count_candidates(position, candidates)
            for position, candidates in zip(positions, candidate_lists)
        ]

    @property
    def live_count(self) -> int:
        return int(self._points.shape[0])


NEIGHBOR_STRATEGIES: Dict[str, Type[NeighborIndex]] = {
    KDTreeNeighborIndex.name: KDTreeNeighborIndex,
    DenseNeighborIndex.name: DenseNeighborIndex,
}


def validate_query_workers(query_workers: int) -> None:
    """Check a scipy worker count: -1 (all cores) or a positive integer.

    Raises:
        ValueError: If the count is not -1 or >= 1
    """
    if (isinstance(query_workers, bool) or not isinstance(query_workers, int)
            or not (query_workers == -1 or query_workers >= 1)):
        raise ValueError(f"query_workers must be -1 or a positive integer, got {query_workers!r}")


def create_neighbor_index(strategy: str, query_workers: int = 1) -> NeighborIndex:
    """Build an empty neighbor index by strategy name.

    Args:
        strategy: "kdtree" or "dense"
        query_workers: Threads scipy uses for bulk kd-tree queries (ignored by "dense")

    Raises:
        ValueError: If the strategy name or worker count is invalid
    """
    try:
        index_class = NEIGHBOR_STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"Unknown neighbor strategy {strategy!r}; "
                         f"expected one of {sorted(NEIGHBOR_STRATEGIES)}") from None

    if index_class is KDTreeNeighborIndex:
        return KDTreeNeighborIndex(workers=query_workers)
    validate_query_workers(query_workers)
    return index_class()
