"""Cell store for the entity-oriented Game of Life engine.

Every grid coordinate owns exactly one Cell record holding its position,
life state and the neighbor count cached by the most recent count pass.
Cells are created once, in row-major order, and mutated in place for the
lifetime of a run.
"""

import math
from dataclasses import dataclass
from typing import Callable, Iterator, List, NamedTuple, Set, Tuple
import numpy as np
import logging

logger = logging.getLogger(__name__)

# Positions are signed 32-bit, the cell count is unsigned 32-bit
MAX_COORDINATE = 2**31 - 1
MAX_CELLS = 2**32 - 1

SeedFunction = Callable[[int, int], bool]


class GridConfigurationError(ValueError):
    """Raised when grid geometry cannot be represented by the cell store."""


class Position(NamedTuple):
    """Integer grid coordinate (x is the column, y is the row)."""
    x: int
    y: int

    def distance(self, other: Tuple[int, int]) -> int:
        """Integer Euclidean distance to another coordinate (floor of the root)."""
        dx = self.x - other[0]
        dy = self.y - other[1]
        return math.isqrt(dx * dx + dy * dy)


class CellSnapshot(NamedTuple):
    """Read-only view of a cell taken for inspection."""
    position: Position
    alive: bool
    neighbor_count: int


@dataclass
class Cell:
    """Mutable cell record.

    `alive` is written only by the rule step and `neighbor_count` only by the
    neighbor count pass.
    """

    position: Position
    alive: bool = False
    neighbor_count: int = 0

    def snapshot(self) -> CellSnapshot:
        return CellSnapshot(self.position, self.alive, self.neighbor_count)


def validate_dimensions(width: int, height: int) -> int:
    """Check grid dimensions and return the resulting cell count.

    Raises:
        GridConfigurationError: If the grid is empty or too large to index
    """
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise GridConfigurationError(f"Grid {name} must be an integer, got {value!r}")
        if value < 1:
            raise GridConfigurationError(f"Grid {name} must be positive, got {value}")
        if value - 1 > MAX_COORDINATE:
            raise GridConfigurationError(
                f"Grid {name} {value} exceeds the largest representable coordinate")

    total = int(width) * int(height)
    if total > MAX_CELLS:
        raise GridConfigurationError(
            f"Grid {width}x{height} holds {total} cells, more than the limit of {MAX_CELLS}")
    return total


class CellStore:
    """Fixed collection of cells, one per coordinate, in row-major order.

    Attributes:
        width: Grid width in cells
        height: Grid height in cells
        cells: Cell records ordered y-major, x-minor
    """

    def __init__(self, width: int, height: int, seed: SeedFunction):
        """Populate the store from a seed function.

        Args:
            width: Grid width (cells)
            height: Grid height (cells)
            seed: Callable returning the initial state for (x, y)

        Raises:
            GridConfigurationError: If dimensions are invalid
        """
        total = validate_dimensions(width, height)

        self.width = int(width)
        self.height = int(height)
        self.cells: List[Cell] = [
            Cell(Position(x, y), bool(seed(x, y)))
            for y in range(self.height)
            for x in range(self.width)
        ]

        logger.debug(f"Spawned {total} cells on a {self.width}x{self.height} grid "
                     f"({self.live_count()} alive)")

    @classmethod
    def create(cls, width: int, height: int, seed: SeedFunction) -> 'CellStore':
        """Factory alias for the constructor."""
        return cls(width, height, seed)

    def iterate(self) -> Iterator[Cell]:
        """Iterate over mutable cell records in creation order."""
        return iter(self.cells)

    def count(self) -> int:
        """Number of cells, always width * height."""
        return len(self.cells)

    def cell_at(self, x: int, y: int) -> Cell:
        """Get the cell record at a coordinate.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self.width}x{self.height} grid")
        return self.cells[y * self.width + x]

    def live_positions(self) -> Set[Position]:
        """Coordinates of every live cell."""
        return {cell.position for cell in self.cells if cell.alive}

    def live_count(self) -> int:
        """Count total number of live cells."""
        return sum(1 for cell in self.cells if cell.alive)

    def snapshot(self) -> Tuple[CellSnapshot, ...]:
        """Read-only copy of every cell in row-major order."""
        return tuple(cell.snapshot() for cell in self.cells)

    def to_array(self) -> np.ndarray:
        """Life states as a (height, width) boolean array."""
        states = np.fromiter((cell.alive for cell in self.cells), dtype=bool, count=len(self.cells))
        return states.reshape(self.height, self.width)

    def neighbor_counts_array(self) -> np.ndarray:
        """Cached neighbor counts as a (height, width) uint8 array."""
        counts = np.fromiter((cell.neighbor_count for cell in self.cells), dtype=np.uint8,
                             count=len(self.cells))
        return counts.reshape(self.height, self.width)

    def __iter__(self) -> Iterator[Cell]:
        return self.iterate()

    def __len__(self) -> int:
        return self.count()

    def __str__(self) -> str:
        """String representation showing live cells as X."""
        lines = []
        for y in range(self.height):
            row = self.cells[y * self.width:(y + 1) * self.width]
            lines.append("".join("X" if cell.alive else "." for cell in row))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"CellStore({self.width}x{self.height}, alive={self.live_count()})"
