"""
Game of Life rule step

Applies the survival/birth rule to every cell from its cached neighbor
count. The rule reads nothing but the cell record and writes nothing but
the cell's life state.
"""

from typing import Dict, Iterable, Optional, Set, Tuple
import logging

from .cells import Cell

logger = logging.getLogger(__name__)


# B3/S23
SURVIVAL_SET: Set[int] = {2, 3}  # counts that keep a live cell alive
BIRTH_SET: Set[int] = {3}        # counts that bring a dead cell to life


def next_state(alive: bool, live_neighbors: int) -> bool:
    """Decide whether a cell is alive in the next generation.

    Args:
        alive: Whether the cell is alive now
        live_neighbors: Live Moore neighbors counted for this generation

    Returns:
        Life state after the B3/S23 rule
    """
    if alive:
        return live_neighbors in SURVIVAL_SET
    return live_neighbors in BIRTH_SET


class LifeRule:
    """Survival and birth sets for a life-like rule.

    Defaults to standard Conway rules.
    """

    def __init__(self,
                 survival_set: Optional[Set[int]] = None,
                 birth_set: Optional[Set[int]] = None):
        """Initialize rule parameters.

        Args:
            survival_set: Neighbor counts for live cell survival (default {2,3})
            birth_set: Neighbor counts for dead cell birth (default {3})

        Raises:
            ValueError: If a set holds counts outside 0-8
        """
        self.survival_set: Set[int] = set(survival_set) if survival_set is not None else SURVIVAL_SET.copy()
        self.birth_set: Set[int] = set(birth_set) if birth_set is not None else BIRTH_SET.copy()

        for name, counts in (("survival", self.survival_set), ("birth", self.birth_set)):
            if any(not 0 <= n <= 8 for n in counts):
                raise ValueError(f"{name} set {sorted(counts)} must only contain counts 0-8")

    @classmethod
    def standard(cls) -> 'LifeRule':
        """Create standard Conway rules."""
        return cls(SURVIVAL_SET.copy(), BIRTH_SET.copy())

    def next_state(self, alive: bool, live_neighbors: int) -> bool:
        if alive:
            return live_neighbors in self.survival_set
        return live_neighbors in self.birth_set

    def rule_table(self) -> Dict[Tuple[bool, int], bool]:
        """Map every (current_state, neighbor_count) pair to its next state."""
        return {
            (alive, neighbors): self.next_state(alive, neighbors)
            for alive in (False, True)
            for neighbors in range(9)
        }

    def __repr__(self) -> str:
        return f"LifeRule(survival={sorted(self.survival_set)}, birth={sorted(self.birth_set)})"


def apply_rule(cells: Iterable[Cell], rule: Optional[LifeRule] = None) -> int:
    """Advance every cell one generation using its cached neighbor count.

    Counts must come from a count pass over the current states; the caller
    is responsible for recounting before the next call.

    Args:
        cells: Cell records to update in place
        rule: Rule to apply (standard Conway rules if None)

    Returns:
        Number of cells whose state flipped
    """
    decide = rule.next_state if rule is not None else next_state
    flipped = 0

    for cell in cells:
        new_state = decide(cell.alive, cell.neighbor_count)
        if new_state != cell.alive:
            cell.alive = new_state
            flipped += 1

    return flipped
