"""Tests for the Game of Life rule step.

Checks the full rule table and the in-place update of cell records from
their cached neighbor counts.
"""

import pytest
from lifesim.core.cells import Cell, Position
from lifesim.core.rules import BIRTH_SET, SURVIVAL_SET, LifeRule, apply_rule, next_state


class TestNextState:
    """Single-cell transitions."""

    @pytest.mark.parametrize("neighbors", [2, 3])
    def test_live_cell_survives(self, neighbors):
        """Live cell with 2-3 neighbors survives."""
        assert next_state(True, neighbors) is True

    @pytest.mark.parametrize("neighbors", [0, 1, 4, 5, 6, 7, 8])
    def test_live_cell_dies(self, neighbors):
        """Live cell dies from under- or overpopulation."""
        assert next_state(True, neighbors) is False

    def test_dead_cell_birth(self):
        """Dead cell with exactly 3 neighbors becomes alive."""
        assert next_state(False, 3) is True

    @pytest.mark.parametrize("neighbors", [0, 1, 2, 4, 5, 6, 7, 8])
    def test_dead_cell_stays_dead(self, neighbors):
        """Dead cell stays dead for any count other than 3."""
        assert next_state(False, neighbors) is False

    def test_standard_sets(self):
        assert SURVIVAL_SET == {2, 3}
        assert BIRTH_SET == {3}


class TestLifeRule:
    """Rule parameter objects."""

    def test_standard_matches_module_rule(self):
        """Standard rule agrees with next_state for every pair."""
        rule = LifeRule.standard()
        for (alive, neighbors), result in rule.rule_table().items():
            assert result == next_state(alive, neighbors)

    def test_rule_table_has_eighteen_entries(self):
        """Rule table covers both states and counts 0-8."""
        table = LifeRule().rule_table()
        assert len(table) == 18
        assert [key for key, value in table.items() if value] == [(False, 3), (True, 2), (True, 3)]

    def test_custom_sets_copied(self):
        """Custom sets are copied on construction."""
        survival = {2, 3}
        rule = LifeRule(survival_set=survival, birth_set={3, 6})
        survival.add(5)
        assert rule.survival_set == {2, 3}
        assert rule.next_state(False, 6) is True

    def test_invalid_counts_rejected(self):
        """Counts outside 0-8 are rejected."""
        with pytest.raises(ValueError):
            LifeRule(birth_set={9})

    def test_repr(self):
        assert repr(LifeRule()) == "LifeRule(survival=[2, 3], birth=[3])"


class TestApplyRule:
    """Bulk rule application over cell records."""

    def test_writes_new_states(self):
        """Each cell's state follows its cached count."""
        cells = [
            Cell(Position(0, 0), True, 1),   # dies
            Cell(Position(1, 0), True, 2),   # survives
            Cell(Position(2, 0), False, 3),  # born
            Cell(Position(3, 0), False, 2),  # stays dead
            Cell(Position(4, 0), True, 4),   # dies
        ]

        flipped = apply_rule(cells)

        assert flipped == 3
        assert [cell.alive for cell in cells] == [False, True, True, False, False]

    def test_counts_untouched(self):
        """Rule step never writes neighbor counts."""
        cells = [Cell(Position(0, 0), True, 1), Cell(Position(1, 0), False, 3)]
        apply_rule(cells)
        assert [cell.neighbor_count for cell in cells] == [1, 3]

    def test_no_flip_reports_zero(self):
        """Stable cells report no flips."""
        cells = [Cell(Position(x, 0), True, 3) for x in range(4)]
        assert apply_rule(cells) == 0
        assert all(cell.alive for cell in cells)

    def test_custom_rule(self):
        """A supplied rule replaces the standard one."""
        cells = [Cell(Position(0, 0), False, 6)]
        assert apply_rule(cells, LifeRule(birth_set={3, 6})) == 1
        assert cells[0].alive is True
