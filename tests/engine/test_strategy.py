"""
Dice Duel - Computer Strategy Tests

Tests for the keep heuristic used on the computer's second and third rolls.
"""

import pytest
from src.engine.base import DiceRoll
from src.engine.dice import DiceRoller
from src.engine.strategy import ComputerStrategy


def _dice(*values: int) -> DiceRoll:
    return DiceRoll(values=values)


# === Constants ===


class TestThresholds:
    """The heuristic thresholds are fixed."""

    def test_constants(self):
        assert ComputerStrategy.HIGH_SUM_SECOND_ROLL == 22
        assert ComputerStrategy.DECENT_SUM_THIRD_ROLL == 18
        assert ComputerStrategy.FAR_BEHIND_MARGIN == -20
        assert ComputerStrategy.AGGRESSIVE_KEEP_MIN == 5
        assert ComputerStrategy.MODERATE_KEEP_MIN == 4


# === Keep Mask ===


class TestSecondRollMask:
    """Tests for choose_keep_mask() with roll_count == 1."""

    def test_table(self, second_roll_cases):
        for name, (dice, computer, player, win, expected) in second_roll_cases.items():
            mask = ComputerStrategy.choose_keep_mask(_dice(*dice), computer, player, win, 1)
            assert mask == expected, name

    def test_margin_is_strict(self):
        """Exactly 20 behind is not far behind."""
        mask = ComputerStrategy.choose_keep_mask(_dice(4, 4, 1, 1, 1), 60, 80, 101, 1)
        assert mask == (True, True, False, False, False)

    def test_far_behind_drops_fours(self):
        mask = ComputerStrategy.choose_keep_mask(_dice(4, 4, 1, 1, 1), 59, 80, 101, 1)
        assert mask == (False,) * 5


class TestThirdRollMask:
    """Tests for choose_keep_mask() with roll_count == 2."""

    def test_table(self, third_roll_cases):
        for name, (dice, computer, player, win, expected) in third_roll_cases.items():
            mask = ComputerStrategy.choose_keep_mask(_dice(*dice), computer, player, win, 2)
            assert mask == expected, name

    def test_sum_17_is_low(self):
        mask = ComputerStrategy.choose_keep_mask(_dice(6, 5, 3, 2, 1), 50, 50, 101, 2)
        assert mask == (True, True, False, False, False)

    def test_ahead_with_decent_sum_stands(self):
        mask = ComputerStrategy.choose_keep_mask(_dice(3, 3, 4, 4, 4), 70, 20, 150, 2)
        assert mask == (True,) * 5

    def test_high_sum_alone_does_not_stand_when_behind(self):
        """The 22 shortcut only applies on the second roll."""
        mask = ComputerStrategy.choose_keep_mask(_dice(6, 6, 6, 3, 1), 10, 60, 101, 2)
        assert mask == (True, True, True, False, False)


class TestMaskEdges:
    """Out-of-range roll counts."""

    def test_roll_count_three_keeps_all(self):
        mask = ComputerStrategy.choose_keep_mask(_dice(1, 1, 1, 1, 1), 0, 0, 101, 3)
        assert mask == (True,) * 5

    @pytest.mark.parametrize("roll_count", [0, -1])
    def test_before_first_roll_raises(self, roll_count):
        with pytest.raises(ValueError, match="second roll"):
            ComputerStrategy.choose_keep_mask(_dice(1, 1, 1, 1, 1), 0, 0, 101, roll_count)


# === Decide ===


class TestDecide:
    """Tests for ComputerStrategy.decide()."""

    def test_stand_pat_on_22(self, scripted_rng):
        rng = scripted_rng()
        strategy = ComputerStrategy(DiceRoller(rng))
        result = strategy.decide(_dice(6, 6, 6, 2, 2), 95, 80, 101, 1)
        assert result.keep_mask == (True,) * 5
        assert result.dice.values == (6, 6, 6, 2, 2)
        assert result.roll_count == 2
        assert rng.calls == []

    def test_far_behind_rerolls_all_but_five(self, scripted_rng):
        rng = scripted_rng(6, 6, 1, 2)
        strategy = ComputerStrategy(DiceRoller(rng))
        result = strategy.decide(_dice(3, 4, 5, 2, 1), 50, 80, 101, 1)
        assert result.keep_mask == (False, False, True, False, False)
        assert result.dice.values == (6, 6, 5, 1, 2)
        assert result.roll_count == 2
        assert rng.exhausted

    def test_third_roll_increments_to_three(self, scripted_rng):
        strategy = ComputerStrategy(DiceRoller(scripted_rng(2, 2, 2)))
        result = strategy.decide(_dice(4, 3, 2, 1, 6), 0, 0, 101, 2)
        assert result.dice.values == (4, 2, 2, 2, 6)
        assert result.roll_count == 3

    def test_roll_count_three_is_noop(self, scripted_rng):
        rng = scripted_rng()
        dice = _dice(1, 2, 3, 4, 5)
        result = ComputerStrategy(DiceRoller(rng)).decide(dice, 0, 0, 101, 3)
        assert result.dice is dice
        assert result.roll_count == 3
        assert rng.calls == []

    def test_roll_count_above_three_is_noop(self):
        dice = _dice(1, 2, 3, 4, 5)
        result = ComputerStrategy().decide(dice, 0, 0, 101, 4)
        assert result.dice is dice
        assert result.roll_count == 4

    def test_does_not_mutate_input(self):
        dice = _dice(1, 1, 1, 1, 1)
        ComputerStrategy().decide(dice, 0, 0, 101, 1)
        assert dice.values == (1, 1, 1, 1, 1)

    def test_values_always_in_range(self):
        strategy = ComputerStrategy()
        dice = _dice(1, 2, 3, 4, 5)
        for _ in range(200):
            result = strategy.decide(dice, 0, 50, 101, 1)
            assert all(1 <= v <= 6 for v in result.dice)

    def test_kept_dice_never_change(self):
        strategy = ComputerStrategy()
        dice = _dice(6, 1, 5, 2, 4)
        for _ in range(100):
            result = strategy.decide(dice, 0, 0, 101, 1)
            for i, kept in enumerate(result.keep_mask):
                if kept:
                    assert result.dice[i] == dice[i]
