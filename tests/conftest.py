"""
Dice Duel - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import random
from typing import Callable

import pytest

from src.engine.base import GameConfig
from src.engine.round_engine import RoundEngine


class ScriptedRandom:
    """Random source that hands out a fixed sequence of die faces."""

    def __init__(self, values: list[int]) -> None:
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if not self.values:
            raise AssertionError("ScriptedRandom ran out of values")
        return self.values.pop(0)

    @property
    def exhausted(self) -> bool:
        return not self.values

    def extend(self, *values: int) -> None:
        self.values.extend(values)


@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedRandom]:
    """Factory for a random source that returns the given faces in order."""
    def _make(*values: int) -> ScriptedRandom:
        return ScriptedRandom(list(values))
    return _make


@pytest.fixture
def scripted_engine(scripted_rng) -> Callable[..., tuple[RoundEngine, ScriptedRandom]]:
    """
    Factory for an engine driven by a scripted random source.

    Returns:
        Callable taking (*values, win_point=101) and returning (engine, rng)
    """
    def _make(*values: int, win_point: int = 101) -> tuple[RoundEngine, ScriptedRandom]:
        rng = scripted_rng(*values)
        engine = RoundEngine(GameConfig(win_point=win_point), rng=rng)
        return engine, rng
    return _make


@pytest.fixture
def seeded_rng() -> random.Random:
    """Deterministic real random source for property-style tests."""
    return random.Random(20240101)


# =============================================================================
# STRATEGY TEST DATA
# =============================================================================

@pytest.fixture
def second_roll_cases() -> dict[str, tuple[tuple[int, ...], int, int, int, tuple[bool, ...]]]:
    """
    Computer second-roll decisions.

    Returns:
        Dict mapping name to (dice, computer_score, player_score, win_point, expected_mask)
    """
    return {
        "winning_total": ((1, 1, 1, 1, 2), 100, 0, 101, (True,) * 5),
        "high_sum_22": ((6, 6, 6, 2, 2), 95, 80, 101, (True,) * 5),
        "high_sum_30": ((6, 6, 6, 6, 6), 0, 0, 101, (True,) * 5),
        "far_behind": ((3, 4, 5, 2, 1), 50, 80, 101, (False, False, True, False, False)),
        "just_behind": ((3, 4, 5, 2, 1), 60, 80, 101, (False, True, True, False, False)),
        "ahead": ((6, 1, 4, 3, 5), 80, 10, 101, (True, False, True, False, True)),
        "sum_21_not_enough": ((6, 6, 6, 2, 1), 0, 0, 101, (True, True, True, False, False)),
    }


@pytest.fixture
def third_roll_cases() -> dict[str, tuple[tuple[int, ...], int, int, int, tuple[bool, ...]]]:
    """
    Computer third-roll decisions.

    Returns:
        Dict mapping name to (dice, computer_score, player_score, win_point, expected_mask)
    """
    return {
        "winning_total": ((2, 2, 2, 2, 2), 91, 95, 101, (True,) * 5),
        "decent_not_behind": ((4, 4, 4, 3, 3), 40, 40, 101, (True,) * 5),
        # needed_to_win <= dice_sum is the winning-total check restated, so
        # that shortcut is always decided by the first rule
        "decent_sum_reaching_win_point_while_behind": ((6, 6, 4, 1, 1), 80, 90, 98, (True,) * 5),
        "decent_but_behind": ((6, 5, 4, 2, 1), 30, 60, 101, (True, True, False, False, False)),
        "low_sum": ((4, 3, 2, 1, 6), 90, 10, 150, (True, False, False, False, True)),
    }
