"""
Dice Duel - Dice Rolling

Thin wrapper around a uniform random source. Any object with a
``randint(a, b)`` method (inclusive bounds) can be injected, which is how
tests script exact rolls; by default a private ``random.Random`` is used.
"""

import logging
import random
from typing import Protocol

from src.engine.base import DIE_FACES, NUM_DICE, DiceRoll, KeepMask
from src.engine.validators import validate_keep_mask

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Uniform integer generator over an inclusive range."""

    def randint(self, a: int, b: int) -> int: ...


class DiceRoller:
    """Rolls five six-sided dice from an injectable random source."""

    def __init__(self, rng: RandomSource | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def roll_die(self) -> int:
        """Roll a single D6."""
        value = self._rng.randint(1, DIE_FACES)
        if not (1 <= value <= DIE_FACES):
            raise ValueError(f"Random source returned {value}, outside 1-{DIE_FACES}.")
        return value

    def roll(self) -> DiceRoll:
        """Roll a fresh set of five dice."""
        return DiceRoll(values=tuple(self.roll_die() for _ in range(NUM_DICE)))

    def reroll(self, dice: DiceRoll, keep_mask: KeepMask) -> DiceRoll:
        """
        Re-roll every position whose keep flag is False.

        Args:
            dice: Current dice
            keep_mask: Five flags; True keeps the die at that position

        Returns:
            New DiceRoll with kept values untouched
        """
        mask = validate_keep_mask(keep_mask)
        values = tuple(
            value if kept else self.roll_die()
            for value, kept in zip(dice.values, mask)
        )
        logger.debug("Re-rolled %s keeping %s -> %s", dice.values, mask, values)
        return DiceRoll(values=values)
