"""
Dice Duel - Computer Strategy

Keep/re-roll heuristic for the computer's second and third rolls. The first
computer roll is always a fresh throw of all five dice and is handled by the
round engine.

Second roll (roll_count == 1):
    - Stand pat if the current sum already reaches the win point
    - Stand pat on a sum of 22 or more
    - Otherwise keep 5s and 6s when far behind, 4s and up when not

Third roll (roll_count == 2):
    - Stand pat if the current sum already reaches the win point
    - On a sum of 18 or more, stand pat when not behind or when the sum
      covers what is still needed; otherwise keep only 5s and 6s
    - Otherwise keep 4s and up
"""

import logging

from src.engine.base import (
    FULL_KEEP_MASK,
    MAX_ROLLS,
    ComputerRollResult,
    DiceRoll,
    KeepMask,
)
from src.engine.dice import DiceRoller

logger = logging.getLogger(__name__)


class ComputerStrategy:
    """
    Stateless decision function for the computer's re-rolls.

    Apart from the dice roller used to redraw unkept dice, nothing is stored
    between calls.
    """

    HIGH_SUM_SECOND_ROLL = 22
    DECENT_SUM_THIRD_ROLL = 18
    FAR_BEHIND_MARGIN = -20
    AGGRESSIVE_KEEP_MIN = 5
    MODERATE_KEEP_MIN = 4

    def __init__(self, roller: DiceRoller | None = None) -> None:
        self._roller = roller if roller is not None else DiceRoller()

    @classmethod
    def choose_keep_mask(
        cls,
        current_dice: DiceRoll,
        computer_score: int,
        player_score: int,
        win_point: int,
        roll_count: int,
    ) -> KeepMask:
        """
        Decide which computer dice to keep before the next roll.

        Args:
            current_dice: The computer's current dice
            computer_score: Computer's cumulative score before this round
            player_score: Player's cumulative score before this round
            win_point: Target score of the game
            roll_count: Computer rolls already taken this turn (1 or 2)

        Returns:
            Five keep flags

        Raises:
            ValueError: If roll_count is below 1
        """
        if roll_count < 1:
            raise ValueError(
                f"Computer strategy applies from the second roll, got roll_count={roll_count}."
            )
        if roll_count >= MAX_ROLLS:
            return FULL_KEEP_MASK

        dice_sum = current_dice.total
        score_diff = computer_score - player_score
        needed_to_win = win_point - computer_score

        if computer_score + dice_sum >= win_point:
            return FULL_KEEP_MASK

        if roll_count == 1:
            if dice_sum >= cls.HIGH_SUM_SECOND_ROLL:
                return FULL_KEEP_MASK
            if score_diff < cls.FAR_BEHIND_MARGIN:
                return cls._keep_at_least(current_dice, cls.AGGRESSIVE_KEEP_MIN)
            return cls._keep_at_least(current_dice, cls.MODERATE_KEEP_MIN)

        if dice_sum >= cls.DECENT_SUM_THIRD_ROLL:
            if score_diff >= 0 or needed_to_win <= dice_sum:
                return FULL_KEEP_MASK
            return cls._keep_at_least(current_dice, cls.AGGRESSIVE_KEEP_MIN)
        return cls._keep_at_least(current_dice, cls.MODERATE_KEEP_MIN)

    def decide(
        self,
        current_dice: DiceRoll,
        computer_score: int,
        player_score: int,
        win_point: int,
        roll_count: int,
    ) -> ComputerRollResult:
        """
        Pick dice to keep and re-roll the rest.

        A roll_count of 3 or more is returned unchanged.

        Returns:
            ComputerRollResult with the new dice, roll_count + 1 and the mask used
        """
        if roll_count >= MAX_ROLLS:
            return ComputerRollResult(
                dice=current_dice, roll_count=roll_count, keep_mask=FULL_KEEP_MASK
            )

        keep_mask = self.choose_keep_mask(
            current_dice, computer_score, player_score, win_point, roll_count
        )
        logger.debug(
            "Computer roll %d: dice %s (sum %d), keeping %s",
            roll_count + 1, current_dice.values, current_dice.total, keep_mask,
        )

        if keep_mask == FULL_KEEP_MASK:
            new_dice = current_dice
        else:
            new_dice = self._roller.reroll(current_dice, keep_mask)

        return ComputerRollResult(dice=new_dice, roll_count=roll_count + 1, keep_mask=keep_mask)

    @staticmethod
    def _keep_at_least(dice: DiceRoll, minimum: int) -> KeepMask:
        return tuple(value >= minimum for value in dice.values)  # type: ignore[return-value]
