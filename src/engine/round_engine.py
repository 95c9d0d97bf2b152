"""
Dice Duel - Round Engine

Owns the dice, keep mask and roll counters for the current turn, resolves
each round (including tie-breaks) and tracks cumulative scores until one side
reaches the win point.

Turn cycle:
    IDLE -> FIRST_ROLLED -> [RE_ROLLED] -> [FINAL_ROLLED] -> scored -> IDLE
    Scoring a round that puts a side on or past the win point moves the
    engine to GAME_OVER, which blocks everything except new_game().

Scoring Rules:
    - Both sides add their own dice sum to their score every round
    - The strictly higher sum takes the round win
    - Equal sums are settled by full fresh rolls of both sides until the
      sums differ; those dice are the ones scored
    - Player is checked first when both cross the win point together
"""

import logging
from dataclasses import replace

from src.engine.base import (
    MAX_ROLLS,
    NUM_DICE,
    Action,
    DiceRoll,
    GameConfig,
    GameResult,
    KeepMask,
    RoundOutcome,
    ScoreBoard,
    Side,
    TurnPhase,
    TurnState,
)
from src.engine.dice import DiceRoller, RandomSource
from src.engine.events import EventListener, EventPayload, GameEvent
from src.engine.exceptions import InvalidStateTransition
from src.engine.strategy import ComputerStrategy
from src.engine.validators import validate_keep_index

logger = logging.getLogger(__name__)

_PHASE_ACTIONS: dict[TurnPhase, frozenset[Action]] = {
    TurnPhase.IDLE: frozenset({Action.THROW}),
    TurnPhase.FIRST_ROLLED: frozenset({Action.RETHROW, Action.SCORE, Action.KEEP}),
    TurnPhase.RE_ROLLED: frozenset({Action.RETHROW, Action.SCORE, Action.KEEP}),
    TurnPhase.FINAL_ROLLED: frozenset({Action.SCORE}),
    TurnPhase.GAME_OVER: frozenset(),
}

_ROLL_PHASES = {
    0: TurnPhase.IDLE,
    1: TurnPhase.FIRST_ROLLED,
    2: TurnPhase.RE_ROLLED,
    3: TurnPhase.FINAL_ROLLED,
}

_INITIAL_DICE = DiceRoll(values=(1,) * NUM_DICE)


class RoundEngine:
    """
    Stateful rules engine for one human-vs-computer game.

    A single UI session drives it; every public operation either completes
    or raises without changing state.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: RandomSource | None = None,
        strategy: ComputerStrategy | None = None,
    ) -> None:
        self._config = config if config is not None else GameConfig()
        self._roller = DiceRoller(rng)
        self._strategy = strategy if strategy is not None else ComputerStrategy(self._roller)
        self._listeners: list[EventListener] = []
        self._reset_game()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def player_dice(self) -> DiceRoll:
        return self._player_dice

    @property
    def computer_dice(self) -> DiceRoll:
        return self._computer_dice

    @property
    def keep_mask(self) -> KeepMask:
        return self._turn.keep_mask

    @property
    def turn_state(self) -> TurnState:
        return self._turn

    @property
    def score_board(self) -> ScoreBoard:
        return self._scores

    @property
    def result(self) -> GameResult | None:
        return self._result

    @property
    def is_game_over(self) -> bool:
        return self._result is not None

    @property
    def has_rolled(self) -> bool:
        """False until the first throw of the game, while dice show placeholders."""
        return self._has_rolled

    @property
    def history(self) -> tuple[RoundOutcome, ...]:
        return tuple(self._history)

    @property
    def round_number(self) -> int:
        """Number of the round in progress (1-based)."""
        return len(self._history) + 1

    @property
    def phase(self) -> TurnPhase:
        if self._result is not None:
            return TurnPhase.GAME_OVER
        return _ROLL_PHASES[self._turn.roll_count]

    @property
    def available_actions(self) -> frozenset[Action]:
        return _PHASE_ACTIONS[self.phase]

    @property
    def rerolls_remaining(self) -> int:
        return MAX_ROLLS - self._turn.roll_count

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: EventListener) -> None:
        """Register a callback invoked after every state change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        self._listeners.remove(listener)

    def _emit(self, event: GameEvent, round_number: int | None = None, **data) -> None:
        if round_number is None:
            round_number = self.round_number
        payload = EventPayload(event=event, round_number=round_number, data=data)
        for listener in list(self._listeners):
            listener(payload)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def new_game(self, config: GameConfig | None = None) -> None:
        """Start over with zeroed scores, optionally under a new config."""
        if config is not None:
            self._config = config
        self._reset_game()
        logger.info("New game started (win point %d)", self._config.win_point)
        self._emit(GameEvent.GAME_STARTED, win_point=self._config.win_point)

    def start_turn(self) -> None:
        """
        Reset the keep mask and roll counters for a new turn.

        Raises:
            InvalidStateTransition: If a turn is in progress or the game is over
        """
        self._require_phase("start a turn", TurnPhase.IDLE)
        self._turn = TurnState()
        self._emit(GameEvent.TURN_STARTED)

    def first_roll(self) -> tuple[DiceRoll, DiceRoll]:
        """
        Throw all five dice for both sides.

        Returns:
            Tuple of (player_dice, computer_dice)

        Raises:
            InvalidStateTransition: If dice were already thrown this turn
        """
        self._require_phase("throw", TurnPhase.IDLE)

        self._player_dice = self._roller.roll()
        self._computer_dice = self._roller.roll()
        self._turn = TurnState(roll_count=1, computer_roll_count=1)
        self._has_rolled = True

        logger.debug(
            "Round %d first roll: player %s, computer %s",
            self.round_number, self._player_dice.values, self._computer_dice.values,
        )
        self._emit(
            GameEvent.DICE_ROLLED,
            player_dice=self._player_dice.values,
            computer_dice=self._computer_dice.values,
            roll_count=1,
        )
        return self._player_dice, self._computer_dice

    def reroll_player(self) -> DiceRoll:
        """
        Re-roll every player die that is not kept.

        Raises:
            InvalidStateTransition: Before the first roll or after the third
        """
        self._require_phase("re-roll", TurnPhase.FIRST_ROLLED, TurnPhase.RE_ROLLED)

        self._player_dice = self._roller.reroll(self._player_dice, self._turn.keep_mask)
        self._turn = replace(self._turn, roll_count=self._turn.roll_count + 1)

        self._emit(
            GameEvent.DICE_ROLLED,
            player_dice=self._player_dice.values,
            roll_count=self._turn.roll_count,
        )
        return self._player_dice

    def reroll_computer(self) -> DiceRoll:
        """
        Let the computer strategy re-roll the computer's dice.

        Does nothing once the computer has rolled three times this turn.

        Raises:
            InvalidStateTransition: Before the first roll or after game over
        """
        if self.is_game_over or self._turn.computer_roll_count == 0:
            raise InvalidStateTransition(
                f"Cannot re-roll computer dice in phase {self.phase.name}."
            )
        if self._turn.computer_roll_count >= MAX_ROLLS:
            return self._computer_dice

        outcome = self._strategy.decide(
            self._computer_dice,
            self._scores.computer_score,
            self._scores.player_score,
            self._config.win_point,
            self._turn.computer_roll_count,
        )
        self._computer_dice = outcome.dice
        self._turn = replace(self._turn, computer_roll_count=outcome.roll_count)

        self._emit(
            GameEvent.COMPUTER_ROLLED,
            computer_dice=outcome.dice.values,
            keep_mask=outcome.keep_mask,
            roll_count=outcome.roll_count,
        )
        return self._computer_dice

    def rethrow(self) -> RoundOutcome | None:
        """
        Re-roll both sides and score automatically after the third roll.

        Returns:
            The RoundOutcome if the round was scored, otherwise None
        """
        self._require_phase("re-throw", TurnPhase.FIRST_ROLLED, TurnPhase.RE_ROLLED)
        self.reroll_player()
        self.reroll_computer()
        if self._turn.roll_count >= MAX_ROLLS:
            return self.finalize_round()
        return None

    def toggle_keep(self, index: int) -> KeepMask:
        """
        Flip the keep flag of one player die.

        Returns:
            The updated keep mask

        Raises:
            OutOfRangeIndex: If index is not 0-4
            InvalidStateTransition: Outside the first and second roll
        """
        validate_keep_index(index)
        self._require_phase("keep dice", TurnPhase.FIRST_ROLLED, TurnPhase.RE_ROLLED)

        mask = list(self._turn.keep_mask)
        mask[index] = not mask[index]
        self._turn = replace(self._turn, keep_mask=tuple(mask))

        self._emit(GameEvent.DICE_KEPT, index=index, kept=mask[index])
        return self._turn.keep_mask

    def finalize_round(self) -> RoundOutcome:
        """
        Score the round, then check whether the game is over.

        Returns:
            RoundOutcome describing the scored dice and round winner

        Raises:
            InvalidStateTransition: Before the first roll or after game over
        """
        self._require_phase(
            "score", TurnPhase.FIRST_ROLLED, TurnPhase.RE_ROLLED, TurnPhase.FINAL_ROLLED
        )

        player_dice, computer_dice = self._player_dice, self._computer_dice
        tied_sum = player_dice.total
        tie_breaks = 0
        while player_dice.total == computer_dice.total:
            tie_breaks += 1
            player_dice = self._roller.roll()
            computer_dice = self._roller.roll()
            logger.debug(
                "Tie-break %d: player %s, computer %s",
                tie_breaks, player_dice.values, computer_dice.values,
            )

        winner = Side.PLAYER if player_dice.total > computer_dice.total else Side.COMPUTER
        outcome = RoundOutcome(
            player_dice=player_dice,
            computer_dice=computer_dice,
            winner=winner,
            tie_breaks=tie_breaks,
        )

        self._player_dice, self._computer_dice = player_dice, computer_dice
        self._scores = self._scores.record_round(winner, player_dice.total, computer_dice.total)
        self._turn = TurnState()
        self._history.append(outcome)
        self._result = self._decide_result()

        round_number = len(self._history)
        if tie_breaks:
            logger.info(
                "Round %d tied at %d, settled after %d tie-break roll(s)",
                round_number, tied_sum, tie_breaks,
            )
        logger.info(
            "Round %d won by %s (%d vs %d); score player %d, computer %d",
            round_number, winner.value, outcome.player_sum, outcome.computer_sum,
            self._scores.player_score, self._scores.computer_score,
        )
        if self._result is not None:
            logger.info(
                "Game won by %s after %d round(s) (%d vs %d, win point %d)",
                self._result.winner.value, round_number,
                self._scores.player_score, self._scores.computer_score,
                self._config.win_point,
            )

        # State is final here; listeners only observe it.
        if tie_breaks:
            self._emit(
                GameEvent.TIE_BREAK,
                round_number=round_number,
                tied_sum=tied_sum,
                tie_breaks=tie_breaks,
            )
        self._emit(
            GameEvent.ROUND_SCORED,
            round_number=round_number,
            winner=winner,
            player_sum=outcome.player_sum,
            computer_sum=outcome.computer_sum,
        )
        if self._result is not None:
            self._emit(
                GameEvent.GAME_WON,
                round_number=round_number,
                winner=self._result.winner,
                score_board=self._result.score_board,
            )
        return outcome

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reset_game(self) -> None:
        self._player_dice = _INITIAL_DICE
        self._computer_dice = _INITIAL_DICE
        self._turn = TurnState()
        self._scores = ScoreBoard()
        self._result: GameResult | None = None
        self._history: list[RoundOutcome] = []
        self._has_rolled = False

    def _decide_result(self) -> GameResult | None:
        """Player is checked first when both sides cross the win point."""
        win_point = self._config.win_point
        if self._scores.player_score >= win_point:
            return GameResult(winner=Side.PLAYER, score_board=self._scores)
        if self._scores.computer_score >= win_point:
            return GameResult(winner=Side.COMPUTER, score_board=self._scores)
        return None

    def _require_phase(self, action: str, *allowed: TurnPhase) -> None:
        phase = self.phase
        if phase not in allowed:
            raise InvalidStateTransition(f"Cannot {action} in phase {phase.name}.")
