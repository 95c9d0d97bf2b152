"""
Dice Duel - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. Value objects are immutable (frozen dataclasses); the round
engine swaps them out rather than mutating them in place.
"""

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Sequence

from src.engine.exceptions import InvalidConfiguration

NUM_DICE = 5
DIE_FACES = 6
MAX_ROLLS = 3
DEFAULT_WIN_POINT = 101

KeepMask = tuple[bool, bool, bool, bool, bool]

EMPTY_KEEP_MASK: KeepMask = (False,) * NUM_DICE  # type: ignore[assignment]
FULL_KEEP_MASK: KeepMask = (True,) * NUM_DICE  # type: ignore[assignment]


def validate_win_point(win_point: int) -> int:
    """
    Validate the target score for a game.

    Raises:
        InvalidConfiguration: If the win point is not a positive integer
    """
    if isinstance(win_point, bool) or not isinstance(win_point, int):
        raise InvalidConfiguration(
            f"Win point must be an integer, got {type(win_point).__name__}."
        )

    if win_point <= 0:
        raise InvalidConfiguration(f"Win point must be positive, got {win_point}.")

    return win_point


class Side(Enum):
    """The two seats at the table."""
    PLAYER = "player"
    COMPUTER = "computer"


class TurnPhase(Enum):
    """Where the current turn sits in the roll/score cycle."""
    IDLE = auto()          # no dice thrown yet this turn
    FIRST_ROLLED = auto()  # roll_count == 1
    RE_ROLLED = auto()     # roll_count == 2
    FINAL_ROLLED = auto()  # roll_count == 3, must be scored
    GAME_OVER = auto()


class Action(Enum):
    """Actions a UI may offer, derived from the turn phase."""
    THROW = "throw"
    RETHROW = "rethrow"
    SCORE = "score"
    KEEP = "keep"


@dataclass(frozen=True)
class DiceRoll:
    """
    Immutable representation of one side's five dice.

    Attributes:
        values: Tuple of dice face values (1-6)
    """
    values: tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate dice count and face values."""
        if len(self.values) != NUM_DICE:
            raise ValueError(
                f"A dice set holds exactly {NUM_DICE} dice, got {len(self.values)}."
            )
        for value in self.values:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(
                    f"Die value must be an integer, got {type(value).__name__}."
                )
            if not (1 <= value <= DIE_FACES):
                raise ValueError(
                    f"Invalid die value {value}. Must be between 1 and {DIE_FACES}."
                )

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __iter__(self):
        return iter(self.values)

    @property
    def total(self) -> int:
        """Sum of the face values."""
        return sum(self.values)

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "DiceRoll":
        """Create a DiceRoll from any sequence type."""
        return cls(values=tuple(values))


@dataclass(frozen=True)
class TurnState:
    """
    Roll bookkeeping for the current turn.

    Attributes:
        roll_count: Rolls the human has taken this turn (0-3)
        computer_roll_count: Rolls the computer has taken this turn (0-3)
        keep_mask: Which player dice survive the next re-roll
    """
    roll_count: int = 0
    computer_roll_count: int = 0
    keep_mask: KeepMask = EMPTY_KEEP_MASK

    def __post_init__(self) -> None:
        for name in ("roll_count", "computer_roll_count"):
            count = getattr(self, name)
            if not (0 <= count <= MAX_ROLLS):
                raise ValueError(f"{name} must be between 0 and {MAX_ROLLS}, got {count}.")
        if len(self.keep_mask) != NUM_DICE:
            raise ValueError(f"Keep mask must have {NUM_DICE} entries.")

    @property
    def kept_indices(self) -> frozenset[int]:
        """Indices of dice currently marked as kept."""
        return frozenset(i for i, kept in enumerate(self.keep_mask) if kept)


@dataclass(frozen=True)
class ScoreBoard:
    """
    Cumulative game score.

    Both sides bank their own dice sum every round; the round winner also
    collects a round win.
    """
    player_score: int = 0
    computer_score: int = 0
    player_wins: int = 0
    computer_wins: int = 0

    def score_for(self, side: Side) -> int:
        return self.player_score if side is Side.PLAYER else self.computer_score

    def wins_for(self, side: Side) -> int:
        return self.player_wins if side is Side.PLAYER else self.computer_wins

    def record_round(self, winner: Side, player_sum: int, computer_sum: int) -> "ScoreBoard":
        """Return a new board with one round's sums and round win applied."""
        return replace(
            self,
            player_score=self.player_score + player_sum,
            computer_score=self.computer_score + computer_sum,
            player_wins=self.player_wins + (winner is Side.PLAYER),
            computer_wins=self.computer_wins + (winner is Side.COMPUTER),
        )


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a game session.

    Attributes:
        win_point: Cumulative score that ends the game
    """
    win_point: int = DEFAULT_WIN_POINT

    def __post_init__(self) -> None:
        """Validate configuration."""
        validate_win_point(self.win_point)

    @classmethod
    def from_settings(cls, settings) -> "GameConfig":
        """Build a config from application settings."""
        return cls(win_point=settings.default_win_point)


@dataclass(frozen=True)
class RoundOutcome:
    """
    Result of one finalized round.

    Attributes:
        player_dice: Player dice that were scored (tie-break dice if one ran)
        computer_dice: Computer dice that were scored
        winner: Side with the strictly higher sum
        tie_breaks: Number of tie-break draws needed (0 when sums differed)
    """
    player_dice: DiceRoll
    computer_dice: DiceRoll
    winner: Side
    tie_breaks: int = 0

    @property
    def player_sum(self) -> int:
        return self.player_dice.total

    @property
    def computer_sum(self) -> int:
        return self.computer_dice.total

    @property
    def was_tie_break(self) -> bool:
        return self.tie_breaks > 0


@dataclass(frozen=True)
class GameResult:
    """Terminal state of a game: who crossed the win point first."""
    winner: Side
    score_board: ScoreBoard = field(default_factory=ScoreBoard)


@dataclass(frozen=True)
class ComputerRollResult:
    """
    Output of the computer strategy.

    Attributes:
        dice: Dice after re-rolling the unkept positions
        roll_count: Computer roll count after this roll
        keep_mask: Positions the strategy decided to keep
    """
    dice: DiceRoll
    roll_count: int
    keep_mask: KeepMask = EMPTY_KEEP_MASK
