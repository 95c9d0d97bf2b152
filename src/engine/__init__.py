"""
Dice Duel Game Engine.

Pure Python game logic with zero UI dependencies.
Handles dice rolling, re-rolls with kept dice, tie-breaks, scoring,
win detection and the computer player's keep heuristic.
"""

from src.engine.base import (
    DEFAULT_WIN_POINT,
    Action,
    ComputerRollResult,
    DiceRoll,
    GameConfig,
    GameResult,
    RoundOutcome,
    ScoreBoard,
    Side,
    TurnPhase,
    TurnState,
)
from src.engine.dice import DiceRoller
from src.engine.events import EventPayload, GameEvent
from src.engine.exceptions import (
    DiceGameError,
    InvalidConfiguration,
    InvalidStateTransition,
    OutOfRangeIndex,
)
from src.engine.round_engine import RoundEngine
from src.engine.strategy import ComputerStrategy

__all__ = [
    # Data Classes
    "ComputerRollResult",
    "DiceRoll",
    "GameConfig",
    "GameResult",
    "RoundOutcome",
    "ScoreBoard",
    "TurnState",
    "EventPayload",
    # Enums
    "Action",
    "GameEvent",
    "Side",
    "TurnPhase",
    # Errors
    "DiceGameError",
    "InvalidConfiguration",
    "InvalidStateTransition",
    "OutOfRangeIndex",
    # Engines
    "ComputerStrategy",
    "DiceRoller",
    "RoundEngine",
    "DEFAULT_WIN_POINT",
]
