"""
Dice Duel - Engine Event Definitions

Event types and payloads emitted by the round engine after each state change.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable


class GameEvent(Enum):
    """Events that can occur during a game."""

    GAME_STARTED = auto()
    TURN_STARTED = auto()
    DICE_ROLLED = auto()
    COMPUTER_ROLLED = auto()
    DICE_KEPT = auto()
    TIE_BREAK = auto()
    ROUND_SCORED = auto()
    GAME_WON = auto()


@dataclass
class EventPayload:
    """Wrapper for engine event data."""

    event: GameEvent
    round_number: int
    data: dict[str, Any] = field(default_factory=dict)


EventListener = Callable[[EventPayload], None]
