"""
Dice Duel - Engine Exceptions

Errors raised when a caller drives the engine outside its rules. The engine
never partially applies an operation that raises.
"""


class DiceGameError(Exception):
    """Base class for all engine errors."""


class InvalidStateTransition(DiceGameError):
    """The operation is not allowed in the current turn phase."""


class InvalidConfiguration(DiceGameError, ValueError):
    """The game cannot be set up with the given configuration."""


class OutOfRangeIndex(DiceGameError, IndexError):
    """A die index outside the dice set was given."""
