"""
Dice Duel - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive exceptions.
"""

from typing import Sequence

from src.engine.base import DEFAULT_WIN_POINT, NUM_DICE, KeepMask, validate_win_point
from src.engine.exceptions import OutOfRangeIndex

__all__ = [
    "parse_win_point",
    "validate_keep_index",
    "validate_keep_mask",
    "validate_win_point",
]


def validate_keep_index(index: int) -> int:
    """
    Validate the index of a die being kept or released.

    Raises:
        OutOfRangeIndex: If the index is not a die position
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise OutOfRangeIndex(f"Die index must be an integer, got {type(index).__name__}.")
    if not (0 <= index < NUM_DICE):
        raise OutOfRangeIndex(
            f"Die index {index} is out of range. Must be between 0 and {NUM_DICE - 1}."
        )
    return index


def validate_keep_mask(mask: Sequence[bool]) -> KeepMask:
    """
    Validate a keep mask and normalize it to a tuple of bools.

    Raises:
        ValueError: If the mask does not cover exactly five dice
    """
    mask_tuple = tuple(bool(kept) for kept in mask)
    if len(mask_tuple) != NUM_DICE:
        raise ValueError(f"Keep mask must have {NUM_DICE} entries, got {len(mask_tuple)}.")
    return mask_tuple  # type: ignore[return-value]


def parse_win_point(text: str | None, default: int = DEFAULT_WIN_POINT) -> int:
    """
    Turn a typed-in win point into a validated integer.

    Blank or non-numeric input falls back to ``default``; a number that
    parses but is not positive is rejected.

    Raises:
        InvalidConfiguration: If the parsed number is not positive
    """
    if text is None or not text.strip():
        return validate_win_point(default)

    try:
        value = int(text.strip())
    except ValueError:
        return validate_win_point(default)

    return validate_win_point(value)
