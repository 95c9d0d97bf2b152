"""
Dice Duel Session Layer.

Serializable views of a running game for the presentation layer.
"""

from src.session.models import GameSnapshot, ScoreBoardView

__all__ = [
    "GameSnapshot",
    "ScoreBoardView",
]
