"""
Dice Duel - Session Models

Pydantic models projecting the round engine's state for a UI to render.
"""

from pydantic import BaseModel, Field

from src.engine.round_engine import RoundEngine


class ScoreBoardView(BaseModel):
    """Cumulative scores and round wins."""

    player_score: int = Field(default=0, ge=0)
    computer_score: int = Field(default=0, ge=0)
    player_wins: int = Field(default=0, ge=0)
    computer_wins: int = Field(default=0, ge=0)

    @property
    def wins_label(self) -> str:
        return f"H:{self.player_wins} / C:{self.computer_wins}"

    @property
    def score_label(self) -> str:
        return f"Player: {self.player_score} | Computer: {self.computer_score}"

    model_config = {"from_attributes": True}


class GameSnapshot(BaseModel):
    """Everything the game screen needs, read from one engine."""

    win_point: int = Field(gt=0)
    round_number: int = Field(ge=1)
    phase: str
    player_dice: list[int] = Field(min_length=5, max_length=5)
    computer_dice: list[int] = Field(min_length=5, max_length=5)
    keep_mask: list[bool] = Field(min_length=5, max_length=5)
    show_dice: bool = False
    roll_count: int = Field(default=0, ge=0, le=3)
    computer_roll_count: int = Field(default=0, ge=0, le=3)
    rerolls_remaining: int = Field(default=3, ge=0, le=3)
    available_actions: list[str] = Field(default_factory=list)
    scores: ScoreBoardView = Field(default_factory=ScoreBoardView)
    winner: str | None = None

    @classmethod
    def from_engine(cls, engine: RoundEngine) -> "GameSnapshot":
        turn = engine.turn_state
        return cls(
            win_point=engine.config.win_point,
            round_number=engine.round_number,
            phase=engine.phase.name,
            player_dice=list(engine.player_dice.values),
            computer_dice=list(engine.computer_dice.values),
            keep_mask=list(turn.keep_mask),
            show_dice=engine.has_rolled,
            roll_count=turn.roll_count,
            computer_roll_count=turn.computer_roll_count,
            rerolls_remaining=engine.rerolls_remaining,
            available_actions=sorted(action.value for action in engine.available_actions),
            scores=ScoreBoardView.model_validate(engine.score_board),
            winner=engine.result.winner.value if engine.result else None,
        )
