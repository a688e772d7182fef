from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

__all__ = [
    "ActionFrequency",
    "CardPayload",
    "FeedbackPayload",
    "GuessResult",
    "HandPayload",
    "ScorePayload",
    "SettingsPayload",
    "StrategyPayload",
    "StreetSummaryPayload",
    "SummaryPayload",
    "ViewResponse",
]


class _APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class CardPayload(_APIModel):
    code: str
    rank: str
    suit: str
    symbol: str
    red: bool


class HandPayload(_APIModel):
    label: str
    kind: str
    cards: list[CardPayload]


class ActionFrequency(_APIModel):
    action: str
    label: str
    freq: float
    pct: str


class StrategyPayload(_APIModel):
    street: str
    primary: str
    explanation: str
    actions: list[ActionFrequency]


class SettingsPayload(_APIModel):
    mode: str
    game_mode: str
    players: int
    position: str


class ScorePayload(_APIModel):
    correct: int
    total: int
    accuracy_pct: float


class FeedbackPayload(_APIModel):
    guess: str
    primary: str
    correct: bool
    guess_freq: float


class ViewResponse(_APIModel):
    session: str
    hand_no: int
    street: str
    settings: SettingsPayload
    hand: HandPayload
    board: list[CardPayload]
    texture: str | None = None
    revealed: bool
    strategy: StrategyPayload | None = None
    allowed_guesses: list[str]
    next_street: str | None = None
    feedback: FeedbackPayload | None = None
    score: ScorePayload


class GuessResult(_APIModel):
    feedback: FeedbackPayload
    view: ViewResponse


class StreetSummaryPayload(_APIModel):
    decisions: int
    hits: int
    accuracy_pct: float


class SummaryPayload(_APIModel):
    hands: int
    decisions: int
    hits: int
    accuracy_pct: float
    avg_guess_freq: float
    by_street: dict[str, StreetSummaryPayload]
