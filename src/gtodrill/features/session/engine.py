"""Per-session hand progression.

``SessionEngine`` owns the mutable hand of one session: the hole cards, the
board dealt so far, and the guess/reveal state of the current street.  It
knows nothing about scoring or transport; ``SessionManager`` wraps it with
locking, records and payloads.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Final, Literal

from ...core import feature_flags
from ...core.models import StrategyMix
from ...dynamic.cards import Card, Hand, deal_board, random_hand
from ...dynamic.policy import STREET_FOR_BOARD_SIZE, strategy_for, street_for_board
from ...dynamic.seating import DEFAULT_POSITION, MAX_PLAYERS, MIN_PLAYERS, POSITIONS
from ...dynamic.texture import BoardTexture, analyze_texture

__all__ = [
    "DEFAULT_SETTINGS",
    "GAME_MODES",
    "MODES",
    "GameMode",
    "Mode",
    "SessionEngine",
    "SessionSettings",
    "guess_actions_for",
]

logger = logging.getLogger(__name__)

Mode = Literal["practice", "training"]
GameMode = Literal["preflop", "postflop", "turn_river"]

MODES: tuple[str, ...] = ("practice", "training")
GAME_MODES: tuple[str, ...] = ("preflop", "postflop", "turn_river")

# How many board cards each game mode can reach.
_BOARD_LIMIT: Final = {"preflop": 0, "postflop": 3, "turn_river": 5}
_NEXT_STREET_CARDS: Final = {0: 3, 3: 1, 4: 1}

_PREFLOP_GUESSES: Final = ("fold", "call", "raise")
_POSTFLOP_GUESSES: Final = ("bet", "check", "fold")


def guess_actions_for(street: str) -> tuple[str, ...]:
    return _PREFLOP_GUESSES if street == "preflop" else _POSTFLOP_GUESSES


@dataclass(frozen=True)
class SessionSettings:
    mode: Mode = "practice"
    game_mode: GameMode = "preflop"
    player_count: int = 2
    position: str = DEFAULT_POSITION

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"unknown mode {self.mode!r}")
        if self.game_mode not in GAME_MODES:
            raise ValueError(f"unknown game mode {self.game_mode!r}")
        if not MIN_PLAYERS <= self.player_count <= MAX_PLAYERS:
            raise ValueError(f"player count must be between {MIN_PLAYERS} and {MAX_PLAYERS}")
        if self.position not in POSITIONS:
            raise ValueError(f"unknown position {self.position!r}")

    @property
    def board_limit(self) -> int:
        return _BOARD_LIMIT[self.game_mode]

    @property
    def training(self) -> bool:
        return self.mode == "training"


DEFAULT_SETTINGS = SessionSettings()


class SessionEngine:
    def __init__(self, rng: random.Random, settings: SessionSettings = DEFAULT_SETTINGS) -> None:
        self.rng = rng
        self.settings = settings
        self.hand_index = 0
        self.hand: Hand = random_hand(rng)
        self.board: list[Card] = []
        self.guess: str | None = None
        self.revealed = not settings.training

    # ------------------------------------------------------------------ state
    @property
    def street(self) -> str:
        return street_for_board(self.board)

    @property
    def texture(self) -> BoardTexture | None:
        return analyze_texture(self.board) if self.board else None

    def strategy(self) -> StrategyMix:
        return strategy_for(self.hand, self.board, self.settings.position, self.settings.player_count)

    def can_advance(self) -> bool:
        return len(self.board) < self.settings.board_limit

    def next_street_name(self) -> str | None:
        if not self.can_advance():
            return None
        size = len(self.board) + _NEXT_STREET_CARDS[len(self.board)]
        return STREET_FOR_BOARD_SIZE[size]

    def awaiting_guess(self) -> bool:
        return self.settings.training and not self.revealed

    # ---------------------------------------------------------------- actions
    def apply_settings(self, settings: SessionSettings) -> None:
        self.settings = settings
        self.deal_new_hand()

    def deal_new_hand(self) -> Hand:
        self.hand = random_hand(self.rng)
        self.hand_index += 1
        self.board = []
        self.guess = None
        self.revealed = not self.settings.training
        logger.debug("Dealt hand", extra={"hand": self.hand.label, "hand_index": self.hand_index})
        return self.hand

    def advance_street(self) -> str:
        if not self.can_advance():
            raise ValueError(f"no further street after {self.street} in {self.settings.game_mode} mode")
        count = _NEXT_STREET_CARDS[len(self.board)]
        self.board = self.board + deal_board(self.rng, count, [*self.hand.cards, *self.board])
        keep_reveal = self.revealed and feature_flags.is_enabled(feature_flags.STICKY_REVEAL)
        self.guess = None
        self.revealed = not self.settings.training or keep_reveal
        logger.debug("Advanced street", extra={"street": self.street, "board": [str(c) for c in self.board]})
        return self.street

    def submit_guess(self, action: str) -> tuple[bool, StrategyMix]:
        if not self.settings.training:
            raise ValueError("guesses are only taken in training mode")
        if self.revealed:
            raise ValueError("strategy already revealed for this street")
        key = (action or "").strip().lower()
        allowed = guess_actions_for(self.street)
        if key not in allowed:
            raise ValueError(f"guess must be one of {', '.join(allowed)} on the {self.street}")
        mix = self.strategy()
        self.guess = key
        self.revealed = True
        return key == mix.primary_action, mix
