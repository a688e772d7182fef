from __future__ import annotations

import logging
import random
import secrets
import string
import threading
from dataclasses import dataclass, field
from typing import Any

from ...core.formatting import action_label, fmt_pct
from ...core.models import StrategyMix
from ...core.scoring import SummaryStats, accuracy_pct, summarize_records
from ...dynamic.cards import Card
from ...dynamic.seating import DEFAULT_POSITION, MAX_PLAYERS, MIN_PLAYERS, normalize_position
from .concurrency import run_blocking
from .engine import GAME_MODES, MODES, SessionEngine, SessionSettings, guess_actions_for
from .schemas import (
    ActionFrequency,
    CardPayload,
    FeedbackPayload,
    GuessResult,
    HandPayload,
    ScorePayload,
    SettingsPayload,
    StrategyPayload,
    StreetSummaryPayload,
    SummaryPayload,
    ViewResponse,
)

__all__ = [
    "SessionConfig",
    "SessionManager",
    "SessionState",
    "_settings_from_config",
    "_summary_payload",
]

logger = logging.getLogger(__name__)

_RED_SUITS = frozenset({"h", "d"})


@dataclass(frozen=True)
class SessionConfig:
    """Requested settings for a training session."""

    mode: str = "practice"
    game_mode: str = "preflop"
    player_count: int = 2
    position: str = DEFAULT_POSITION
    seed: int | None = None


@dataclass
class SessionState:
    config: SessionConfig
    engine: SessionEngine
    records: list[dict[str, Any]] = field(default_factory=list)
    correct: int = 0
    total: int = 0

    def reset_score(self) -> None:
        self.records.clear()
        self.correct = 0
        self.total = 0


class SessionManager:
    """Owns session lifecycle independent of the presentation layer."""

    def __init__(self) -> None:
        self._sessions: dict[str, SessionState] = {}
        self._lock = threading.Lock()

    def create_session(self, config: SessionConfig | None = None) -> str:
        config = config or SessionConfig()
        seed = config.seed if config.seed is not None else secrets.SystemRandom().getrandbits(32)
        settings = _settings_from_config(config)
        engine = SessionEngine(rng=random.Random(seed), settings=settings)
        session_id = _sid()
        state = SessionState(
            config=SessionConfig(
                mode=settings.mode,
                game_mode=settings.game_mode,
                player_count=settings.player_count,
                position=settings.position,
                seed=seed,
            ),
            engine=engine,
        )
        with self._lock:
            self._sessions[session_id] = state
        logger.debug("Session created", extra={"session_id": session_id, "seed": seed})
        return session_id

    async def create_session_async(self, config: SessionConfig | None = None) -> str:
        return await run_blocking(self.create_session, config)

    def get_view(self, session_id: str) -> ViewResponse:
        with self._lock:
            state = self._require_session(session_id)
            return _view_payload(session_id, state)

    async def get_view_async(self, session_id: str) -> ViewResponse:
        return await run_blocking(self.get_view, session_id)

    def new_hand(self, session_id: str) -> ViewResponse:
        with self._lock:
            state = self._require_session(session_id)
            state.engine.deal_new_hand()
            return _view_payload(session_id, state)

    async def new_hand_async(self, session_id: str) -> ViewResponse:
        return await run_blocking(self.new_hand, session_id)

    def next_street(self, session_id: str) -> ViewResponse:
        with self._lock:
            state = self._require_session(session_id)
            state.engine.advance_street()
            return _view_payload(session_id, state)

    async def next_street_async(self, session_id: str) -> ViewResponse:
        return await run_blocking(self.next_street, session_id)

    def guess(self, session_id: str, action: str) -> GuessResult:
        with self._lock:
            state = self._require_session(session_id)
            engine = state.engine
            correct, mix = engine.submit_guess(action)
            guess = engine.guess or ""
            record = {
                "street": engine.street,
                "hand_index": engine.hand_index,
                "hand": engine.hand.label,
                "board": [str(card) for card in engine.board],
                "guess": guess,
                "primary": mix.primary_action,
                "guess_freq": mix.freq(guess),
                "correct": correct,
            }
            state.records.append(record)
            state.total += 1
            if correct:
                state.correct += 1
            feedback = _feedback(guess, mix)
            view = _view_payload(session_id, state)
        return GuessResult(feedback=feedback, view=view)

    async def guess_async(self, session_id: str, action: str) -> GuessResult:
        return await run_blocking(self.guess, session_id, action)

    def update_settings(
        self,
        session_id: str,
        *,
        mode: str | None = None,
        game_mode: str | None = None,
        player_count: int | None = None,
        position: str | None = None,
    ) -> ViewResponse:
        """Apply the given settings and deal a fresh hand when anything changed.

        Changing the mode also clears the score, since practice-mode reveals
        would otherwise leak into training accuracy.
        """

        with self._lock:
            state = self._require_session(session_id)
            current = state.engine.settings
            settings = SessionSettings(
                mode=mode if mode is not None else current.mode,
                game_mode=game_mode if game_mode is not None else current.game_mode,
                player_count=player_count if player_count is not None else current.player_count,
                position=position if position is not None else current.position,
            )
            if settings == current:
                return _view_payload(session_id, state)
            if settings.mode != current.mode:
                state.reset_score()
            state.engine.apply_settings(settings)
            state.config = SessionConfig(
                mode=settings.mode,
                game_mode=settings.game_mode,
                player_count=settings.player_count,
                position=settings.position,
                seed=state.config.seed,
            )
            return _view_payload(session_id, state)

    async def update_settings_async(self, session_id: str, **changes: Any) -> ViewResponse:
        return await run_blocking(self.update_settings, session_id, **changes)

    def summary(self, session_id: str) -> SummaryPayload:
        with self._lock:
            state = self._require_session(session_id)
            return _summary_payload(state.records)

    async def summary_async(self, session_id: str) -> SummaryPayload:
        return await run_blocking(self.summary, session_id)

    def _require_session(self, session_id: str) -> SessionState:
        state = self._sessions.get(session_id)
        if state is None:
            raise KeyError(f"session '{session_id}' not found")
        return state


def _sid(length: int = 10) -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def _settings_from_config(config: SessionConfig) -> SessionSettings:
    """Coerce a requested config into valid settings, logging what was dropped."""

    mode = (config.mode or "").strip().lower()
    if mode not in MODES:
        logger.warning("Unknown mode %r; using practice", config.mode)
        mode = "practice"
    game_mode = (config.game_mode or "").strip().lower()
    if game_mode not in GAME_MODES:
        logger.warning("Unknown game mode %r; using preflop", config.game_mode)
        game_mode = "preflop"
    players = config.player_count
    if not MIN_PLAYERS <= players <= MAX_PLAYERS:
        clamped = min(MAX_PLAYERS, max(MIN_PLAYERS, players))
        logger.warning("Player count %s out of range; using %s", players, clamped)
        players = clamped
    position = normalize_position(config.position)
    if position is None:
        logger.warning("Unknown position %r; using %s", config.position, DEFAULT_POSITION)
        position = DEFAULT_POSITION
    return SessionSettings(mode=mode, game_mode=game_mode, player_count=players, position=position)


def _card_payload(card: Card) -> CardPayload:
    return CardPayload(
        code=str(card),
        rank=card.rank,
        suit=card.suit,
        symbol=card.symbol,
        red=card.suit in _RED_SUITS,
    )


def _strategy_payload(mix: StrategyMix) -> StrategyPayload:
    return StrategyPayload(
        street=mix.street,
        primary=mix.primary_action,
        explanation=mix.explanation,
        actions=[
            ActionFrequency(action=action, label=action_label(action), freq=freq, pct=fmt_pct(freq))
            for action, freq in mix.ranked()
        ],
    )


def _feedback(guess: str, mix: StrategyMix) -> FeedbackPayload:
    return FeedbackPayload(
        guess=guess,
        primary=mix.primary_action,
        correct=guess == mix.primary_action,
        guess_freq=mix.freq(guess),
    )


def _view_payload(session_id: str, state: SessionState) -> ViewResponse:
    engine = state.engine
    settings = engine.settings
    texture = engine.texture
    mix = engine.strategy() if engine.revealed else None
    feedback = _feedback(engine.guess, mix) if engine.guess and mix is not None else None
    return ViewResponse(
        session=session_id,
        hand_no=engine.hand_index + 1,
        street=engine.street,
        settings=SettingsPayload(
            mode=settings.mode,
            game_mode=settings.game_mode,
            players=settings.player_count,
            position=settings.position,
        ),
        hand=HandPayload(
            label=engine.hand.label,
            kind=engine.hand.kind,
            cards=[_card_payload(card) for card in engine.hand.cards],
        ),
        board=[_card_payload(card) for card in engine.board],
        texture=texture.label if texture else None,
        revealed=engine.revealed,
        strategy=_strategy_payload(mix) if mix is not None else None,
        allowed_guesses=list(guess_actions_for(engine.street)) if engine.awaiting_guess() else [],
        next_street=engine.next_street_name(),
        feedback=feedback,
        score=ScorePayload(
            correct=state.correct,
            total=state.total,
            accuracy_pct=accuracy_pct(state.correct, state.total),
        ),
    )


def _summary_payload(records: list[dict[str, Any]]) -> SummaryPayload:
    stats: SummaryStats = summarize_records(records)
    return SummaryPayload(
        hands=stats.hands,
        decisions=stats.decisions,
        hits=stats.hits,
        accuracy_pct=stats.accuracy_pct,
        avg_guess_freq=stats.avg_guess_freq,
        by_street={
            street: StreetSummaryPayload(
                decisions=street_stats.decisions,
                hits=street_stats.hits,
                accuracy_pct=street_stats.accuracy_pct,
            )
            for street, street_stats in stats.by_street.items()
        },
    )
