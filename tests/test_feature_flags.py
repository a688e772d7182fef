from __future__ import annotations

import os
import random

from gtodrill.core import feature_flags
from gtodrill.features.session.engine import SessionEngine, SessionSettings


def test_env_and_override_stack() -> None:
    env_var = "GTODRILL_FEATURES"
    original = os.environ.get(env_var)
    try:
        if env_var in os.environ:
            del os.environ[env_var]

        assert feature_flags.is_enabled(feature_flags.STICKY_REVEAL) is False

        feature_flags.set_env_flags([feature_flags.STICKY_REVEAL])
        assert feature_flags.is_enabled("Session.Sticky_Reveal") is True

        with feature_flags.override(disable={feature_flags.STICKY_REVEAL}):
            assert feature_flags.is_enabled(feature_flags.STICKY_REVEAL) is False
            with feature_flags.override(enable={"ui.experimental"}):
                assert feature_flags.is_enabled("ui.experimental") is True
                assert feature_flags.is_enabled(feature_flags.STICKY_REVEAL) is False

        assert feature_flags.is_enabled(feature_flags.STICKY_REVEAL) is True
        assert feature_flags.is_enabled("ui.experimental") is False

    finally:
        if original is None:
            os.environ.pop(env_var, None)
        else:
            os.environ[env_var] = original


def _guessed_engine() -> SessionEngine:
    engine = SessionEngine(random.Random(17), SessionSettings(mode="training", game_mode="turn_river"))
    engine.submit_guess("fold")
    return engine


def test_sticky_reveal_from_env_keeps_reveal_for_rest_of_hand(monkeypatch) -> None:
    monkeypatch.setenv("GTODRILL_FEATURES", "session.sticky_reveal")

    engine = _guessed_engine()
    for street in ("flop", "turn", "river"):
        assert engine.advance_street() == street
        assert engine.revealed is True
        assert engine.awaiting_guess() is False

    engine.deal_new_hand()
    assert engine.revealed is False


def test_without_sticky_reveal_every_street_is_quizzed(monkeypatch) -> None:
    monkeypatch.delenv("GTODRILL_FEATURES", raising=False)

    engine = _guessed_engine()
    engine.advance_street()
    assert engine.revealed is False
    assert engine.guess is None

    # A street that was never guessed stays hidden even with the flag on.
    with feature_flags.override(enable={feature_flags.STICKY_REVEAL}):
        engine.advance_street()
    assert engine.revealed is False
