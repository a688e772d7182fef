from __future__ import annotations

import pytest

from gtodrill.core.models import StrategyMix, complete_with_fold


def test_complete_with_fold_adds_the_remainder():
    assert complete_with_fold({"raise": 0.6}) == {"raise": 0.6, "fold": 0.4}
    assert complete_with_fold({"bet": 0.3, "check": 0.6, "fold": 0.05})["fold"] == pytest.approx(0.1)
    assert complete_with_fold({"raise": 1.0}) == {"raise": 1.0}


def test_complete_with_fold_rejects_bad_inputs():
    with pytest.raises(ValueError):
        complete_with_fold({"raise": -0.1})
    with pytest.raises(ValueError):
        complete_with_fold({"raise": 0.8, "call": 0.3})


def test_primary_action_is_argmax_with_ties_to_later_action():
    assert StrategyMix.build({"bet": 0.2, "check": 0.7}).primary_action == "check"
    assert StrategyMix.build({"bet": 0.5, "check": 0.5}).primary_action == "check"
    assert StrategyMix.build({"call": 0.5}).primary_action == "fold"


def test_ranked_orders_by_frequency():
    mix = StrategyMix.build({"bet": 0.25, "check": 0.45, "fold": 0.30})
    assert [action for action, _ in mix.ranked()] == ["check", "fold", "bet"]
    assert mix.total == pytest.approx(1.0)
    assert mix.freq("raise") == 0.0


def test_with_explanation_keeps_frequencies():
    mix = StrategyMix.build({"raise": 1.0}, street="preflop", meta={"format": "6max"})
    updated = mix.with_explanation("note")
    assert updated.explanation == "note"
    assert updated.frequencies == mix.frequencies
    assert updated.meta == {"format": "6max"}
