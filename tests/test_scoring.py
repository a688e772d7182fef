from __future__ import annotations

import pytest

from gtodrill.core.formatting import action_label, fmt_pct, street_title
from gtodrill.core.scoring import accuracy_pct, summarize_records


def test_empty_records_summarize_to_zero():
    stats = summarize_records([])
    assert stats.hands == 0
    assert stats.decisions == 0
    assert stats.accuracy_pct == 0.0
    assert stats.by_street == {}


def test_summary_counts_hands_and_streets():
    records = [
        {"street": "preflop", "hand_index": 0, "correct": True, "guess_freq": 1.0},
        {"street": "flop", "hand_index": 0, "correct": False, "guess_freq": 0.25},
        {"street": "preflop", "hand_index": 1, "correct": False, "guess_freq": 0.0},
    ]
    stats = summarize_records(records)
    assert stats.hands == 2
    assert stats.decisions == 3
    assert stats.hits == 1
    assert stats.accuracy_pct == pytest.approx(100.0 / 3)
    assert stats.avg_guess_freq == pytest.approx(1.25 / 3)
    assert set(stats.by_street) == {"preflop", "flop"}
    assert stats.by_street["preflop"].decisions == 2
    assert stats.by_street["preflop"].accuracy_pct == pytest.approx(50.0)
    assert stats.by_street["flop"].hits == 0


def test_accuracy_pct_handles_zero_decisions():
    assert accuracy_pct(0, 0) == 0.0
    assert accuracy_pct(3, 4) == pytest.approx(75.0)


def test_formatting_helpers():
    assert fmt_pct(0.85) == "85%"
    assert fmt_pct(1.0) == "100%"
    assert fmt_pct(0.0) == "0%"
    assert action_label("bet") == "Bet"
    assert street_title("preflop") == "Preflop Stage"
    assert street_title("river") == "River"
