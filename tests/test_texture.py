from __future__ import annotations

import pytest

from gtodrill.dynamic.cards import parse_cards
from gtodrill.dynamic.texture import analyze_texture


def _texture(*tokens: str):
    return analyze_texture(parse_cards(tokens))


def test_single_suit_flop_is_monotone():
    tex = _texture("As", "7s", "2s")
    assert tex.is_monotone
    assert not tex.is_two_tone and not tex.is_rainbow
    assert tex.is_wet
    assert tex.label == "Monotone Disconnected High"


def test_paired_rainbow_board():
    tex = _texture("Kh", "Kd", "5c")
    assert tex.has_pair
    assert tex.is_rainbow
    assert not tex.connected
    assert tex.label == "Paired Rainbow Disconnected High"


def test_two_tone_connected_low_board():
    tex = _texture("9h", "8h", "6c")
    assert tex.is_two_tone
    assert tex.connected
    assert tex.low_board and not tex.high_presence
    assert tex.height == "Low"
    assert tex.label == "Two-Tone Connected Low"
    assert tex.suit_count("h") == 2
    assert tex.suit_count("s") == 0


def test_dry_mid_board_is_not_wet():
    tex = _texture("Jc", "8d", "3s")
    assert tex.label == "Rainbow Disconnected Mid"
    assert not tex.is_wet
    assert tex.values == (11, 8, 3)


def test_gap_of_three_still_counts_as_connected():
    assert _texture("Qc", "9d", "6s").connected
    assert not _texture("Qc", "8d", "5s").connected


def test_four_card_board_with_two_suits_is_two_tone():
    tex = _texture("Ah", "Kh", "Qh", "Jd")
    assert tex.is_two_tone
    assert not tex.is_monotone


@pytest.mark.parametrize("tokens", [("As", "Kd"), ("As", "Kd", "Qc", "Jh", "Ts", "9d")])
def test_board_size_outside_three_to_five_raises(tokens):
    with pytest.raises(ValueError):
        _texture(*tokens)


@pytest.mark.parametrize(
    "tokens, height",
    [(("Qc", "8d", "3s"), "High"), (("Tc", "8d", "3s"), "Low"), (("Jc", "8d", "3s"), "Mid")],
)
def test_label_ends_with_board_height(tokens, height):
    tex = _texture(*tokens)
    assert tex.height == height
    assert tex.label.endswith(height)
