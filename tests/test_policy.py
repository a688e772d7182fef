from __future__ import annotations

import random

import pytest

from gtodrill.dynamic.cards import Hand, deal_board, parse_cards, random_hand
from gtodrill.dynamic.policy import (
    flop_strategy,
    river_strategy,
    strategy_for,
    street_for_board,
    turn_strategy,
)
from gtodrill.dynamic.seating import POSITIONS


def _hand(a: str, b: str) -> Hand:
    first, second = parse_cards([a, b])
    return Hand.from_cards(first, second)


def test_flopped_set_bets_for_value():
    hand = _hand("7h", "7d")
    board = parse_cards(["7c", "Ks", "2d"])

    ip = flop_strategy(hand, board, "BTN")
    assert ip.freq("bet") == pytest.approx(0.85)
    assert ip.freq("check") == pytest.approx(0.15)
    assert ip.primary_action == "bet"
    assert ip.meta["branch"] == "monster"
    assert "(set)" in ip.explanation

    oop = flop_strategy(hand, board, "BB")
    assert oop.freq("bet") == pytest.approx(0.75)
    assert oop.freq("fold") == pytest.approx(0.05)


def test_overpair_on_wet_board_in_position():
    mix = flop_strategy(_hand("Qh", "Qd"), parse_cards(["9s", "8s", "3c"]), "CO")
    assert mix.meta["branch"] == "overpair"
    assert mix.freq("bet") == pytest.approx(0.75)
    assert mix.freq("check") == pytest.approx(0.25)


def test_missed_flop_checks_out_of_position():
    hand = _hand("3c", "2d")
    board = parse_cards(["Ks", "8h", "4c"])

    oop = flop_strategy(hand, board, "SB")
    assert oop.meta["branch"] == "air"
    assert oop.frequencies == pytest.approx({"bet": 0.15, "check": 0.80, "fold": 0.05})
    assert oop.primary_action == "check"

    ip = flop_strategy(hand, board, "BTN")
    assert ip.freq("bet") == pytest.approx(0.35)
    assert "small c-bets" in ip.explanation


def test_turn_bets_less_with_more_players():
    hand = _hand("7h", "7d")
    board = parse_cards(["7c", "Ks", "2d", "9h"])
    flop = flop_strategy(hand, board[:3], "BTN")

    heads_up = turn_strategy(hand, board, "BTN", 2)
    assert heads_up.freq("bet") == pytest.approx(flop.freq("bet"))
    assert heads_up.explanation.startswith("[Turn] ")
    assert heads_up.street == "turn"

    for players in (3, 4, 9):
        multiway = turn_strategy(hand, board, "BTN", players)
        assert multiway.freq("bet") < flop.freq("bet")
        assert multiway.total == pytest.approx(1.0)
    assert turn_strategy(hand, board, "BTN", 3).meta["multiway_factor"] == 0.85
    assert turn_strategy(hand, board, "BTN", 5).meta["multiway_factor"] == 0.7


def test_turn_and_river_require_matching_board_sizes():
    hand = _hand("7h", "7d")
    with pytest.raises(ValueError):
        turn_strategy(hand, parse_cards(["7c", "Ks", "2d"]), "BTN", 2)
    with pytest.raises(ValueError):
        river_strategy(hand, parse_cards(["7c", "Ks", "2d", "9h"]), "BTN")


def test_river_missed_draw_and_weak_hands():
    missed = river_strategy(_hand("Jh", "Th"), parse_cards(["Kc", "9d", "2h", "4s", "3c"]), "BTN")
    assert missed.meta["branch"] == "missed_draw"
    assert missed.frequencies == pytest.approx({"bet": 0.25, "check": 0.45, "fold": 0.30})

    weak = river_strategy(_hand("3c", "2d"), parse_cards(["Ah", "Kd", "7c", "7s", "Qh"]), "BB")
    assert weak.meta["branch"] == "weak"
    assert weak.primary_action == "fold"
    assert weak.freq("bet") == 0.0


def test_river_top_pair_mixes():
    mix = river_strategy(_hand("Ah", "Jd"), parse_cards(["As", "9d", "4c", "2h", "7s"]), "UTG")
    assert mix.meta["branch"] == "top_pair"
    assert mix.primary_action == "check"


def test_street_dispatch_by_board_size():
    hand = Hand.from_label("AA")
    assert strategy_for(hand, [], "BTN", 2).street == "preflop"
    assert street_for_board(parse_cards(["As", "Kd", "Qc"])) == "flop"
    with pytest.raises(ValueError):
        street_for_board(parse_cards(["As", "Kd"]))


def test_every_generated_spot_sums_to_one():
    for seed in range(120):
        rng = random.Random(seed)
        hand = random_hand(rng)
        board = deal_board(rng, 5, hand.cards)
        position = POSITIONS[seed % len(POSITIONS)]
        players = 2 + seed % 8
        for size in (0, 3, 4, 5):
            mix = strategy_for(hand, board[:size], position, players)
            assert mix.total == pytest.approx(1.0)
            assert all(value >= 0.0 for value in mix.frequencies.values())


def _split(bet: float, check: float, fold: float) -> dict[str, float]:
    return {"bet": bet, "check": check, "fold": fold}


# (hole cards, board, position, branch, expected split after fold completion)
FLOP_SPOTS = [
    # Flopped set.
    (("7h", "7d"), ("7c", "Ks", "2d"), "BB", "monster", _split(0.75, 0.20, 0.05)),
    # Overpair: rainbow disconnected is dry, two-tone is wet.
    (("Qh", "Qd"), ("Js", "8d", "3c"), "BTN", "overpair", _split(0.65, 0.35, 0.0)),
    (("Qh", "Qd"), ("Js", "8d", "3c"), "SB", "overpair", _split(0.55, 0.40, 0.05)),
    (("Qh", "Qd"), ("9s", "8s", "3c"), "UTG", "overpair", _split(0.65, 0.30, 0.05)),
    # Top pair.
    (("Ah", "Jd"), ("As", "9d", "4c"), "BTN", "top_pair", _split(0.60, 0.40, 0.0)),
    (("Ah", "Jd"), ("As", "9d", "4c"), "BB", "top_pair", _split(0.45, 0.50, 0.05)),
    (("Ah", "Jd"), ("As", "9s", "4c"), "CO", "top_pair", _split(0.70, 0.30, 0.0)),
    (("Ah", "Jd"), ("As", "9s", "4c"), "SB", "top_pair", _split(0.55, 0.40, 0.05)),
    # Middle pair ignores wetness.
    (("Kh", "9c"), ("Ad", "9s", "4h"), "BTN", "middle_pair", _split(0.45, 0.50, 0.05)),
    (("Kh", "9c"), ("Ad", "9s", "4h"), "BB", "middle_pair", _split(0.35, 0.55, 0.10)),
    (("Kh", "9c"), ("Ad", "9d", "4h"), "CO", "middle_pair", _split(0.45, 0.50, 0.05)),
    (("Kh", "9c"), ("Ad", "9d", "4h"), "UTG", "middle_pair", _split(0.35, 0.55, 0.10)),
    # Bottom pair ignores wetness.
    (("5h", "4d"), ("Ac", "9s", "4h"), "BTN", "bottom_pair", _split(0.30, 0.60, 0.10)),
    (("5h", "4d"), ("Ac", "9s", "4h"), "BB", "bottom_pair", _split(0.20, 0.65, 0.15)),
    (("5h", "4d"), ("Ac", "9c", "4h"), "CO", "bottom_pair", _split(0.30, 0.60, 0.10)),
    (("5h", "4d"), ("Ac", "9c", "4h"), "SB", "bottom_pair", _split(0.20, 0.65, 0.15)),
    # Strong draws need two suited board cards or a connected board, so they are always wet.
    (("9h", "8h"), ("Kh", "4h", "2c"), "BTN", "strong_draw", _split(0.65, 0.30, 0.05)),
    (("9h", "8h"), ("Kh", "4h", "2c"), "BB", "strong_draw", _split(0.55, 0.35, 0.10)),
    (("9c", "8d"), ("7h", "6s", "4c"), "CO", "strong_draw", _split(0.65, 0.30, 0.05)),
    (("9c", "8d"), ("7h", "6s", "4c"), "UTG", "strong_draw", _split(0.55, 0.35, 0.10)),
    # Speculative: overcards on a dry board, overcards plus gutshot on a connected one.
    (("Ah", "Qd"), ("Jc", "7s", "2d"), "BTN", "speculative", _split(0.40, 0.55, 0.05)),
    (("Ah", "Qd"), ("Jc", "7s", "2d"), "SB", "speculative", _split(0.25, 0.65, 0.10)),
    (("Ah", "Qd"), ("8c", "7s", "5d"), "CO", "speculative", _split(0.40, 0.55, 0.05)),
    (("Ah", "Qd"), ("8c", "7s", "5d"), "BB", "speculative", _split(0.25, 0.65, 0.10)),
    # Air: only the in-position split cares about dryness.
    (("3c", "2d"), ("Ks", "8h", "4c"), "BTN", "air", _split(0.35, 0.60, 0.05)),
    (("3c", "2d"), ("Ks", "8s", "4h"), "BTN", "air", _split(0.30, 0.65, 0.05)),
    (("3c", "2d"), ("Ks", "8s", "4h"), "UTG", "air", _split(0.15, 0.80, 0.05)),
]


@pytest.mark.parametrize("cards, board, position, branch, expected", FLOP_SPOTS)
def test_flop_cascade_splits(cards, board, position, branch, expected):
    mix = flop_strategy(_hand(*cards), parse_cards(board), position)
    assert mix.meta["branch"] == branch
    assert mix.frequencies == pytest.approx(expected)
    assert mix.street == "flop"


RIVER_SPOTS = [
    (("7h", "7d"), ("7c", "Ks", "2d", "9h", "4s"), "BTN", "monster", _split(0.80, 0.20, 0.0)),
    (("7h", "7d"), ("7c", "Ks", "2d", "9h", "4s"), "BB", "monster", _split(0.70, 0.30, 0.0)),
    (("Ah", "Jd"), ("As", "9d", "4c", "2h", "7s"), "BTN", "top_pair", _split(0.55, 0.40, 0.05)),
    (("Ah", "Jd"), ("As", "9d", "4c", "2h", "7s"), "UTG", "top_pair", _split(0.45, 0.50, 0.05)),
    (("Jh", "Th"), ("Kc", "9d", "2h", "4s", "3c"), "BB", "missed_draw", _split(0.15, 0.50, 0.35)),
    (("3c", "2d"), ("Ah", "Kd", "7c", "7s", "Qh"), "CO", "weak", _split(0.0, 0.45, 0.55)),
]


@pytest.mark.parametrize("cards, board, position, branch, expected", RIVER_SPOTS)
def test_river_cascade_splits(cards, board, position, branch, expected):
    mix = river_strategy(_hand(*cards), parse_cards(board), position)
    assert mix.meta["branch"] == branch
    assert mix.frequencies == pytest.approx(expected)
