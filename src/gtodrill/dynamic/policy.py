"""Postflop action mixes for the flop, turn and river.

Every street walks a fixed cascade from the strongest holdings down to air
and returns the first matching bet/check/fold split.  Splits are hardcoded
teaching numbers: they move in the right direction with position and board
wetness but are not solver output.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.models import StrategyMix
from .cards import Card, Hand
from .hand_class import classify_draws, classify_pairing
from .preflop import preflop_strategy
from .seating import is_in_position, multiway_factor
from .texture import analyze_texture

__all__ = [
    "STREET_FOR_BOARD_SIZE",
    "flop_strategy",
    "river_strategy",
    "strategy_for",
    "street_for_board",
    "turn_strategy",
]


STREET_FOR_BOARD_SIZE = {0: "preflop", 3: "flop", 4: "turn", 5: "river"}

Split = tuple[float, float, float]


def _mix(split: Split, explanation: str, street: str, branch: str) -> StrategyMix:
    bet, check, fold = split
    return StrategyMix.build(
        {"bet": bet, "check": check, "fold": fold},
        explanation,
        street=street,
        meta={"branch": branch},
    )


def _pick(ip: bool, wet: bool, table: dict[tuple[bool, bool], Split]) -> Split:
    return table[(ip, wet)]


def flop_strategy(hand: Hand, board: Sequence[Card], position: str, *, street: str = "flop") -> StrategyMix:
    """Return the flop cascade for ``hand`` on ``board``.

    ``board`` may hold more than three cards; the turn reuses this cascade
    over the four-card board before scaling it.
    """

    tex = analyze_texture(board)
    pairing = classify_pairing(hand, board)
    draws = classify_draws(hand, board, tex)
    ip = is_in_position(position)
    wet = tex.is_wet
    texture = tex.label.lower()

    if pairing.is_monster:
        made = "set" if pairing.has_set else "two pair"
        split = (0.85, 0.15, 0.0) if ip else (0.75, 0.20, 0.0)
        return _mix(
            split,
            f"You flopped a strong hand ({made}) on a {texture} board. Favor betting for value.",
            street,
            "monster",
        )

    if pairing.has_overpair:
        split = _pick(
            ip,
            wet,
            {
                (True, True): (0.75, 0.25, 0.0),
                (True, False): (0.65, 0.35, 0.0),
                (False, True): (0.65, 0.30, 0.0),
                (False, False): (0.55, 0.40, 0.0),
            },
        )
        return _mix(
            split,
            f"Overpair on a {texture} board. Lean to betting for value/protection.",
            street,
            "overpair",
        )

    if pairing.pair_tier == "top":
        split = _pick(
            ip,
            wet,
            {
                (True, True): (0.70, 0.30, 0.0),
                (True, False): (0.60, 0.40, 0.0),
                (False, True): (0.55, 0.40, 0.0),
                (False, False): (0.45, 0.50, 0.0),
            },
        )
        return _mix(
            split,
            f"Top pair on {texture}. Bet more on wetter boards; mix checks.",
            street,
            "top_pair",
        )

    if pairing.pair_tier == "middle":
        split = (0.45, 0.50, 0.05) if ip else (0.35, 0.55, 0.10)
        return _mix(
            split,
            f"Middle pair on {texture}. Prefer checking; bet some for protection.",
            street,
            "middle_pair",
        )

    if pairing.pair_tier == "bottom":
        split = (0.30, 0.60, 0.10) if ip else (0.20, 0.65, 0.15)
        return _mix(
            split,
            f"Bottom pair on {texture}. Mostly check; mix small bets IP.",
            street,
            "bottom_pair",
        )

    if draws.strong:
        split = _pick(
            ip,
            wet,
            {
                (True, True): (0.65, 0.30, 0.05),
                (True, False): (0.60, 0.35, 0.05),
                (False, True): (0.55, 0.35, 0.10),
                (False, False): (0.50, 0.40, 0.10),
            },
        )
        kind = "flush draw" if draws.flush_draw else "OESD"
        return _mix(
            split,
            f"Strong draw ({kind}) on {texture}. Favor betting as semi-bluff.",
            street,
            "strong_draw",
        )

    if draws.speculative:
        split = (0.40, 0.55, 0.05) if ip else (0.25, 0.65, 0.10)
        return _mix(
            split,
            f"Speculative equity (gutshot/backdoor/overcards) on {texture}. "
            "Mix stab bets IP; mostly check OOP.",
            street,
            "speculative",
        )

    if ip:
        dry = tex.is_rainbow and not tex.connected
        split = (0.35, 0.60, 0.05) if dry else (0.30, 0.65, 0.05)
        advice = "Use small c-bets on drier boards"
    else:
        split = (0.15, 0.80, 0.05)
        advice = "Mostly check-fold OOP"
    return _mix(split, f"Missed the flop. {advice} to avoid bloating.", street, "air")


def turn_strategy(hand: Hand, board: Sequence[Card], position: str, player_count: int) -> StrategyMix:
    """Scale the flop cascade over the four-card board by table size.

    Betting shrinks as more opponents see the turn; half of the removed bet
    share moves to check and fold takes whatever is left.
    """

    if len(board) != 4:
        raise ValueError(f"turn strategy needs a 4-card board, got {len(board)}")
    base = flop_strategy(hand, board, position, street="turn")
    factor = multiway_factor(player_count)
    bet = round(base.freq("bet") * factor, 2)
    check = round(base.freq("check") + (1.0 - factor) * base.freq("bet") * 0.5, 2)
    meta = dict(base.meta)
    meta["multiway_factor"] = factor
    return StrategyMix.build(
        {"bet": bet, "check": check, "fold": base.freq("fold")},
        f"[Turn] {base.explanation}",
        street="turn",
        meta=meta,
    )


def river_strategy(hand: Hand, board: Sequence[Card], position: str) -> StrategyMix:
    if len(board) != 5:
        raise ValueError(f"river strategy needs a 5-card board, got {len(board)}")
    tex = analyze_texture(board)
    pairing = classify_pairing(hand, board)
    draws = classify_draws(hand, board, tex)
    ip = is_in_position(position)

    if pairing.is_monster:
        made = "set" if pairing.has_set else "two pair"
        split = (0.80, 0.20, 0.0) if ip else (0.70, 0.30, 0.0)
        return _mix(split, f"Strong value ({made}) on river. Bet for value.", "river", "monster")

    if pairing.pair_tier == "top" or pairing.has_overpair:
        split = (0.55, 0.40, 0.05) if ip else (0.45, 0.50, 0.05)
        return _mix(
            split,
            "Top pair or overpair on river. Mix bets/checks depending on texture.",
            "river",
            "top_pair",
        )

    if draws.any_straight_or_flush:
        split = (0.25, 0.45, 0.30) if ip else (0.15, 0.50, 0.35)
        return _mix(
            split,
            "Missed draw. Consider bluffing IP; mostly check/fold OOP.",
            "river",
            "missed_draw",
        )

    split = (0.0, 0.45, 0.55) if ip else (0.0, 0.30, 0.70)
    return _mix(split, "Weak/no showdown value. Mostly check/fold.", "river", "weak")


def street_for_board(board: Sequence[Card]) -> str:
    street = STREET_FOR_BOARD_SIZE.get(len(board))
    if street is None:
        raise ValueError(f"no street has {len(board)} board cards")
    return street


def strategy_for(hand: Hand, board: Sequence[Card], position: str, player_count: int) -> StrategyMix:
    """Dispatch to the street matching the number of board cards."""

    street = street_for_board(board)
    if street == "preflop":
        return preflop_strategy(hand, position, player_count)
    if street == "flop":
        return flop_strategy(hand, board, position)
    if street == "turn":
        return turn_strategy(hand, board, position, player_count)
    return river_strategy(hand, board, position)
