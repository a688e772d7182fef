"""How a hand interacts with a board: pair tiers and draws.

Both classifiers are deliberately coarse.  Thresholds such as "within one
rank of a board card" for an open-ender are fixed heuristics tuned for a
training aid, not outputs of a hand evaluator.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from .cards import Card, Hand
from .texture import BoardTexture, analyze_texture

__all__ = ["DrawInfo", "PairTier", "PairingInfo", "classify_draws", "classify_pairing"]

PairTier = Literal["top", "middle", "bottom", "none"]

OESD_NEAREST = 1
OESD_SECOND = 2
GUTSHOT_NEAREST = 2
GUTSHOT_SECOND = 3


@dataclass(frozen=True)
class PairingInfo:
    has_set: bool
    has_two_pair: bool
    has_overpair: bool
    pair_tier: PairTier

    @property
    def is_monster(self) -> bool:
        return self.has_set or self.has_two_pair


@dataclass(frozen=True)
class DrawInfo:
    flush_draw: bool
    backdoor_flush_draw: bool
    oesd: bool
    gutshot: bool
    two_overcards: bool
    one_overcard: bool

    @property
    def strong(self) -> bool:
        return self.flush_draw or self.oesd

    @property
    def speculative(self) -> bool:
        return self.gutshot or self.backdoor_flush_draw or self.two_overcards or self.one_overcard

    @property
    def any_straight_or_flush(self) -> bool:
        return self.flush_draw or self.oesd or self.gutshot


def classify_pairing(hand: Hand, board: Sequence[Card]) -> PairingInfo:
    board_ranks = {card.rank for card in board}
    board_values = sorted((card.value for card in board), reverse=True)
    v1, v2 = hand.values

    has_set = hand.is_pair and hand.rank1 in board_ranks
    has_two_pair = not hand.is_pair and hand.rank1 in board_ranks and hand.rank2 in board_ranks
    has_overpair = hand.is_pair and v1 > board_values[0]

    made1 = hand.rank1 in board_ranks
    made2 = hand.rank2 in board_ranks

    tier: PairTier
    if has_set or has_two_pair or has_overpair:
        tier = "top"
    elif not (made1 or made2):
        tier = "none"
    else:
        hit = v1 if made1 else v2
        if hit == board_values[0]:
            tier = "top"
        elif hit == board_values[1]:
            tier = "middle"
        else:
            tier = "bottom"

    return PairingInfo(has_set=has_set, has_two_pair=has_two_pair, has_overpair=has_overpair, pair_tier=tier)


def _nearest_gaps(value: int, board_values: Sequence[int]) -> tuple[int, int]:
    diffs = sorted(abs(bv - value) for bv in board_values)
    return diffs[0], diffs[1]


def classify_draws(hand: Hand, board: Sequence[Card], texture: BoardTexture | None = None) -> DrawInfo:
    tex = texture or analyze_texture(board)
    board_values = tex.values

    hero_suit = hand.cards[0].suit
    suited_count = tex.suit_count(hero_suit) if hand.suited else 0
    flush_draw = hand.suited and suited_count >= 2
    backdoor = hand.suited and tex.is_rainbow and suited_count <= 1

    gaps = [_nearest_gaps(v, board_values) for v in hand.values]
    best1 = min(g[0] for g in gaps)
    best2 = min(g[1] for g in gaps)

    oesd = best1 <= OESD_NEAREST and best2 <= OESD_SECOND and tex.connected
    gutshot = not oesd and ((best1 <= GUTSHOT_NEAREST and best2 <= GUTSHOT_SECOND) or tex.connected)

    overcards = sum(1 for v in hand.values if v > board_values[0])

    return DrawInfo(
        flush_draw=flush_draw,
        backdoor_flush_draw=backdoor,
        oesd=oesd,
        gutshot=gutshot,
        two_overcards=overcards == 2,
        one_overcard=overcards == 1,
    )
