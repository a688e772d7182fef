"""Board texture classification.

The analyzer only looks at suit multiplicity and rank spacing; it never
evaluates made hands.  Every downstream heuristic (pair tiers, draw
detection, the flop/turn/river cascades) reads the same ``BoardTexture`` so
the UI label and the strategy always agree about what the board looks like.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from .cards import Card

__all__ = ["BoardTexture", "analyze_texture", "CONNECTED_MAX_GAP", "HIGH_CARD_MIN", "LOW_BOARD_MAX"]

CONNECTED_MAX_GAP = 3
HIGH_CARD_MIN = 12  # queen or better
LOW_BOARD_MAX = 10  # ten or lower


@dataclass(frozen=True)
class BoardTexture:
    label: str
    is_monotone: bool
    is_two_tone: bool
    is_rainbow: bool
    has_pair: bool
    connected: bool
    high_presence: bool
    low_board: bool
    values: tuple[int, ...]
    suit_counts: dict[str, int]

    @property
    def is_wet(self) -> bool:
        return self.is_monotone or self.is_two_tone or self.connected

    @property
    def height(self) -> str:
        return _height(self.high_presence, self.low_board)

    def suit_count(self, suit: str) -> int:
        return self.suit_counts.get(suit, 0)


def _height(high_presence: bool, low_board: bool) -> str:
    if high_presence:
        return "High"
    return "Low" if low_board else "Mid"


def analyze_texture(board: Sequence[Card]) -> BoardTexture:
    if not 3 <= len(board) <= 5:
        raise ValueError(f"board texture needs 3-5 cards, got {len(board)}")

    suit_counts = dict(Counter(card.suit for card in board))
    distinct_suits = len(suit_counts)
    is_monotone = distinct_suits == 1
    is_two_tone = distinct_suits == 2
    is_rainbow = distinct_suits >= 3

    rank_counts = Counter(card.rank for card in board)
    has_pair = any(count >= 2 for count in rank_counts.values())

    values = tuple(sorted((card.value for card in board), reverse=True))
    connected = all(values[i] - values[i + 1] <= CONNECTED_MAX_GAP for i in range(len(values) - 1))

    high_presence = any(v >= HIGH_CARD_MIN for v in values)
    low_board = all(v <= LOW_BOARD_MAX for v in values)

    bits: list[str] = []
    if has_pair:
        bits.append("Paired")
    if is_monotone:
        bits.append("Monotone")
    elif is_two_tone:
        bits.append("Two-Tone")
    else:
        bits.append("Rainbow")
    bits.append("Connected" if connected else "Disconnected")
    bits.append(_height(high_presence, low_board))

    return BoardTexture(
        label=" ".join(bits),
        is_monotone=is_monotone,
        is_two_tone=is_two_tone,
        is_rainbow=is_rainbow,
        has_pair=has_pair,
        connected=connected,
        high_presence=high_presence,
        low_board=low_board,
        values=values,
        suit_counts=suit_counts,
    )
