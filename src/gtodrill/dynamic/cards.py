from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import lru_cache

__all__ = [
    "RANKS",
    "SUITS",
    "SUIT_SYMBOLS",
    "Card",
    "Hand",
    "all_hand_labels",
    "deal_board",
    "deal_unique",
    "fresh_deck",
    "parse_cards",
    "random_hand",
    "rank_value",
    "str_to_int",
]

RANKS = "23456789TJQKA"
SUITS = "shdc"  # spades, hearts, diamonds, clubs

SUIT_SYMBOLS = {"s": "♠", "h": "♥", "d": "♦", "c": "♣"}


def rank_value(rank: str) -> int:
    """Return 2..14 for a rank character (A is high)."""

    idx = RANKS.find(rank.upper())
    if idx < 0:
        raise ValueError(f"unknown rank {rank!r}")
    return idx + 2


def str_to_int(card: str) -> int:
    if len(card) != 2:
        raise ValueError(f"card token must have two characters, got {card!r}")
    r, s = card[0].upper(), card[1].lower()
    if r not in RANKS or s not in SUITS:
        raise ValueError(f"invalid card token {card!r}")
    return RANKS.index(r) * 4 + SUITS.index(s)


def fresh_deck() -> list[int]:
    return list(range(52))


def deal_unique(rng: random.Random, deck: list[int], n: int) -> list[int]:
    if n > len(deck):
        raise ValueError("Cannot draw more unique cards than remain in the deck")
    out = []
    for _ in range(n):
        idx = rng.randrange(len(deck))
        out.append(deck.pop(idx))
    return out


@dataclass(frozen=True)
class Card:
    rank: str
    suit: str

    def __post_init__(self) -> None:
        if self.rank not in RANKS or self.suit not in SUITS:
            raise ValueError(f"invalid card {self.rank}{self.suit}")

    @classmethod
    def from_str(cls, token: str) -> Card:
        return cls.from_int(str_to_int(token))

    @classmethod
    def from_int(cls, c: int) -> Card:
        return cls(rank=RANKS[c // 4], suit=SUITS[c % 4])

    @property
    def value(self) -> int:
        return rank_value(self.rank)

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self.suit]

    def to_int(self) -> int:
        return RANKS.index(self.rank) * 4 + SUITS.index(self.suit)

    def __str__(self) -> str:
        return self.rank + self.suit


@dataclass(frozen=True)
class Hand:
    """Two hole cards plus the strategy-chart view of them.

    ``rank1`` is always the higher rank.  ``label`` is the chart key, e.g.
    ``"AA"``, ``"AKs"`` or ``"T9o"``.
    """

    rank1: str
    rank2: str
    suited: bool
    is_pair: bool
    cards: tuple[Card, Card]

    @classmethod
    def from_cards(cls, first: Card, second: Card) -> Hand:
        if first == second:
            raise ValueError(f"hole cards must be distinct, got {first} twice")
        high, low = (first, second) if first.value >= second.value else (second, first)
        return cls(
            rank1=high.rank,
            rank2=low.rank,
            suited=high.suit == low.suit,
            is_pair=high.rank == low.rank,
            cards=(high, low),
        )

    @classmethod
    def from_label(cls, label: str, rng: random.Random | None = None) -> Hand:
        """Build a concrete hand for a chart label.

        Suits are drawn from ``rng`` when given, otherwise the first legal
        suits in ``SUITS`` order are used so the result is deterministic.
        """

        r1, r2, suited = _parse_label(label)
        suit_order = list(SUITS)
        if rng is not None:
            rng.shuffle(suit_order)
        if suited:
            s1 = s2 = suit_order[0]
        else:
            s1, s2 = suit_order[0], suit_order[1]
        return cls.from_cards(Card(r1, s1), Card(r2, s2))

    @property
    def label(self) -> str:
        if self.is_pair:
            return f"{self.rank1}{self.rank2}"
        return f"{self.rank1}{self.rank2}{'s' if self.suited else 'o'}"

    @property
    def values(self) -> tuple[int, int]:
        return rank_value(self.rank1), rank_value(self.rank2)

    @property
    def kind(self) -> str:
        if self.is_pair:
            return "Pocket Pair"
        return "Suited" if self.suited else "Offsuit"


def _parse_label(label: str) -> tuple[str, str, bool]:
    token = (label or "").strip()
    if len(token) not in (2, 3):
        raise ValueError(f"invalid hand label {label!r}")
    r1, r2 = token[0].upper(), token[1].upper()
    if r1 not in RANKS or r2 not in RANKS:
        raise ValueError(f"invalid hand label {label!r}")
    if rank_value(r2) > rank_value(r1):
        r1, r2 = r2, r1
    if r1 == r2:
        if len(token) == 3:
            raise ValueError(f"pairs take no suitedness suffix: {label!r}")
        return r1, r2, False
    if len(token) != 3 or token[2].lower() not in ("s", "o"):
        raise ValueError(f"non-pair labels need an 's' or 'o' suffix: {label!r}")
    return r1, r2, token[2].lower() == "s"


@lru_cache(maxsize=1)
def all_hand_labels() -> tuple[str, ...]:
    """All 169 starting-hand classes, pairs first, high ranks first."""

    ordered = RANKS[::-1]
    labels = [r + r for r in ordered]
    for i, high in enumerate(ordered):
        for low in ordered[i + 1 :]:
            labels.append(f"{high}{low}s")
            labels.append(f"{high}{low}o")
    return tuple(labels)


def random_hand(rng: random.Random) -> Hand:
    # Uniform over hand classes rather than combos so rare suited/pair
    # spots come up as often as offsuit ones.
    label = rng.choice(all_hand_labels())
    return Hand.from_label(label, rng)


def deal_board(rng: random.Random, n: int, existing: Iterable[Card] = ()) -> list[Card]:
    """Deal ``n`` cards that collide with nothing in ``existing``."""

    used = {card.to_int() for card in existing}
    deck = [c for c in fresh_deck() if c not in used]
    return [Card.from_int(c) for c in deal_unique(rng, deck, n)]


def parse_cards(tokens: Sequence[str]) -> list[Card]:
    return [Card.from_str(token) for token in tokens]
