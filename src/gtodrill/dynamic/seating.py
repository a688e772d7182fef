"""Seat and table-size helpers shared across the trainer.

Positions are named the way the preflop charts key them.  Postflop, the
heuristics only care whether hero acts last, which we approximate as "hero
sits on the button or in the cutoff".
"""

from __future__ import annotations

from typing import Final, Literal

__all__ = [
    "DEFAULT_POSITION",
    "IN_POSITION_SEATS",
    "MAX_PLAYERS",
    "MIN_PLAYERS",
    "POSITIONS",
    "TableFormat",
    "is_in_position",
    "multiway_factor",
    "normalize_position",
    "table_format",
]

UTG: Final = "UTG"
CO: Final = "CO"
BTN: Final = "BTN"
SB: Final = "SB"
BB: Final = "BB"

POSITIONS: tuple[str, ...] = (UTG, CO, BTN, SB, BB)
IN_POSITION_SEATS: frozenset[str] = frozenset({BTN, CO})
DEFAULT_POSITION: Final = BTN

MIN_PLAYERS: Final = 2
MAX_PLAYERS: Final = 9
SHORT_HANDED_MAX: Final = 6

TableFormat = Literal["6max", "9max"]


def normalize_position(raw: str | None) -> str | None:
    """Return the canonical seat name or ``None`` when it is not a chart seat."""

    token = (raw or "").strip().upper()
    return token if token in POSITIONS else None


def is_in_position(position: str) -> bool:
    return position.strip().upper() in IN_POSITION_SEATS


def table_format(player_count: int) -> TableFormat:
    return "6max" if player_count <= SHORT_HANDED_MAX else "9max"


def multiway_factor(player_count: int) -> float:
    """Scale applied to betting frequency as more opponents see the turn."""

    if player_count <= 2:
        return 1.0
    if player_count == 3:
        return 0.85
    return 0.7
