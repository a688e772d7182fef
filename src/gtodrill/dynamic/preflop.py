"""Preflop recommendations from the bundled charts.

Charts list raise (and, for the big blind, call) frequencies per hand class.
Anything a chart does not list is a pure fold.
"""

from __future__ import annotations

import logging

from ..core.models import StrategyMix
from ..data.range_loader import ChartRepository, get_repository
from .cards import Hand
from .seating import table_format

__all__ = ["preflop_explanation", "preflop_strategy"]

logger = logging.getLogger(__name__)


def preflop_strategy(
    hand: Hand,
    position: str,
    player_count: int,
    repository: ChartRepository | None = None,
) -> StrategyMix:
    repo = repository or get_repository()
    fmt = table_format(player_count)
    entry = repo.lookup(fmt, position, hand.label)
    if entry is None:
        logger.debug("No chart entry; folding", extra={"hand": hand.label, "position": position, "format": fmt})
        freqs: dict[str, float] = {"fold": 1.0}
    else:
        freqs = entry
    mix = StrategyMix.build(freqs, street="preflop", meta={"format": fmt, "charted": entry is not None})
    return mix.with_explanation(preflop_explanation(hand, mix, position))


def preflop_explanation(hand: Hand, mix: StrategyMix, position: str) -> str:
    label = hand.label
    primary = mix.primary_action
    pct = round(mix.freq(primary) * 100)
    if primary == "raise":
        return f"{label} is strong from {position}. Raise {pct}% to build the pot and apply pressure."
    if primary == "call":
        return f"From {position}, {label} plays well as a call {pct}% for pot control and implied odds."
    return f"{label} doesn't have enough equity from {position}. Fold {pct}% and wait for better spots."
