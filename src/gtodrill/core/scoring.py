from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

__all__ = ["StreetStats", "SummaryStats", "accuracy_pct", "summarize_records"]

STREETS: tuple[str, ...] = ("preflop", "flop", "turn", "river")


@dataclass(frozen=True)
class StreetStats:
    decisions: int
    hits: int
    accuracy_pct: float


@dataclass(frozen=True)
class SummaryStats:
    hands: int
    decisions: int
    hits: int
    accuracy_pct: float
    avg_guess_freq: float
    by_street: dict[str, StreetStats] = field(default_factory=dict)


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def accuracy_pct(hits: int, decisions: int) -> float:
    if decisions <= 0:
        return 0.0
    return 100.0 * hits / decisions


def summarize_records(records: Sequence[Mapping[str, Any]]) -> SummaryStats:
    """Aggregate guess records into session statistics.

    Each record carries ``street``, ``correct``, ``hand_index`` and the
    strategy frequency of the guessed action (``guess_freq``).
    """

    if not records:
        return SummaryStats(hands=0, decisions=0, hits=0, accuracy_pct=0.0, avg_guess_freq=0.0)

    decisions = len(records)
    hits = sum(1 for r in records if r.get("correct"))
    hand_ids = {r.get("hand_index", idx) for idx, r in enumerate(records)}
    avg_freq = sum(_as_float(r.get("guess_freq")) for r in records) / decisions

    by_street: dict[str, StreetStats] = {}
    for street in STREETS:
        subset = [r for r in records if r.get("street") == street]
        if not subset:
            continue
        street_hits = sum(1 for r in subset if r.get("correct"))
        by_street[street] = StreetStats(
            decisions=len(subset),
            hits=street_hits,
            accuracy_pct=accuracy_pct(street_hits, len(subset)),
        )

    return SummaryStats(
        hands=len(hand_ids),
        decisions=decisions,
        hits=hits,
        accuracy_pct=accuracy_pct(hits, decisions),
        avg_guess_freq=avg_freq,
        by_street=by_street,
    )
