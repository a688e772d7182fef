from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

__all__ = [
    "ACTION_ORDER",
    "FREQ_EPSILON",
    "StrategyMix",
    "complete_with_fold",
]

# Canonical display/insertion order for every decision point.
ACTION_ORDER: tuple[str, ...] = ("raise", "call", "bet", "check", "fold")

FREQ_EPSILON = 1e-9


def complete_with_fold(freqs: Mapping[str, float]) -> dict[str, float]:
    """Return ``freqs`` with fold carrying whatever the listed actions leave.

    Raises ``ValueError`` for negative frequencies or totals above one.
    """

    out: dict[str, float] = {}
    for action, raw in freqs.items():
        value = float(raw)
        if value < 0.0:
            raise ValueError(f"negative frequency for {action!r}: {value}")
        out[action] = value
    total = sum(out.values())
    if total > 1.0 + FREQ_EPSILON:
        raise ValueError(f"frequencies sum to {total:.4f} (> 1)")
    remainder = 1.0 - total
    if remainder > FREQ_EPSILON:
        out["fold"] = round(out.get("fold", 0.0) + remainder, 6)
    return out


@dataclass(frozen=True)
class StrategyMix:
    """Action frequencies for one decision point plus a coaching note."""

    frequencies: dict[str, float]
    explanation: str = ""
    street: str = "preflop"
    meta: dict[str, object] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        freqs: Mapping[str, float],
        explanation: str = "",
        *,
        street: str = "preflop",
        meta: Mapping[str, object] | None = None,
    ) -> StrategyMix:
        return cls(
            frequencies=complete_with_fold(freqs),
            explanation=explanation,
            street=street,
            meta=dict(meta or {}),
        )

    def freq(self, action: str) -> float:
        return self.frequencies.get(action, 0.0)

    @property
    def total(self) -> float:
        return sum(self.frequencies.values())

    @property
    def primary_action(self) -> str:
        # Ties go to the later action in insertion order.
        best: str | None = None
        for action, value in self.frequencies.items():
            if best is None or not self.frequencies[best] > value:
                best = action
        return best or "fold"

    def ranked(self) -> list[tuple[str, float]]:
        """Actions sorted by frequency, highest first."""

        return sorted(self.frequencies.items(), key=lambda item: item[1], reverse=True)

    def with_explanation(self, explanation: str) -> StrategyMix:
        return StrategyMix(
            frequencies=dict(self.frequencies),
            explanation=explanation,
            street=self.street,
            meta=dict(self.meta),
        )
