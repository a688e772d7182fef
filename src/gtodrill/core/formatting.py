from __future__ import annotations

__all__ = ["action_label", "fmt_pct", "street_title"]

_ACTION_LABELS = {
    "raise": "Raise",
    "call": "Call",
    "bet": "Bet",
    "check": "Check",
    "fold": "Fold",
}

_STREET_TITLES = {
    "preflop": "Preflop Stage",
    "flop": "Flop",
    "turn": "Turn",
    "river": "River",
}


def fmt_pct(freq: float) -> str:
    """Render a 0..1 frequency as a whole-number percentage."""

    return f"{round(freq * 100):.0f}%"


def action_label(action: str) -> str:
    return _ACTION_LABELS.get(action, action.capitalize())


def street_title(street: str) -> str:
    return _STREET_TITLES.get(street, street.capitalize())
