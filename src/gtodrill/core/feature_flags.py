"""Environment-driven feature flags.

Trainer behaviours that are still being tried out with users sit behind
named flags.  They are read from the ``GTODRILL_FEATURES`` environment
variable (comma-separated, case-insensitive), and tests can flip them for
the duration of a ``with`` block::

    from gtodrill.core import feature_flags

    with feature_flags.override(enable={STICKY_REVEAL}):
        ...
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Final

__all__ = ["STICKY_REVEAL", "is_enabled", "override", "set_env_flags"]

_ENV_VAR: Final = "GTODRILL_FEATURES"

# Once a training guess reveals the mix, keep it revealed on later streets
# of the same hand instead of quizzing again.
STICKY_REVEAL: Final = "session.sticky_reveal"


def _normalise(flag: str) -> str:
    return flag.strip().lower()


def _parse_env(raw: str | None) -> set[str]:
    if not raw:
        return set()
    return {_normalise(entry) for entry in raw.split(",") if entry.strip()}


_OVERRIDE_STACK: list[tuple[set[str], set[str]]] = []


def _current_overrides() -> tuple[set[str], set[str]]:
    enabled: set[str] = set()
    disabled: set[str] = set()
    for en, dis in _OVERRIDE_STACK:
        enabled.update(en)
        disabled.update(dis)
    return enabled, disabled


def is_enabled(flag: str) -> bool:
    """Return True when *flag* is enabled via env var or overrides."""

    key = _normalise(flag)
    enabled, disabled = _current_overrides()
    if key in disabled:
        return False
    if key in enabled:
        return True
    return key in _parse_env(os.getenv(_ENV_VAR))


@contextmanager
def override(*, enable: Iterable[str] | None = None, disable: Iterable[str] | None = None) -> Iterator[None]:
    """Temporarily force flags on or off; nested overrides stack."""

    enabled = {_normalise(flag) for flag in (enable or ())}
    disabled = {_normalise(flag) for flag in (disable or ())}
    _OVERRIDE_STACK.append((enabled, disabled))
    try:
        yield
    finally:
        _OVERRIDE_STACK.pop()


def set_env_flags(flags: Iterable[str]) -> None:
    os.environ[_ENV_VAR] = ",".join(sorted({_normalise(flag) for flag in flags}))
