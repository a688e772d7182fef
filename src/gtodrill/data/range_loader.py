from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..core.models import FREQ_EPSILON

logger = logging.getLogger(__name__)

_DEFAULT_RESOURCE = Path(__file__).with_name("ranges") / "preflop_charts.json"
_ALLOWED_ACTIONS = frozenset({"raise", "call", "fold"})

ChartPayload = dict[str, dict[str, dict[str, dict[str, float]]]]


@dataclass(slots=True)
class ChartLoaderConfig:
    """Configuration for the bundled preflop charts."""

    resource: Path


class ChartRepository:
    """Load and query preflop action charts keyed by table format and seat."""

    def __init__(self, config: ChartLoaderConfig | None = None) -> None:
        resource = config.resource if config else _DEFAULT_RESOURCE
        self._payload = self._load_resource(resource)

    @staticmethod
    def _load_resource(path: Path) -> ChartPayload:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError("Invalid chart payload")
        return _validate(data)

    def lookup(self, fmt: str, position: str, label: str) -> dict[str, float] | None:
        """Return the listed frequencies for ``label`` or ``None`` if unlisted."""

        seat = self._payload.get(fmt, {}).get(position)
        if not seat:
            return None
        entry = seat.get(label)
        if entry is None:
            return None
        return dict(entry)


def _validate(data: Mapping[str, object]) -> ChartPayload:
    payload: ChartPayload = {}
    for fmt, seats in data.items():
        if not isinstance(seats, Mapping):
            raise ValueError(f"chart format {fmt!r} must map seats to hands")
        payload[fmt] = {}
        for seat, hands in seats.items():
            if not isinstance(hands, Mapping):
                raise ValueError(f"chart {fmt}/{seat} must map hands to frequencies")
            parsed: dict[str, dict[str, float]] = {}
            for label, entry in hands.items():
                if not isinstance(entry, Mapping):
                    raise ValueError(f"chart entry {fmt}/{seat}/{label} must be a mapping")
                freqs = {str(action): float(value) for action, value in entry.items()}
                unknown = set(freqs) - _ALLOWED_ACTIONS
                if unknown:
                    raise ValueError(f"chart entry {fmt}/{seat}/{label} has unknown actions {sorted(unknown)}")
                if any(value < 0.0 for value in freqs.values()):
                    raise ValueError(f"chart entry {fmt}/{seat}/{label} has a negative frequency")
                if sum(freqs.values()) > 1.0 + FREQ_EPSILON:
                    raise ValueError(f"chart entry {fmt}/{seat}/{label} sums above 1")
                parsed[str(label)] = freqs
            payload[fmt][str(seat)] = parsed
    return payload


_REPOSITORY: Optional[ChartRepository] = None
_REPOSITORY_STAMP: Optional[float] = None


def get_repository() -> ChartRepository:
    """Return a repository instance using the default payload, reloading on change."""

    global _REPOSITORY, _REPOSITORY_STAMP
    stamp = _DEFAULT_RESOURCE.stat().st_mtime
    if _REPOSITORY is None or _REPOSITORY_STAMP != stamp:
        _REPOSITORY = ChartRepository(ChartLoaderConfig(resource=_DEFAULT_RESOURCE))
        _REPOSITORY_STAMP = stamp
        logger.debug("Loaded preflop charts from %s", _DEFAULT_RESOURCE)
    return _REPOSITORY
