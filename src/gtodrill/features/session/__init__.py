"""Session feature: hand engine, service layer, schemas, and API router."""

from .router import create_session_router
from .schemas import (
    ActionFrequency,
    CardPayload,
    FeedbackPayload,
    GuessResult,
    HandPayload,
    ScorePayload,
    SettingsPayload,
    StrategyPayload,
    StreetSummaryPayload,
    SummaryPayload,
    ViewResponse,
)
from .service import SessionConfig, SessionManager

__all__ = [
    "ActionFrequency",
    "CardPayload",
    "FeedbackPayload",
    "GuessResult",
    "HandPayload",
    "ScorePayload",
    "SessionConfig",
    "SessionManager",
    "SettingsPayload",
    "StrategyPayload",
    "StreetSummaryPayload",
    "SummaryPayload",
    "ViewResponse",
    "create_session_router",
]
