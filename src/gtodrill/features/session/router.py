from __future__ import annotations

import json
import math

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, model_validator

from ...dynamic.seating import DEFAULT_POSITION, MAX_PLAYERS, MIN_PLAYERS, normalize_position
from .engine import GAME_MODES, MODES
from .schemas import GuessResult, SummaryPayload, ViewResponse
from .service import SessionConfig, SessionManager

__all__ = ["CreateSessionRequest", "GuessRequest", "SettingsRequest", "create_session_router"]

_HX_HEADER = "HX-Request"


def _coerce_players(value: object) -> int | None:
    if value in (None, ""):
        return None
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    return None


def _lower(value: object) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip().lower()


class CreateSessionRequest(BaseModel):
    mode: str | None = None
    game_mode: str | None = None
    players: int | None = None
    position: str | None = None
    seed: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: dict[str, object]) -> dict[str, object]:
        if not isinstance(data, dict):
            return data
        cleaned: dict[str, object] = dict(data)
        cleaned["players"] = _coerce_players(cleaned.get("players"))
        seed = cleaned.get("seed")
        if seed in (None, "") or (isinstance(seed, str) and not seed.strip().isdigit()):
            cleaned["seed"] = None
        return cleaned

    @model_validator(mode="after")
    def _normalize(self) -> CreateSessionRequest:
        mode = _lower(self.mode)
        self.mode = mode if mode in MODES else "practice"
        game_mode = _lower(self.game_mode)
        self.game_mode = game_mode if game_mode in GAME_MODES else "preflop"
        players = self.players if self.players is not None else 2
        self.players = min(MAX_PLAYERS, max(MIN_PLAYERS, players))
        self.position = normalize_position(self.position) or DEFAULT_POSITION
        return self


class SettingsRequest(BaseModel):
    """Partial settings update; unknown or blank values are ignored."""

    mode: str | None = None
    game_mode: str | None = None
    players: int | None = None
    position: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: dict[str, object]) -> dict[str, object]:
        if not isinstance(data, dict):
            return data
        cleaned: dict[str, object] = dict(data)
        cleaned["players"] = _coerce_players(cleaned.get("players"))
        return cleaned

    @model_validator(mode="after")
    def _normalize(self) -> SettingsRequest:
        mode = _lower(self.mode)
        self.mode = mode if mode in MODES else None
        game_mode = _lower(self.game_mode)
        self.game_mode = game_mode if game_mode in GAME_MODES else None
        if self.players is not None:
            self.players = min(MAX_PLAYERS, max(MIN_PLAYERS, self.players))
        self.position = normalize_position(self.position)
        return self

    def changes(self) -> dict[str, object]:
        raw = {
            "mode": self.mode,
            "game_mode": self.game_mode,
            "player_count": self.players,
            "position": self.position,
        }
        return {key: value for key, value in raw.items() if value is not None}


class GuessRequest(BaseModel):
    action: str


class _SessionController:
    def __init__(self, manager: SessionManager, templates: Jinja2Templates) -> None:
        self.manager = manager
        self.templates = templates

    # ------------------------------------------------------------------ helpers
    def _is_hx(self, request: Request) -> bool:
        return request.headers.get(_HX_HEADER, "").lower() == "true"

    def _json_response(self, data: dict[str, object]) -> JSONResponse:
        response = JSONResponse(data)
        response.headers.setdefault("Vary", _HX_HEADER)
        return response

    def _template_response(
        self,
        request: Request,
        template: str,
        context: dict[str, object],
        *,
        trigger: dict[str, str] | None = None,
    ) -> Response:
        headers: dict[str, str] = {"Vary": _HX_HEADER}
        if trigger:
            headers["HX-Trigger"] = json.dumps(trigger)
        return self.templates.TemplateResponse(
            request,
            template,
            {**context, "request": request},
            headers=headers,
        )

    def _view_fragment(self, request: Request, view: ViewResponse, *, event: str = "sessionUpdated") -> Response:
        return self._template_response(
            request,
            "session/view.html",
            {"view": view},
            trigger={event: view.session},
        )

    def _respond_view(self, request: Request, view: ViewResponse, *, event: str = "sessionUpdated") -> Response:
        if self._is_hx(request):
            return self._view_fragment(request, view, event=event)
        return self._json_response(view.to_dict())

    # ------------------------------------------------------------------ actions
    async def create(self, request: Request, body: CreateSessionRequest) -> Response:
        session_id = await self.manager.create_session_async(
            SessionConfig(
                mode=body.mode or "practice",
                game_mode=body.game_mode or "preflop",
                player_count=body.players or MIN_PLAYERS,
                position=body.position or DEFAULT_POSITION,
                seed=body.seed,
            )
        )
        if self._is_hx(request):
            view = await self.manager.get_view_async(session_id)
            return self._view_fragment(request, view, event="sessionCreated")
        return self._json_response({"session": session_id})

    async def view(self, request: Request, sid: str) -> Response:
        try:
            view = await self.manager.get_view_async(sid)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        return self._respond_view(request, view)

    async def new_hand(self, request: Request, sid: str) -> Response:
        try:
            view = await self.manager.new_hand_async(sid)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        return self._respond_view(request, view)

    async def next_street(self, request: Request, sid: str) -> Response:
        try:
            view = await self.manager.next_street_async(sid)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(400, str(exc)) from exc
        return self._respond_view(request, view)

    async def guess(self, request: Request, sid: str, body: GuessRequest) -> Response:
        try:
            result: GuessResult = await self.manager.guess_async(sid, body.action)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(400, str(exc)) from exc
        if self._is_hx(request):
            return self._view_fragment(request, result.view)
        return self._json_response(result.to_dict())

    async def settings(self, request: Request, sid: str, body: SettingsRequest) -> Response:
        try:
            view = await self.manager.update_settings_async(sid, **body.changes())
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(400, str(exc)) from exc
        return self._respond_view(request, view)

    async def summary(self, request: Request, sid: str) -> Response:
        try:
            summary: SummaryPayload = await self.manager.summary_async(sid)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        if self._is_hx(request):
            return self._template_response(
                request, "session/summary.html", {"summary": summary}, trigger={"summaryLoaded": sid}
            )
        return self._json_response(summary.to_dict())


def create_session_router(manager: SessionManager, templates: Jinja2Templates) -> APIRouter:
    controller = _SessionController(manager, templates)

    router = APIRouter(prefix="/api/v1/session", tags=["session"])

    @router.post("")
    async def create_session(request: Request, body: CreateSessionRequest) -> Response:
        return await controller.create(request, body)

    @router.get("/{sid}")
    async def get_view(request: Request, sid: str) -> Response:
        return await controller.view(request, sid)

    @router.post("/{sid}/hand")
    async def post_new_hand(request: Request, sid: str) -> Response:
        return await controller.new_hand(request, sid)

    @router.post("/{sid}/street")
    async def post_next_street(request: Request, sid: str) -> Response:
        return await controller.next_street(request, sid)

    @router.post("/{sid}/guess")
    async def post_guess(request: Request, sid: str, body: GuessRequest) -> Response:
        return await controller.guess(request, sid, body)

    @router.patch("/{sid}/settings")
    async def patch_settings(request: Request, sid: str, body: SettingsRequest) -> Response:
        return await controller.settings(request, sid, body)

    @router.get("/{sid}/summary")
    async def get_summary(request: Request, sid: str) -> Response:
        return await controller.summary(request, sid)

    return router
