from __future__ import annotations

import logging
import os
from importlib.resources import files
from pathlib import Path

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..core.formatting import action_label, fmt_pct, street_title
from ..features.session import SessionManager, create_session_router

__all__ = ["app", "main", "templates"]

logger = logging.getLogger(__name__)

app = FastAPI(title="GTO Drill")
_manager = SessionManager()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))
templates.env.filters["pct"] = fmt_pct
templates.env.filters["action_label"] = action_label
templates.env.filters["street_title"] = street_title

app.include_router(create_session_router(_manager, templates))


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    try:
        html = (files("gtodrill.data") / "web" / "index.html").read_text(encoding="utf-8")
    except OSError as exc:  # pragma: no cover - packaging edge
        logger.error("Failed to load UI bundle: %s", exc)
        return f"<html><body><h1>GTO Drill</h1><p>Failed to load UI: {exc}</p></body></html>"
    return html


def _custom_openapi() -> dict[str, object]:  # pragma: no cover - exercised via docs
    if app.openapi_schema:
        return app.openapi_schema
    schema = get_openapi(
        title=app.title,
        version="1.0.0",
        description=app.description,
        routes=app.routes,
    )
    app.openapi_schema = schema
    return schema


app.openapi = _custom_openapi  # type: ignore[assignment]
app.openapi_schema = None


def main() -> None:  # pragma: no cover - runner
    import uvicorn

    level = os.environ.get("GTODRILL_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    host = os.environ.get("BIND", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run(app, host=host, port=port, factory=False)


if __name__ == "__main__":  # pragma: no cover
    main()
