"""
Resolution Service
==================
FastAPI app used by the gallery page.

    POST /api/resolve            {"rows": [...]}   → [MediaItem, ...]
    POST /api/resolve?partial=1  {"rows": [...]}   → [ResolveResult, ...]
    POST /api/gallery            {"text": "..."}   → [MediaItem, ...]
    GET  /api/sample                               → DEFAULT_TABLE resolved
    GET  /api/status

Errors are {"error": "<message>"} with 400 / 405 / 500.

Usage:
    python -m ig_gallery serve --port 8877
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Callable, List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from .config import DEFAULT_TABLE
from .exceptions import ValidationError
from .gallery import Gallery
from .models.row import Row

logger = logging.getLogger("ig_gallery.server")


def _error(msg: str, status_code: int = 500, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse({"error": msg}, status_code=status_code, headers=headers)


def _to_json(objs: List[Any]) -> JSONResponse:
    return JSONResponse([obj.to_json() for obj in objs])


async def _read_body(request: Request) -> dict:
    try:
        body = await request.json()
    except Exception:
        raise ValidationError("invalid JSON body", status_code=400)
    if not isinstance(body, dict):
        raise ValidationError("request body must be a JSON object", status_code=400)
    return body


def parse_rows(body: dict) -> List[Row]:
    """
    Validate {"rows": [...]}.

    Raises:
        ValidationError: rows missing, not a list, or a row is malformed
    """
    rows = body.get("rows")
    if rows is None or not isinstance(rows, list):
        raise ValidationError("rows missing", status_code=400)
    try:
        return [Row.model_validate(r) for r in rows]
    except PydanticValidationError as e:
        raise ValidationError(f"invalid row: {e.errors()[0].get('msg', 'invalid')}", status_code=400)


def create_app(
    gallery: Optional[Gallery] = None,
    gallery_factory: Optional[Callable[[], Gallery]] = None,
) -> FastAPI:
    """
    Build the service.

    Args:
        gallery: Ready gallery instance
        gallery_factory: Called on first request when gallery is None
                         (default: Gallery.from_env())
    """
    factory = gallery_factory or Gallery.from_env
    state = {"gallery": gallery, "started": time.time()}

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if state["gallery"] is not None:
            await state["gallery"].close()

    app = FastAPI(title="ig_gallery", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_gallery() -> Gallery:
        if state["gallery"] is None:
            state["gallery"] = factory()
            logger.info("Gallery initialized: %r", state["gallery"])
        return state["gallery"]

    # ══════════════════════════════════════════════════════════
    #  ROUTES
    # ══════════════════════════════════════════════════════════

    @app.post("/api/resolve")
    async def resolve(request: Request, partial: bool = Query(False)):
        try:
            rows = parse_rows(await _read_body(request))
        except ValidationError as e:
            return _error(e.message, 400)

        try:
            g = get_gallery()
            if partial:
                return _to_json(await g.resolve_each(rows))
            return _to_json(await g.resolve(rows))
        except Exception as e:
            logger.exception("Resolve failed")
            return _error(str(e) or "resolver failed")

    @app.api_route("/api/resolve", methods=["GET", "PUT", "PATCH", "DELETE", "OPTIONS"])
    async def resolve_not_allowed():
        return _error("Method not allowed", 405, headers={"Allow": "POST"})

    @app.post("/api/gallery")
    async def gallery_from_text(request: Request, partial: bool = Query(False)):
        try:
            body = await _read_body(request)
        except ValidationError as e:
            return _error(e.message, 400)
        text = body.get("text")
        if not isinstance(text, str):
            return _error("text missing", 400)

        try:
            return _to_json(await get_gallery().load(text, partial=partial))
        except Exception as e:
            logger.exception("Gallery load failed")
            return _error(str(e) or "resolver failed")

    @app.get("/api/sample")
    async def sample():
        try:
            return _to_json(await get_gallery().load(DEFAULT_TABLE))
        except Exception as e:
            logger.exception("Sample load failed")
            return _error(str(e) or "resolver failed")

    @app.get("/api/status")
    async def status():
        g = state["gallery"]
        return JSONResponse({
            "status": "running",
            "uptime_seconds": round(time.time() - state["started"], 1),
            "source": g.source.name if g else None,
        })

    return app
