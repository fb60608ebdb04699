"""HTTP boundary for the overlay pipeline (FastAPI).

One route: any request whose path starts with `settings.route_prefix`,
whatever the method. Errors map to static pages:

- `NotFound`   -> 404
- `BadRequest` -> 400
- anything else -> 500, logged with traceback and never echoed to the client
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, Response

from core.config import AppSettings
from core.errors import BadRequest, NotFound
from core.services.warnings_pipeline import find_warnings

logger = logging.getLogger(__name__)

_PAGES_DIR = Path(__file__).resolve().parent / "pages"
_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@functools.lru_cache(maxsize=None)
def _page(name: str) -> bytes:
    return (_PAGES_DIR / name).read_bytes()


def _error_page(status_code: int, name: str) -> HTMLResponse:
    return HTMLResponse(content=_page(name), status_code=status_code)


def request_target(request: Request) -> str:
    """Path plus raw (undecoded) query string, as sent by the client."""

    path = request.url.path
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


def create_app(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the application; `transport` lets tests replace the network."""

    settings = settings or AppSettings()
    app = FastAPI(title="tor-overlay", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings

    @app.api_route("/{path:path}", methods=_ALL_METHODS)
    async def warnings_overlay(request: Request) -> Response:
        target = request_target(request)
        try:
            if not target.startswith(settings.route_prefix):
                raise NotFound(target)
            body = await find_warnings(settings=settings, query=target, transport=transport)
        except NotFound:
            return _error_page(404, "not-found.html")
        except BadRequest as exc:
            logger.info("Bad request %r: %s", target, exc)
            return _error_page(400, "bad-request.html")
        except Exception:
            logger.exception("An unexpected error occurred while serving %r", target)
            return _error_page(500, "server-error.html")

        return Response(content=body, status_code=200, media_type="text/plain; charset=utf-8")

    return app
