from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse

from app.core.config import settings


def cors_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.CORS_ALLOW_ORIGIN,
        "Access-Control-Allow-Headers": settings.CORS_ALLOW_HEADERS,
    }


def install_cors(app: FastAPI) -> None:
    """
    Answer every OPTIONS request with a bare "ok" and stamp the CORS headers
    onto every other response, including error responses.
    """

    @app.middleware("http")
    async def permissive_cors(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        if request.method == "OPTIONS":
            return PlainTextResponse("ok", headers=cors_headers())
        response = await call_next(request)
        response.headers.update(cors_headers())
        return response
