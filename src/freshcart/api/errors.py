"""
freshcart.api.errors

Application-wide exception handling.

Responsibilities:
- Render handler-level authentication failures with the auth gate's 401 body.
- Turn unhandled exceptions into an opaque JSON 500 (details stay in the logs).
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from freshcart.auth.errors import Unauthenticated
from freshcart.auth.middleware import unauthorized_response
from freshcart.auth.models import Deny
from freshcart.observability.logging import get_logger

log = get_logger(__name__)


async def unauthenticated_handler(request: Request, exc: Unauthenticated) -> JSONResponse:
    # Same body as a gate denial, so every 401 has one shape.
    return unauthorized_response(Deny(exc.reason))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled_exception", error_type=type(exc).__name__)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "status": HTTP_500_INTERNAL_SERVER_ERROR,
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Unauthenticated, unauthenticated_handler)
    # HTTPException and request validation errors keep FastAPI's default handlers.
    app.add_exception_handler(Exception, unhandled_exception_handler)
