"""
freshcart.auth.middleware

Starlette adapter for the auth gate.

Responsibilities:
- Run `AuthGate.authorize` for every request before routing.
- Short-circuit DENY outcomes with a generic 401.
- Publish the resolved identity (context holder + request.state + log context)
  for exactly the duration of the downstream call.
"""

from __future__ import annotations

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from freshcart.auth.context import bind_identity, reset_identity
from freshcart.auth.gate import AuthGate
from freshcart.auth.models import AuthRequest, Deny


def unauthorized_response(outcome: Deny) -> JSONResponse:
    return JSONResponse(
        status_code=outcome.status_code,
        content={
            "status": outcome.status_code,
            "error": "Unauthorized",
            "message": outcome.reason.value,
        },
        headers={"WWW-Authenticate": "Bearer"},
    )


class AuthGateMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, *, gate: AuthGate) -> None:
        super().__init__(app)
        self._gate = gate

    async def dispatch(self, request: Request, call_next) -> Response:
        outcome = await self._gate.authorize(
            AuthRequest(
                method=request.method,
                path=request.url.path,
                authorization=request.headers.get("authorization"),
            )
        )
        if isinstance(outcome, Deny):
            return unauthorized_response(outcome)

        if outcome.identity is None:
            return await call_next(request)

        request.state.identity = outcome.identity
        structlog.contextvars.bind_contextvars(user_id=outcome.identity.subject)
        token = bind_identity(outcome.identity)
        try:
            return await call_next(request)
        finally:
            reset_identity(token)
            structlog.contextvars.unbind_contextvars("user_id")
