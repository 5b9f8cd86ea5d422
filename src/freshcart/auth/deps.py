"""
freshcart.auth.deps

FastAPI dependency functions for authenticated handlers.

Responsibilities:
- Hand protected handlers the identity resolved by the auth gate.
"""

from __future__ import annotations

from fastapi import Depends, Request

from freshcart.api.deps import settings_dep
from freshcart.auth.context import current_identity
from freshcart.auth.errors import Unauthenticated
from freshcart.auth.gate import AuthGate
from freshcart.auth.models import DenyReason, Identity
from freshcart.settings import Settings


def auth_gate_from_app(request: Request) -> AuthGate:
    # The gate is built once in `freshcart.api.app.create_app`.
    return request.app.state.auth_gate  # type: ignore[attr-defined]


# async so it runs on the request task, where the gate bound the identity contextvar.
async def get_identity(
    gate: AuthGate = Depends(auth_gate_from_app),
    settings: Settings = Depends(settings_dep),
) -> Identity:
    identity = current_identity()
    if identity is not None:
        return identity
    if not gate.mode.enforcing:
        # Development-only: the gate admits anonymously; handlers still need one identity.
        return Identity(subject=settings.auth_dev_user_id)
    # Reached only when a protected handler is mounted on an exempt path.
    raise Unauthenticated(DenyReason.missing_credential)


# --- Module Notes -----------------------------------------------------------
# Handlers never read the Authorization header themselves; the gate middleware
# is the only component that talks to the token verifier.
