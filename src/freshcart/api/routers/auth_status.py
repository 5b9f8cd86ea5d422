from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from freshcart.auth.deps import auth_gate_from_app
from freshcart.auth.gate import AuthGate

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/status")
async def auth_status(gate: AuthGate = Depends(auth_gate_from_app)) -> dict[str, Any]:
    # Public probe: lets the frontend learn whether it must attach an ID token.
    enforcing = gate.mode.enforcing
    return {
        "status": "Server is running",
        "authRequired": enforcing,
        "message": (
            "Authentication required for all endpoints except public ones"
            if enforcing
            else "Authentication disabled (development mode)"
        ),
    }
