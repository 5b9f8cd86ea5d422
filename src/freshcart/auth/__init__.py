"""
freshcart.auth

Authentication/authorization package.

Responsibilities:
- The auth gate: per-request ALLOW/DENY decisions and its Starlette middleware.
- Token verifiers (Firebase ID tokens, local HS256 tokens).
- Request-scoped identity context and FastAPI dependencies.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# `bootstrap.build_auth_gate` is the only place that decides the auth posture;
# everything else receives an already-built `AuthGate`.
