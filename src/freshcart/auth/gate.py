"""
freshcart.auth.gate

The auth gate: one ALLOW/DENY decision per inbound request.

Responsibilities:
- Admit CORS preflight and exempt paths without a credential.
- Admit everything (loudly) when running development-only.
- Otherwise require `Authorization: Bearer <token>` and resolve it to an `Identity`.

The gate holds no per-request mutable state; it is safe to share across requests.
"""

from __future__ import annotations

from collections.abc import Iterable

from starlette.concurrency import run_in_threadpool

from freshcart.auth.models import (
    Allow,
    AuthMode,
    AuthRequest,
    Deny,
    DenyReason,
    Identity,
    Outcome,
    VerificationFailure,
)
from freshcart.auth.verifiers import TokenVerifier
from freshcart.observability.logging import get_logger

BEARER_PREFIX = "Bearer "
PREFLIGHT_METHOD = "OPTIONS"


class PathMatcher:
    """
    Exempt-path patterns: exact paths, or `<prefix>/**` for a whole subtree
    (`/actuator/**` matches `/actuator` and anything below it).
    """

    def __init__(self, patterns: Iterable[str]) -> None:
        exact: set[str] = set()
        prefixes: list[str] = []
        for pattern in patterns:
            if pattern.endswith("/**"):
                prefixes.append(pattern[: -len("/**")])
            else:
                exact.add(pattern)
        self._exact = frozenset(exact)
        self._prefixes = tuple(prefixes)

    def matches(self, path: str) -> bool:
        if path in self._exact:
            return True
        return any(path == p or path.startswith(p + "/") for p in self._prefixes)


def extract_bearer_token(authorization: str | None) -> str | None:
    if authorization is None or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


class AuthGate:
    def __init__(
        self,
        *,
        mode: AuthMode,
        public_paths: Iterable[str],
        verifier: TokenVerifier | None = None,
    ) -> None:
        if mode.enforcing and verifier is None:
            raise ValueError(f"auth mode {mode} requires a token verifier")
        self._mode = mode
        self._public = PathMatcher(public_paths)
        self._verifier = verifier if mode.enforcing else None
        self._log = get_logger(__name__).bind(auth_mode=mode.value)

        if not mode.enforcing:
            self._log.warning(
                "auth_disabled",
                message="DEVELOPMENT MODE: all endpoints are accessible without authentication",
            )

    @property
    def mode(self) -> AuthMode:
        return self._mode

    def is_public(self, path: str) -> bool:
        return self._public.matches(path)

    async def authorize(self, request: AuthRequest) -> Outcome:
        # Preflight never carries credentials; blocking it breaks the real request.
        if request.method.upper() == PREFLIGHT_METHOD:
            return Allow()
        if self.is_public(request.path):
            return Allow()
        if self._verifier is None:
            return Allow()

        token = extract_bearer_token(request.authorization)
        if token is None:
            self._log.info("auth_denied", reason=DenyReason.missing_credential.value)
            return Deny(DenyReason.missing_credential)

        # Verification may hit the network (key fetch); keep it off the event loop.
        try:
            result = await run_in_threadpool(self._verifier.verify, token)
        except Exception:
            # Verification-layer faults never escape the gate; the caller sees a plain 401.
            self._log.exception("auth_verifier_error", reason=DenyReason.invalid_credential.value)
            return Deny(DenyReason.invalid_credential)
        if isinstance(result, VerificationFailure):
            self._log.warning(
                "auth_denied",
                reason=DenyReason.invalid_credential.value,
                detail=result.detail,
            )
            return Deny(DenyReason.invalid_credential)
        if isinstance(result, Identity):
            return Allow(identity=result)
        self._log.error(
            "auth_verifier_error",
            reason=DenyReason.invalid_credential.value,
            detail=f"unexpected verification result: {type(result).__name__}",
        )
        return Deny(DenyReason.invalid_credential)


# --- Module Notes -----------------------------------------------------------
# `auth.middleware.AuthGateMiddleware` adapts this class to Starlette; tests drive
# `authorize` directly with `AuthRequest` values.
