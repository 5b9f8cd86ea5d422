"""
freshcart.auth.bootstrap

Startup-time construction of the auth gate.

Responsibilities:
- Compute the `AuthMode` once, from explicit configuration.
- Apply the init policy when the verifier cannot be built:
  - strict: fail startup (re-raise `ServiceInitializationError`)
  - resilient: warn and fall back to development-only
"""

from __future__ import annotations

from collections.abc import Iterable

from freshcart.auth.errors import ServiceInitializationError
from freshcart.auth.gate import AuthGate
from freshcart.auth.models import AuthMode
from freshcart.auth.verifiers import TokenVerifier, build_verifier
from freshcart.observability.logging import get_logger
from freshcart.settings import Settings

log = get_logger(__name__)


def build_auth_gate(
    settings: Settings,
    *,
    verifier: TokenVerifier | None = None,
    extra_public_paths: Iterable[str] = (),
) -> AuthGate:
    """
    `verifier` overrides the one built from settings (tests, alternative providers).
    """

    public_paths = [*settings.auth_public_paths, *extra_public_paths]

    if settings.auth_development_mode:
        log.info("auth_development_mode_configured")
        return AuthGate(mode=AuthMode.development_only, public_paths=public_paths)

    mode = AuthMode.strict if settings.auth_init_policy == "strict" else AuthMode.resilient
    if verifier is None:
        try:
            verifier = build_verifier(settings)
        except ServiceInitializationError as e:
            if mode is AuthMode.strict:
                log.error("auth_init_failed", policy=settings.auth_init_policy, error=str(e))
                raise
            log.warning(
                "auth_init_failed_falling_back",
                policy=settings.auth_init_policy,
                error=str(e),
            )
            return AuthGate(mode=AuthMode.development_only, public_paths=public_paths)

    log.info("auth_gate_ready", mode=mode.value, verifier=type(verifier).__name__)
    return AuthGate(mode=mode, public_paths=public_paths, verifier=verifier)
