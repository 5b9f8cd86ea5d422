"""
freshcart.auth.verifiers

Token verification clients used by the auth gate.

Responsibilities:
- Define the `TokenVerifier` boundary: `verify(token) -> Identity | VerificationFailure`.
- Verify Firebase ID tokens against Google's published signing keys.
- Verify locally issued HS256 tokens (dev/test deployments).
- Load the service-account bundle and build the configured verifier once at startup.

Verifiers never raise for a bad token: every token problem (malformed, expired,
wrong signature, key endpoint unreachable) comes back as a `VerificationFailure`.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Literal, Protocol

import jwt
from jwt import PyJWKClient, PyJWTError
from pydantic import BaseModel, Field, ValidationError

from freshcart.auth.errors import ServiceInitializationError
from freshcart.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from freshcart.auth.models import Identity, VerificationFailure, VerificationResult
from freshcart.observability.logging import get_logger
from freshcart.settings import Settings

log = get_logger(__name__)

FIREBASE_ISSUER_PREFIX = "https://securetoken.google.com/"
# Firebase UIDs are at most 128 characters.
MAX_SUBJECT_LENGTH = 128


class TokenVerifier(Protocol):
    def verify(self, token: str) -> VerificationResult: ...


class ServiceAccount(BaseModel):
    """
    The subset of a Google service-account JSON bundle the verifier relies on.
    """

    type: Literal["service_account"]
    project_id: str = Field(min_length=1)
    client_email: str = Field(min_length=1)


def load_service_account(path: str | Path) -> ServiceAccount:
    try:
        raw: Any = json.loads(Path(path).read_text(encoding="utf-8"))
        return ServiceAccount.model_validate(raw)
    except OSError as e:
        raise ServiceInitializationError(f"cannot read service account file: {path}") from e
    except (ValueError, ValidationError) as e:
        raise ServiceInitializationError(f"invalid service account file: {path}") from e


def _identity_from_claims(claims: dict[str, Any]) -> VerificationResult:
    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject or len(subject) > MAX_SUBJECT_LENGTH:
        return VerificationFailure(detail="token subject is missing or invalid")
    return Identity(subject=subject)


class FirebaseTokenVerifier:
    """
    Firebase ID token verification: RS256 signature against the securetoken JWKS,
    audience = project id, issuer = securetoken issuer for that project, and an
    `auth_time` that is not in the future.
    """

    def __init__(self, *, project_id: str, jwks_client: PyJWKClient) -> None:
        self._project_id = project_id
        self._issuer = f"{FIREBASE_ISSUER_PREFIX}{project_id}"
        self._jwks = jwks_client

    @property
    def project_id(self) -> str:
        return self._project_id

    def verify(self, token: str) -> VerificationResult:
        try:
            signing_key = self._jwks.get_signing_key_from_jwt(token)
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                audience=self._project_id,
                issuer=self._issuer,
                options={"require": ["exp", "iat", "iss", "aud", "sub", "auth_time"]},
            )
        except (PyJWTError, ValueError) as e:
            # ValueError: the key endpoint answered with a body that is not a JWKS document.
            return VerificationFailure(detail=f"{type(e).__name__}: {e}")
        auth_time = claims["auth_time"]
        if not isinstance(auth_time, int | float) or auth_time > time.time():
            return VerificationFailure(detail="auth_time is invalid or in the future")
        return _identity_from_claims(claims)


class LocalJwtVerifier:
    def __init__(self, cfg: JwtConfig) -> None:
        self._cfg = cfg

    def verify(self, token: str) -> VerificationResult:
        try:
            claims = decode_and_validate(cfg=self._cfg, token=token)
        except JwtValidationError as e:
            return VerificationFailure(detail=str(e))
        return _identity_from_claims(claims)


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
    )


def build_verifier(settings: Settings) -> TokenVerifier:
    """
    Construct the configured verifier. Raises `ServiceInitializationError` when the
    verifier cannot be built; the caller decides whether that is fatal.
    """

    if settings.auth_verifier == "local":
        if not settings.jwt_secret:
            raise ServiceInitializationError("local verifier requires a JWT secret")
        return LocalJwtVerifier(jwt_config(settings))

    account = load_service_account(settings.firebase_credentials_file)
    project_id = settings.firebase_project_id or account.project_id
    jwks_client = PyJWKClient(
        settings.firebase_jwks_url,
        cache_keys=True,
        timeout=settings.firebase_http_timeout_seconds,
    )
    log.info(
        "firebase_verifier_initialized",
        project_id=project_id,
        client_email=account.client_email,
    )
    return FirebaseTokenVerifier(project_id=project_id, jwks_client=jwks_client)


# --- Module Notes -----------------------------------------------------------
# PyJWKClient caches the key set; a key-endpoint outage surfaces as
# PyJWKClientConnectionError (a PyJWTError) and therefore as a failed verification.
