"""
freshcart.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Identity`) and the verification result.
- Define gate inputs (`AuthRequest`) and outcomes (`Allow` / `Deny`).
- Define the startup-computed `AuthMode`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from starlette.status import HTTP_401_UNAUTHORIZED


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Verified caller identity (the identity provider's user id).
    """

    subject: str


@dataclass(frozen=True, slots=True)
class VerificationFailure:
    # `detail` is for server-side logs only; it is never returned to the caller.
    detail: str


VerificationResult = Identity | VerificationFailure


class AuthMode(enum.StrEnum):
    strict = "STRICT"
    resilient = "RESILIENT"
    development_only = "DEVELOPMENT_ONLY"

    @property
    def enforcing(self) -> bool:
        return self is not AuthMode.development_only


class DenyReason(enum.StrEnum):
    missing_credential = "missing or malformed credential"
    invalid_credential = "invalid credential"


@dataclass(frozen=True, slots=True)
class AuthRequest:
    method: str
    path: str
    authorization: str | None = None


@dataclass(frozen=True, slots=True)
class Allow:
    identity: Identity | None = None


@dataclass(frozen=True, slots=True)
class Deny:
    reason: DenyReason

    @property
    def status_code(self) -> int:
        return HTTP_401_UNAUTHORIZED


Outcome = Allow | Deny
