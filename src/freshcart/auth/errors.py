"""
freshcart.auth.errors

Auth exceptions: startup failures and handler-level authentication failures.
"""

from __future__ import annotations

from freshcart.auth.models import DenyReason


class ServiceInitializationError(Exception):
    """The token verifier could not be constructed at startup."""


class Unauthenticated(Exception):
    """A protected handler was reached without an identity; rendered as the gate's 401."""

    def __init__(self, reason: DenyReason) -> None:
        super().__init__(reason.value)
        self.reason = reason
