"""
freshcart.auth.context

Request-scoped identity holder.

Responsibilities:
- Publish the identity resolved by the auth gate for downstream handlers.
- Guarantee isolation between concurrent requests (contextvars).
"""

from __future__ import annotations

from contextvars import ContextVar, Token

from freshcart.auth.models import Identity

_current_identity: ContextVar[Identity | None] = ContextVar("current_identity", default=None)


def current_identity() -> Identity | None:
    # None outside an authorized request.
    return _current_identity.get()


def bind_identity(identity: Identity) -> Token[Identity | None]:
    return _current_identity.set(identity)


def reset_identity(token: Token[Identity | None]) -> None:
    _current_identity.reset(token)
