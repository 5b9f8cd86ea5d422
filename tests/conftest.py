"""
tests.conftest

Shared fixtures: an in-memory token verifier, per-test SQLite settings, and an
HTTP client bound to a running app (lifespan included).
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from freshcart.api.app import create_app
from freshcart.auth.models import Identity, VerificationFailure, VerificationResult
from freshcart.settings import Settings


class FakeVerifier:
    """
    Accepts a fixed set of tokens; records every token it was asked about.
    """

    def __init__(self, tokens: dict[str, str] | None = None) -> None:
        self._tokens = dict(tokens or {})
        self.calls: list[str] = []

    def verify(self, token: str) -> VerificationResult:
        self.calls.append(token)
        subject = self._tokens.get(token)
        if subject is None:
            return VerificationFailure(detail="ExpiredSignatureError: Signature has expired")
        return Identity(subject=subject)


@pytest.fixture()
def verifier() -> FakeVerifier:
    return FakeVerifier({"token-abc": "abc", "token-xyz": "xyz"})


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        firebase_credentials_file=str(tmp_path / "missing-service-account.json"),
    )


@pytest.fixture()
def serve() -> Callable[..., AbstractAsyncContextManager[httpx.AsyncClient]]:
    @asynccontextmanager
    async def _serve(app: FastAPI, **transport_kwargs) -> AsyncIterator[httpx.AsyncClient]:
        # httpx ASGITransport does not run the lifespan; drive it explicitly.
        async with app.router.lifespan_context(app):
            transport = httpx.ASGITransport(app=app, **transport_kwargs)
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
                yield client

    return _serve


@pytest_asyncio.fixture()
async def client(settings: Settings, verifier: FakeVerifier, serve) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings, verifier=verifier)
    async with serve(app) as c:
        yield c
