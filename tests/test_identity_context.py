from __future__ import annotations

import asyncio

import pytest

from freshcart.auth.context import bind_identity, current_identity, reset_identity
from freshcart.auth.models import Identity


def test_unset_outside_request() -> None:
    assert current_identity() is None


def test_bind_and_reset() -> None:
    token = bind_identity(Identity(subject="abc"))
    try:
        assert current_identity() == Identity(subject="abc")
    finally:
        reset_identity(token)
    assert current_identity() is None


@pytest.mark.asyncio
async def test_concurrent_tasks_do_not_share_identity() -> None:
    seen: dict[str, str | None] = {}

    async def request(subject: str) -> None:
        token = bind_identity(Identity(subject=subject))
        try:
            await asyncio.sleep(0.01)
            identity = current_identity()
            seen[subject] = identity.subject if identity else None
        finally:
            reset_identity(token)

    await asyncio.gather(request("abc"), request("xyz"))
    assert seen == {"abc": "abc", "xyz": "xyz"}
    assert current_identity() is None
