"""
freshcart.api.routers.health

Health and operational endpoints (exempt from authentication by default).

Responsibilities:
- Liveness for monitoring systems (`/api/health`).
- Readiness with DB connectivity validation (`/actuator/health`).
- Build/service info (`/actuator/info`).
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from freshcart import __version__
from freshcart.api.deps import db_session, settings_dep
from freshcart.settings import Settings

router = APIRouter()


@router.get("/api/health")
async def health(settings: Settings = Depends(settings_dep)) -> dict[str, str]:
    return {
        "status": "UP",
        "timestamp": datetime.now(tz=UTC).isoformat(),
        "service": settings.service_display_name,
        "message": "Service is running properly",
    }


@router.get("/actuator/health")
async def readiness(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    await session.execute(text("SELECT 1"))
    return {"status": "UP", "db": "UP"}


@router.get("/actuator/info")
async def info(settings: Settings = Depends(settings_dep)) -> dict[str, Any]:
    return {
        "service": settings.service_name,
        "version": __version__,
        "env": settings.env,
    }
