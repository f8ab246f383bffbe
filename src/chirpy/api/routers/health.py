"""
chirpy.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/api/healthz`, plain text "OK").
- Provide readiness probe (`/api/readyz`) with DB connectivity validation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.api.deps import db_session

router = APIRouter(prefix="/api")


@router.get("/healthz", response_class=PlainTextResponse)
async def healthz() -> str:
    return "OK"


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}
