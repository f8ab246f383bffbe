"""
chirpy.api.routers.admin

Operator endpoints.

Responsibilities:
- Show the file-server hit count (`GET /admin/metrics`).
- Reset the hit count and delete all users (`POST /admin/reset`, dev/test only).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_404_NOT_FOUND

from chirpy.api.deps import db_session, hit_counter_dep, settings_dep
from chirpy.db.repositories.users import UserRepo
from chirpy.observability.logging import get_logger
from chirpy.observability.middleware import HitCounter
from chirpy.settings import Settings

router = APIRouter(prefix="/admin", tags=["admin"])

log = get_logger(__name__)

METRICS_TEMPLATE = (
    "<html><body><h1>Welcome, Chirpy Admin</h1>"
    "<p>Chirpy has been visited {hits} times!</p></body></html>"
)


@router.get("/metrics", response_class=HTMLResponse)
async def metrics(counter: HitCounter = Depends(hit_counter_dep)) -> str:
    return METRICS_TEMPLATE.format(hits=counter.hits)


@router.post("/reset")
async def reset(
    counter: HitCounter = Depends(hit_counter_dep),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> dict[str, str]:
    if settings.env == "prod":
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not Found")

    await UserRepo(session).delete_all()
    await session.commit()
    counter.reset()
    log.info("admin_reset")
    return {"status": "reset"}
