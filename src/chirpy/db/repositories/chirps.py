"""
chirpy.db.repositories.chirps

Repository for `Chirp` entities.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import asc, select
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.db.models import Chirp


class ChirpRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, body: str, user_id: uuid.UUID) -> Chirp:
        now = datetime.utcnow()
        chirp = Chirp(body=body, user_id=user_id, created_at=now, updated_at=now)
        self._session.add(chirp)
        await self._session.flush()
        return chirp

    async def get(self, chirp_id: uuid.UUID) -> Chirp | None:
        return await self._session.get(Chirp, chirp_id)

    async def list_all(self) -> list[Chirp]:
        stmt = select(Chirp).order_by(asc(Chirp.created_at))
        return list((await self._session.execute(stmt)).scalars().all())
