"""
chirpy.db.repositories.users

Repository for `User` entities.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.db.models import User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, email: str, hashed_password: str) -> User:
        now = datetime.utcnow()
        user = User(
            email=email, hashed_password=hashed_password, created_at=now, updated_at=now
        )
        self._session.add(user)
        await self._session.flush()
        return user

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def delete_all(self) -> None:
        # Chirps go with their owners (ON DELETE CASCADE).
        await self._session.execute(delete(User))
