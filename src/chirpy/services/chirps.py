"""
chirpy.services.chirps

Moderated write flow and chirp reads.

Responsibilities:
- Validate length, redact, persist and commit a new chirp for an authorized user.
- Read single chirps and the full timeline.
"""

from __future__ import annotations

import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.db.models import Chirp
from chirpy.db.repositories.chirps import ChirpRepo
from chirpy.errors import AuthError, NotFoundError, StorageError
from chirpy.observability.logging import get_logger
from chirpy.services.moderation import ContentPolicy

log = get_logger(__name__)


class ChirpNotFoundError(NotFoundError):
    pass


class UnknownOwnerError(AuthError):
    # Validly signed token whose subject has no user row (e.g. deleted since login).
    reason = "unknown_subject"


class ChirpService:
    def __init__(self, *, session: AsyncSession, policy: ContentPolicy | None = None) -> None:
        self._session = session
        self._policy = policy or ContentPolicy()
        self._chirps = ChirpRepo(session)

    async def create(self, *, user_id: uuid.UUID, body: str) -> Chirp:
        # Length is checked on the raw body, before redaction changes it.
        self._policy.check_length(body)
        cleaned = self._policy.redact(body)

        # Single commit point: either the chirp is stored in full or not at all.
        try:
            chirp = await self._chirps.create(body=cleaned, user_id=user_id)
            await self._session.commit()
        except IntegrityError as e:
            # The owner FK is the only constraint a fresh chirp row can violate.
            await self._session.rollback()
            log.info("auth_rejected", reason=UnknownOwnerError.reason, user_id=str(user_id))
            raise UnknownOwnerError(f"no user {user_id}") from e
        except SQLAlchemyError as e:
            await self._session.rollback()
            log.error("chirp_persist_failed", user_id=str(user_id), error=str(e))
            raise StorageError(str(e), public_message="Error Saving Chirp") from e

        log.info("chirp_created", chirp_id=str(chirp.id), user_id=str(user_id))
        return chirp

    async def get(self, chirp_id: uuid.UUID) -> Chirp:
        chirp = await self._chirps.get(chirp_id)
        if chirp is None:
            raise ChirpNotFoundError(
                f"chirp {chirp_id} not found",
                public_message=f"No Chirp by [{chirp_id}] id found",
            )
        return chirp

    async def list_all(self) -> list[Chirp]:
        return await self._chirps.list_all()
