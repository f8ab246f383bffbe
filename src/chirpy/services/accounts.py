"""
chirpy.services.accounts

Signup and login.

Responsibilities:
- Hash the password and store a new user.
- Check credentials and issue a bearer token with a clamped lifetime.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from chirpy.auth.jwt import JwtConfig, issue_token
from chirpy.auth.passwords import PasswordMismatchError, hash_password, verify_password
from chirpy.db.models import User
from chirpy.db.repositories.users import UserRepo
from chirpy.errors import StorageError
from chirpy.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class LoginResult:
    user: User
    token: str


def clamp_token_ttl(requested_seconds: int | None, *, max_seconds: int) -> timedelta:
    # Absent, zero or negative means "default"; the default and the cap are the same value.
    if requested_seconds is None or requested_seconds <= 0 or requested_seconds > max_seconds:
        return timedelta(seconds=max_seconds)
    return timedelta(seconds=requested_seconds)


class AccountService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        jwt_config: JwtConfig,
        max_token_ttl_seconds: int,
        bcrypt_rounds: int,
    ) -> None:
        self._session = session
        self._jwt_config = jwt_config
        self._max_ttl = max_token_ttl_seconds
        self._rounds = bcrypt_rounds
        self._users = UserRepo(session)

    async def signup(self, *, email: str, password: str) -> User:
        # bcrypt is CPU-bound by design; keep it off the event loop.
        hashed = await run_in_threadpool(hash_password, password, rounds=self._rounds)
        try:
            user = await self._users.create(email=email, hashed_password=hashed)
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            log.error("user_create_failed", error=str(e))
            raise StorageError(str(e), public_message="Could not create user") from e

        log.info("user_created", user_id=str(user.id))
        return user

    async def login(
        self,
        *,
        email: str,
        password: str,
        expires_in_seconds: int | None = None,
    ) -> LoginResult:
        user = await self._users.get_by_email(email)
        if user is None:
            # Same error as a wrong password so the endpoint cannot be used to probe emails.
            log.info("login_rejected", reason="unknown_email")
            raise PasswordMismatchError("no user with that email")
        try:
            await run_in_threadpool(verify_password, password, user.hashed_password)
        except PasswordMismatchError:
            log.info("login_rejected", reason="password", user_id=str(user.id))
            raise

        ttl = clamp_token_ttl(expires_in_seconds, max_seconds=self._max_ttl)
        token = issue_token(cfg=self._jwt_config, subject=user.id, ttl=ttl)
        log.info("login_succeeded", user_id=str(user.id), ttl_seconds=int(ttl.total_seconds()))
        return LoginResult(user=user, token=token)
