"""
chirpy.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, content policy, hit counter and DB sessions.
- Encapsulate app.state access patterns.
- Decode JSON request bodies into pydantic models as explicit `InputError`s.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chirpy.errors import InputError
from chirpy.observability.middleware import HitCounter
from chirpy.services.moderation import ContentPolicy
from chirpy.settings import Settings

M = TypeVar("M", bound=BaseModel)


def settings_dep(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def content_policy_dep(request: Request) -> ContentPolicy:
    return request.app.state.content_policy  # type: ignore[attr-defined]


def hit_counter_dep(request: Request) -> HitCounter:
    return request.app.state.hit_counter  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created on app startup in `chirpy.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed explicitly by the service layer.
    async with session_factory() as session:
        yield session


async def decode_body(request: Request, model: type[M], *, message: str) -> M:
    """
    Parse the request body inside the handler rather than as a FastAPI body
    parameter, so that it runs after the auth dependency has accepted the caller.
    """

    raw = await request.body()
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        raise InputError(
            f"invalid {model.__name__}: {e.error_count()} error(s)", public_message=message
        ) from e
