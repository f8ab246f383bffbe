"""
chirpy.api.routers.users

Account endpoints.

Responsibilities:
- Sign up (`POST /api/users`): hash the password and store the user.
- Log in (`POST /api/login`): verify the password and return a bearer token.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from chirpy.api.deps import db_session, settings_dep
from chirpy.auth.deps import jwt_config_from_app
from chirpy.auth.jwt import JwtConfig
from chirpy.services.accounts import AccountService
from chirpy.settings import Settings

router = APIRouter(prefix="/api", tags=["users"])


class SignupRequest(BaseModel):
    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    email: str
    password: str
    expires_in_seconds: int | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    email: str


class LoginResponse(UserResponse):
    token: str


def _accounts(session: AsyncSession, settings: Settings, jwt_config: JwtConfig) -> AccountService:
    return AccountService(
        session=session,
        jwt_config=jwt_config,
        max_token_ttl_seconds=settings.jwt_max_ttl_seconds,
        bcrypt_rounds=settings.bcrypt_rounds,
    )


@router.post("/users", response_model=UserResponse, status_code=HTTP_201_CREATED)
async def create_user(
    body: SignupRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
    jwt_config: JwtConfig = Depends(jwt_config_from_app),
) -> UserResponse:
    user = await _accounts(session, settings, jwt_config).signup(
        email=body.email, password=body.password
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
    jwt_config: JwtConfig = Depends(jwt_config_from_app),
) -> LoginResponse:
    result = await _accounts(session, settings, jwt_config).login(
        email=body.email,
        password=body.password,
        expires_in_seconds=body.expires_in_seconds,
    )
    return LoginResponse(
        id=result.user.id,
        created_at=result.user.created_at,
        updated_at=result.user.updated_at,
        email=result.user.email,
        token=result.token,
    )
