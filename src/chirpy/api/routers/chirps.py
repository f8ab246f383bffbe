"""
chirpy.api.routers.chirps

Chirp endpoints.

Responsibilities:
- Create a chirp for the authenticated caller (authorize -> decode -> moderate -> persist).
- Read one chirp or the full list.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from chirpy.api.deps import content_policy_dep, db_session, decode_body
from chirpy.auth.deps import get_principal
from chirpy.auth.models import Principal
from chirpy.services.chirps import ChirpService
from chirpy.services.moderation import ContentPolicy

router = APIRouter(prefix="/api/chirps", tags=["chirps"])


class ChirpCreateRequest(BaseModel):
    body: str


class ChirpResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    body: str
    user_id: uuid.UUID


@router.post("", response_model=ChirpResponse, status_code=HTTP_201_CREATED)
async def create_chirp(
    request: Request,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    policy: ContentPolicy = Depends(content_policy_dep),
) -> ChirpResponse:
    # AuthZ already ran as a dependency; the body is only read for accepted callers.
    payload = await decode_body(request, ChirpCreateRequest, message="Something went wrong")
    chirp = await ChirpService(session=session, policy=policy).create(
        user_id=principal.user_id, body=payload.body
    )
    return ChirpResponse.model_validate(chirp)


@router.get("", response_model=list[ChirpResponse])
async def list_chirps(session: AsyncSession = Depends(db_session)) -> list[ChirpResponse]:
    chirps = await ChirpService(session=session).list_all()
    return [ChirpResponse.model_validate(c) for c in chirps]


@router.get("/{chirp_id}", response_model=ChirpResponse)
async def get_chirp(
    chirp_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> ChirpResponse:
    chirp = await ChirpService(session=session).get(chirp_id)
    return ChirpResponse.model_validate(chirp)
