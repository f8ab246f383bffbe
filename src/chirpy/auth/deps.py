"""
chirpy.auth.deps

Authorization gate and its FastAPI dependency.

Responsibilities:
- Convert request headers into a typed `Principal` (bearer extraction + token validation).
- Log the internal rejection reason while the client only ever sees "Unauthorized".
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from fastapi import Depends, Request

from chirpy.auth.bearer import extract_bearer
from chirpy.auth.jwt import JwtConfig, validate_token
from chirpy.auth.models import Principal
from chirpy.errors import AuthError
from chirpy.observability.logging import get_logger

log = get_logger(__name__)


def authorize(
    headers: Mapping[str, str],
    cfg: JwtConfig,
    *,
    now: datetime | None = None,
) -> Principal:
    # The first failure (extractor or codec) propagates unchanged.
    token = extract_bearer(headers)
    user_id = validate_token(cfg=cfg, token=token, now=now)
    return Principal(user_id=user_id)


def jwt_config_from_app(request: Request) -> JwtConfig:
    # Built once in `chirpy.api.app.create_app` from settings.
    return request.app.state.jwt_config  # type: ignore[attr-defined]


def get_principal(
    request: Request,
    cfg: JwtConfig = Depends(jwt_config_from_app),
) -> Principal:
    try:
        return authorize(request.headers, cfg)
    except AuthError as e:
        log.info("auth_rejected", reason=e.reason, detail=str(e))
        raise


# --- Module Notes -----------------------------------------------------------
# `AuthError` is rendered as 401 by the handlers registered in `chirpy.api.errors`.
