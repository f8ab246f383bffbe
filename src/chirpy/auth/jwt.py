"""
chirpy.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue short-lived, self-contained identity tokens (iss/sub/iat/exp).
- Decode and validate tokens: HMAC-only algorithms, signature, issuer, expiry,
  and a UUID subject.
- Keep the signing scheme behind a small codec interface so it can be swapped
  without touching the gate or the routers.

Note:
- Tokens are stateless; there is no revocation. A token stays valid until `exp`
  or until the signing secret changes.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

import jwt

from chirpy.errors import AuthError, InternalError

# Only symmetric MAC algorithms are accepted; anything else in the header
# (`none`, RS*/ES* with a public key as secret, ...) is rejected before decoding.
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")

REQUIRED_CLAIMS = ["exp", "iat", "iss", "sub"]


@dataclass(frozen=True, slots=True)
class JwtConfig:
    secret: bytes
    issuer: str = "chirpy"
    algorithm: str = "HS256"


class InvalidTokenError(AuthError):
    reason = "invalid"


class MalformedTokenError(InvalidTokenError):
    reason = "malformed"


class TokenAlgorithmError(InvalidTokenError):
    reason = "algorithm"


class TokenSignatureError(InvalidTokenError):
    reason = "signature"


class TokenIssuerError(InvalidTokenError):
    reason = "issuer"


class TokenExpiredError(InvalidTokenError):
    reason = "expired"


class TokenSubjectError(InvalidTokenError):
    reason = "subject"


class TokenIssueError(InternalError):
    default_public_message = "Error generating Auth Token"


class ClaimsCodec(Protocol):
    def encode(self, claims: dict[str, Any]) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...


class HmacJwtCodec:
    """
    PyJWT-backed codec. `decode` verifies algorithm, signature, issuer and the
    presence of registered claims; time checks are left to `validate_token` so
    they run against an injectable clock.
    """

    def __init__(self, cfg: JwtConfig) -> None:
        if cfg.algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"unsupported signing algorithm: {cfg.algorithm}")
        self._cfg = cfg

    def encode(self, claims: dict[str, Any]) -> str:
        try:
            return jwt.encode(claims, self._cfg.secret, algorithm=self._cfg.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise TokenIssueError(str(e)) from e

    def decode(self, token: str) -> dict[str, Any]:
        try:
            header = jwt.get_unverified_header(token)
        except jwt.PyJWTError as e:
            raise MalformedTokenError(str(e)) from e
        if header.get("alg") not in HMAC_ALGORITHMS:
            raise TokenAlgorithmError(f"unexpected signing method: {header.get('alg')!r}")

        try:
            return jwt.decode(
                token,
                self._cfg.secret,
                algorithms=list(HMAC_ALGORITHMS),
                issuer=self._cfg.issuer,
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.InvalidAlgorithmError as e:
            raise TokenAlgorithmError(str(e)) from e
        except jwt.InvalidSignatureError as e:
            raise TokenSignatureError(str(e)) from e
        except jwt.InvalidIssuerError as e:
            raise TokenIssuerError(str(e)) from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(str(e)) from e


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def issue_token(
    *,
    cfg: JwtConfig,
    subject: uuid.UUID,
    ttl: timedelta,
    now: datetime | None = None,
    codec: ClaimsCodec | None = None,
) -> str:
    issued_at = int((now or _utcnow()).timestamp())
    claims: dict[str, Any] = {
        "iss": cfg.issuer,
        "sub": str(subject),
        "iat": issued_at,
        # Whole seconds: exp - iat is exactly the requested ttl.
        "exp": issued_at + int(ttl.total_seconds()),
    }
    return (codec or HmacJwtCodec(cfg)).encode(claims)


def validate_token(
    *,
    cfg: JwtConfig,
    token: str,
    now: datetime | None = None,
    codec: ClaimsCodec | None = None,
) -> uuid.UUID:
    claims = (codec or HmacJwtCodec(cfg)).decode(token)

    exp = claims.get("exp")
    if not isinstance(exp, int | float) or isinstance(exp, bool):
        raise MalformedTokenError("exp claim is not a number")
    # No leeway: a token is dead from the second it expires.
    if (now or _utcnow()).timestamp() >= exp:
        raise TokenExpiredError("token has expired")

    try:
        return uuid.UUID(str(claims.get("sub", "")))
    except ValueError as e:
        raise TokenSubjectError("subject is not a valid user id") from e


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by `services/accounts.py` (login); validation by the
# authorization gate in `auth/deps.py`.
