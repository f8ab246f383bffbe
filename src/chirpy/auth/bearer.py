"""
chirpy.auth.bearer

Authorization header parsing.

Responsibilities:
- Pull the raw token out of `Authorization: Bearer <token>`.
"""

from __future__ import annotations

from collections.abc import Mapping

from chirpy.errors import AuthError

BEARER_PREFIX = "Bearer "


class MissingAuthorizationError(AuthError):
    reason = "missing_header"


class MalformedAuthorizationError(AuthError):
    reason = "malformed_header"


def extract_bearer(headers: Mapping[str, str]) -> str:
    value = headers.get("Authorization") or headers.get("authorization")
    if not value:
        raise MissingAuthorizationError("Authorization header not present")

    # Case-sensitive scheme with a single space; "bearer x" and "Basic x" are both rejected.
    if not value.startswith(BEARER_PREFIX):
        raise MalformedAuthorizationError("Authorization header format must be 'Bearer {token}'")

    # Strict: a token with embedded whitespace is malformed, not truncated.
    parts = value.split()
    if len(parts) != 2:
        raise MalformedAuthorizationError("Authorization header must have exactly two parts")

    return parts[1]


# --- Module Notes -----------------------------------------------------------
# Starlette's `Headers` is case-insensitive already; the lowercase fallback only
# matters for plain dicts passed in from tests or non-HTTP callers.
