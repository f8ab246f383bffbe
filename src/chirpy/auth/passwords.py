"""
chirpy.auth.passwords

Password hashing helpers.

Responsibilities:
- Hash plaintext passwords with bcrypt (fresh salt per call, tunable cost).
- Verify a plaintext against a stored hash in constant time.
"""

from __future__ import annotations

import bcrypt

from chirpy.errors import AuthError, InternalError

DEFAULT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes; longer inputs are refused rather than truncated.
MAX_PASSWORD_BYTES = 72


class PasswordHashError(InternalError):
    default_public_message = "Error Hashing Password"


class PasswordMismatchError(AuthError):
    default_public_message = "Incorrect email or password"
    reason = "password"


def hash_password(password: str, *, rounds: int = DEFAULT_ROUNDS) -> str:
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise PasswordHashError(f"password exceeds {MAX_PASSWORD_BYTES} bytes")
    try:
        # The salt and cost are embedded in the output, so verify needs nothing else.
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=rounds)).decode("ascii")
    except ValueError as e:
        raise PasswordHashError(str(e)) from e


def verify_password(password: str, hashed: str) -> None:
    """
    Raise `PasswordMismatchError` unless `password` reproduces `hashed`.

    A malformed stored hash fails the same way as a wrong password.
    """

    try:
        ok = bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError as e:
        raise PasswordMismatchError("unverifiable password hash") from e
    if not ok:
        raise PasswordMismatchError("password does not match")


# --- Module Notes -----------------------------------------------------------
# Plaintext passwords must never reach a logger; only exception details above
# (which never include the password) are logged by callers.
