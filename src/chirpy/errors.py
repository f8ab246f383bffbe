"""
chirpy.errors

Error taxonomy shared by the auth core, services and API layer.

Responsibilities:
- Map every failure to one of four client-visible kinds (400/401/404/500).
- Keep the client-facing message separate from the internal detail used in logs.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class ChirpyError(Exception):
    """
    Base class for errors the API layer turns into `{"error": message}` responses.

    `str(exc)` holds the internal detail (logged); `public_message` is what the
    client sees.
    """

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_public_message: str = "Something went wrong"

    def __init__(self, detail: str = "", *, public_message: str | None = None) -> None:
        super().__init__(detail or self.default_public_message)
        self.public_message = public_message or self.default_public_message


class InputError(ChirpyError):
    status_code = HTTP_400_BAD_REQUEST
    default_public_message = "Malformed request"


class AuthError(ChirpyError):
    # One message for every auth failure so clients cannot tell missing,
    # expired and forged tokens apart.
    status_code = HTTP_401_UNAUTHORIZED
    default_public_message = "Unauthorized"

    reason: str = "unauthorized"


class NotFoundError(ChirpyError):
    status_code = HTTP_404_NOT_FOUND
    default_public_message = "Not found"


class InternalError(ChirpyError):
    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    default_public_message = "Internal server error"


class StorageError(InternalError):
    pass


# --- Module Notes -----------------------------------------------------------
# Nothing in this package retries; every error is terminal for the current request.
