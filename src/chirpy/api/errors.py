"""
chirpy.api.errors

Translation of the error taxonomy into HTTP responses.

Responsibilities:
- Render every handled failure as `{"error": "<message>"}` with its fixed status code.
- Log server-side failures; never expose their detail to the client.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from chirpy.errors import ChirpyError, InternalError
from chirpy.observability.logging import get_logger

log = get_logger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ChirpyError)
    async def _handle_chirpy_error(_: Request, exc: ChirpyError) -> JSONResponse:
        if isinstance(exc, InternalError):
            log.error("request_failed", error_type=type(exc).__name__, detail=str(exc))
        return error_response(exc.status_code, exc.public_message)

    @app.exception_handler(RequestValidationError)
    async def _handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        log.info("request_invalid", errors=len(exc.errors()))
        return error_response(HTTP_400_BAD_REQUEST, "Malformed request")

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        log.exception("unhandled_error", error_type=type(exc).__name__)
        return error_response(HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# --- Module Notes -----------------------------------------------------------
# 401 responses share one message whatever the cause; the cause is in the logs.
