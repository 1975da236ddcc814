"""Interface layer error handling.

Maps domain and adapter errors onto HTTP responses so route handlers can
let them propagate.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from mailgate.adapter.error import ProviderError
from mailgate.domain.error import (
    AccountDeletedError,
    AlreadyBoundError,
    DeletedEmailError,
    NotFoundError,
    RegistrationCodeError,
    UnsupportedProviderError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[Exception], int] = {
    ProviderError: status.HTTP_502_BAD_GATEWAY,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AlreadyBoundError: status.HTTP_409_CONFLICT,
    DeletedEmailError: status.HTTP_409_CONFLICT,
    AccountDeletedError: status.HTTP_409_CONFLICT,
    RegistrationCodeError: status.HTTP_400_BAD_REQUEST,
    UnsupportedProviderError: status.HTTP_400_BAD_REQUEST,
}


async def handle_known_error(request: Request, exc: Exception) -> JSONResponse:
    """Render a mapped error as `{"detail": ..., "error": ...}`."""
    status_code = next(
        code
        for error_type, code in STATUS_BY_ERROR.items()
        if isinstance(exc, error_type)
    )
    logger.warning(
        f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}"
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers for every mapped error type."""
    for error_type in STATUS_BY_ERROR:
        app.add_exception_handler(error_type, handle_known_error)
