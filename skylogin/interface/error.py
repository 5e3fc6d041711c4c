"""Interface layer error handling.

Storage and lock failures reach clients only as generic messages; the
details are logged server-side.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from skylogin.domain.error import LockNotAcquiredError, NotFoundError, ValidationError
from skylogin.persistence.error import PersistenceError

logger = logging.getLogger(__name__)


async def handle_lock_not_acquired(
    request: Request, exc: LockNotAcquiredError
) -> JSONResponse:
    logger.warning(f"Lock contention on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": "Service busy, please retry"},
        headers={"Retry-After": "1"},
    )


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info(f"{exc.resource} not found on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": f"{exc.resource} not found"},
    )


async def handle_validation_error(
    request: Request, exc: ValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
    )


async def handle_persistence_error(
    request: Request, exc: PersistenceError
) -> JSONResponse:
    logger.error(f"Storage error on {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Map domain and persistence errors to HTTP responses."""
    app.add_exception_handler(LockNotAcquiredError, handle_lock_not_acquired)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(PersistenceError, handle_persistence_error)
