"""Error taxonomy shared by services and the HTTP boundary."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Server error"


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """A required field is missing or a value is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """The key referenced by an update or delete does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InternalError(AppError):
    """The persistence layer failed; details are logged, not returned."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = GENERIC_SERVER_ERROR) -> None:
        super().__init__(message)


async def _handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, InternalError):
        return JSONResponse(status_code=exc.status_code, content={"detail": GENERIC_SERVER_ERROR})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy onto HTTP responses."""

    app.add_exception_handler(AppError, _handle_app_error)  # type: ignore[arg-type]


@contextmanager
def persistence_errors(operation: str) -> Iterator[None]:
    """Translate database failures into :class:`InternalError`.

    The original exception is logged with its traceback and chained as the cause.
    """

    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Persistence failure during %s: %s", operation, exc)
        raise InternalError() from exc
