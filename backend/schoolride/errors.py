"""Application exceptions and the handlers that turn them into responses.

Workflow modules raise these instead of ``HTTPException`` so they can be
called outside a request.  ``main.py`` registers :func:`schoolride_error_handler`
which renders every subclass as ``{"code": ..., "message": ...}``, the same
body shape used by the catch-all 500 handler.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class SchoolRideError(Exception):
    """Base application exception."""

    code = "schoolride_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PersistenceError(SchoolRideError):
    """The backing store rejected or failed a query or update."""

    code = "persistence_error"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class ValidationError(SchoolRideError):
    """A supplied identifier breaks a referential or role constraint."""

    code = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidTransitionError(SchoolRideError):
    """A ride is not in the status a transition starts from."""

    code = "invalid_transition"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, ride_id, current: str, expected: str, target: str):
        self.ride_id = ride_id
        self.current = current
        self.expected = expected
        self.target = target
        super().__init__(
            f"Ride {ride_id} is {current}; it must be {expected} "
            f"to become {target}"
        )


class NotAuthorizedError(SchoolRideError):
    code = "not_authorized"
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(SchoolRideError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id=None):
        self.resource = resource
        self.resource_id = resource_id
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} {resource_id} not found"
        super().__init__(message)


@asynccontextmanager
async def persistence_guard(db: AsyncSession, action: str):
    """Roll back and re-raise store failures as :class:`PersistenceError`."""

    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Store failure while trying to %s", action)
        await db.rollback()
        raise PersistenceError(f"Failed to {action}") from exc


async def schoolride_error_handler(
    request: Request, exc: SchoolRideError
) -> JSONResponse:
    """Render application exceptions with their own status and code."""

    if exc.status_code >= 500:
        logger.error("%s on %s: %s", exc.code, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "message": exc.message},
    )
