"""
Service error types surfaced to clients as toast notifications.

Every failure the front-end shows to a user is a notification with a title,
a description and the "destructive" variant. Services raise the subclasses
below; the exception handler registered in main.py renders them as

    {"detail": {"title": ..., "description": ..., "variant": "destructive"}}

with the subclass's HTTP status code.
"""

from typing import Any, Dict, Optional

import asyncpg
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse


class ServiceError(Exception):
    """Base class for errors reported to the user as a notification."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    title: str = "Error"

    def __init__(self, description: str, title: Optional[str] = None) -> None:
        super().__init__(description)
        self.description = description
        if title is not None:
            self.title = title

    def to_notification(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "variant": "destructive",
        }


class ValidationFailedError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    title = "Not found"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT


class PermissionDeniedError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    title = "Access denied"


def toast_error(status_code: int, title: str, description: str) -> HTTPException:
    """Build an HTTPException whose detail is a destructive notification."""
    return HTTPException(
        status_code=status_code,
        detail={"title": title, "description": description, "variant": "destructive"},
    )


def from_database_error(exc: asyncpg.PostgresError, title: str) -> ServiceError:
    """
    Map an integrity violation raised by the database to a ServiceError.

    Unique violations become 409 conflicts; foreign-key, not-null and check
    violations become 400s. The database message is kept as the description.
    """
    message = getattr(exc, "message", None) or str(exc)
    if isinstance(exc, asyncpg.UniqueViolationError):
        return ConflictError(message, title=title)
    return ValidationFailedError(message, title=title)


INTEGRITY_ERRORS = (
    asyncpg.UniqueViolationError,
    asyncpg.ForeignKeyViolationError,
    asyncpg.NotNullViolationError,
    asyncpg.CheckViolationError,
)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """FastAPI exception handler for ServiceError and its subclasses."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.to_notification()},
    )
