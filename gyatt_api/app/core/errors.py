"""
Application error taxonomy.

Services and security helpers raise these exceptions; ``main`` maps
every ``AppError`` to its HTTP status with a ``{"error": message}``
body.  Errors with a status of 500 or above are logged and answered
with a generic message so that internal details never reach clients.
"""

from typing import Optional


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """A required field is missing or the request body is malformed."""

    status_code = 400


class Conflict(AppError):
    """A record with the same unique key already exists."""

    status_code = 400


class InvalidCredentials(AppError):
    status_code = 401


class Unauthenticated(AppError):
    """No usable bearer token was supplied."""

    status_code = 401


class InvalidToken(Unauthenticated):
    """Token signature does not verify or the token is malformed."""

    status_code = 403


class ExpiredToken(Unauthenticated):
    status_code = 403


class Forbidden(AppError):
    status_code = 403


class NotFound(AppError):
    status_code = 404


class InternalError(AppError):
    status_code = 500


class StoreError(InternalError):
    """A collection could not be read or written."""
