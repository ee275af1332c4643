"""Domain exceptions mapped to HTTP responses by the application handlers."""

from fastapi import status


class EventWallError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(EventWallError):
    """Referenced photo or event does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidRequest(EventWallError):
    """Malformed payload or out-of-range value."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidState(EventWallError):
    """Operation requires a precondition on the current status."""

    status_code = status.HTTP_409_CONFLICT


class Unauthorized(EventWallError):
    """Missing or invalid credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
