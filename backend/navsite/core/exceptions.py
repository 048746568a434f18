"""
Application error taxonomy.

Services and repositories raise these; the handlers registered in
navsite.main turn them into ``{"error": "<message>"}`` JSON responses
with the matching status code.
"""

from fastapi import status


# Body of every 500 response; details stay in the logs
GENERIC_ERROR_MESSAGE = "Internal Server Error"


class NavSiteError(Exception):
    """
    Base class for errors that map onto an HTTP response.

    Attributes:
        message: Human readable explanation returned to the client
        status_code: HTTP status code used at the API boundary
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(NavSiteError):
    """Missing or malformed input fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class AlreadyConfigured(NavSiteError):
    """Admin bootstrap attempted after an admin already exists."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Admin account has already been set up"


class NotConfigured(NavSiteError):
    """Login attempted before the admin account was set up."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Admin account does not exist, run setup first"


class Unauthorized(NavSiteError):
    """Missing, malformed, invalid or expired token, or non-admin claims."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Admin privileges required"


class InvalidCredentials(NavSiteError):
    """Username or password mismatch at login."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Incorrect username or password"


class NotFound(NavSiteError):
    """Operation targets an id that is not in the collection."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Conflict(NavSiteError):
    """Write would break a uniqueness rule (category names)."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class StorageFault(NavSiteError):
    """
    Underlying key-value read or write failed.

    Fatal for the current request. The message is logged but never
    returned to the client.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage backend failure"
