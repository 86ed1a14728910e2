"""Domain errors shared by services and the HTTP layer.

Services raise these before touching the database; main.py registers
one exception handler that turns any of them into a JSON response with
the matching status code. Nothing here knows about FastAPI.
"""

from typing import Optional


class HomelistError(Exception):
    """Base class. Subclasses pick the status code and a default message."""

    status_code: int = 500
    default_detail: str = "Internal server error"
    headers: Optional[dict[str, str]] = None

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(HomelistError):
    """Missing or malformed input."""

    status_code = 400
    default_detail = "Invalid request"


class AuthenticationError(HomelistError):
    """Missing, invalid, or expired credentials."""

    status_code = 401
    default_detail = "Authentication required"
    headers = {"WWW-Authenticate": "Bearer"}


class AuthorizationError(HomelistError):
    """Valid identity acting on a resource it does not own."""

    status_code = 403
    default_detail = "Not allowed"


class NotFoundError(HomelistError):
    status_code = 404
    default_detail = "Not found"


class ConflictError(HomelistError):
    """Uniqueness violation (duplicate email)."""

    status_code = 400
    default_detail = "Already exists"


class InternalError(HomelistError):
    """Datastore or hashing failure. Detail is never shown to the caller."""
