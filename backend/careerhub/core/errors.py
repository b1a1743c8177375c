"""
Domain errors.

Services raise these; the API layer renders them as JSON with the
matching HTTP status (see careerhub.main).
"""

from fastapi import status


class CareerHubError(Exception):
    """Base class for every error surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "error"
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(CareerHubError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Authentication required"


class Forbidden(CareerHubError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Admin access required"


class NotFound(CareerHubError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class AccessDenied(CareerHubError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "access_denied"
    default_message = (
        "Access denied. Your email is not registered as a resident. "
        "Please contact the community administrator."
    )


class InvalidCredentials(CareerHubError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    default_message = "Invalid admin credentials"


class ValidationError(CareerHubError):
    status_code = 422
    code = "validation_error"
    default_message = "Invalid request"


class Conflict(CareerHubError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "Resource already exists"
