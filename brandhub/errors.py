"""
Error taxonomy shared by services and the API layer.

Every error carries a stable machine-readable tag, the HTTP status it
maps to, and a human-readable message. The API layer renders them with
to_dict(); services never build HTTP responses themselves.
"""

from typing import Optional

from fastapi import status


class BrandHubError(Exception):
    """Base exception for all expected, recoverable failures."""

    tag = "error"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON response."""
        return {
            "error": self.tag,
            "message": self.message,
        }


class ValidationError(BrandHubError):
    """Missing or malformed input."""

    tag = "validation_error"
    http_status = status.HTTP_400_BAD_REQUEST


class AuthenticationError(BrandHubError):
    """No principal, or the credential could not be verified."""

    tag = "authentication_error"
    http_status = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(BrandHubError):
    """
    Authenticated but forbidden.

    Covers wrong company, wrong role and inactive subscription.
    """

    tag = "authorization_error"
    http_status = status.HTTP_403_FORBIDDEN


class NotFoundError(BrandHubError):
    """Referenced entity does not exist."""

    tag = "not_found"
    http_status = status.HTTP_404_NOT_FOUND


class ConflictError(BrandHubError):
    """Uniqueness violation or invalid state transition."""

    tag = "conflict"
    http_status = status.HTTP_409_CONFLICT


class DependencyError(BrandHubError):
    """
    Storage, blob store or billing provider failure.

    The detail is kept for logging; callers only ever see GENERIC_MESSAGE.
    """

    tag = "dependency_error"
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE

    GENERIC_MESSAGE = "A required service is unavailable"

    def __init__(self, detail: str, dependency: Optional[str] = None):
        self.detail = detail
        self.dependency = dependency
        super().__init__(self.GENERIC_MESSAGE)

    def to_dict(self) -> dict:
        return {
            "error": self.tag,
            "message": self.GENERIC_MESSAGE,
        }
