"""
API error types.

Services raise these; the handlers registered in ``main`` render them as
``{"message": ...}`` JSON bodies with the matching status code.
"""
from typing import Any, Dict, Optional

from fastapi import status


class APIError(Exception):
    """Base class for errors that map to an HTTP response."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationError(APIError):
    """Missing or malformed request fields."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(APIError):
    """Email or accountname already taken."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already in use"


class AuthError(APIError):
    """Missing, invalid or expired bearer token."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication token required"
    headers = {"WWW-Authenticate": "Bearer"}


class CredentialError(APIError):
    """Signin email/password mismatch."""
    status_code = 422
    default_message = "Email or password does not match"

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, "status": self.status_code}


class NotFoundError(APIError):
    """Unknown account or user."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class InternalError(APIError):
    pass
