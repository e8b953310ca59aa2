"""
Authentication dependencies for the API routes.
"""
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from socialapi.core.exceptions import AuthError, NotFoundError
from socialapi.core.security import verify_token
from socialapi.db.session import get_db
from socialapi.db.store import DocumentStore
from socialapi.models.user import User
from socialapi.services import user_service

security = HTTPBearer(auto_error=False)


def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """Require a valid bearer access token and return its claims."""
    if credentials is None:
        raise AuthError()
    payload = verify_token(credentials.credentials)
    if payload is None:
        raise AuthError("Invalid or expired token")
    return payload


def get_current_user(
    payload: dict = Depends(get_token_payload),
    db: DocumentStore = Depends(get_db),
) -> User:
    """Resolve the token subject to a stored user (404 if it no longer exists)."""
    user = user_service.find_by_id(db, payload["_id"])
    if user is None:
        raise NotFoundError()
    return user


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: DocumentStore = Depends(get_db),
) -> Optional[User]:
    """The requesting user if a valid token was sent, otherwise None."""
    if credentials is None:
        return None
    payload = verify_token(credentials.credentials)
    if payload is None:
        return None
    return user_service.find_by_id(db, payload["_id"])
