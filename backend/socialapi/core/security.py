"""
Security utilities for JWT authentication and password hashing.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import hmac
import bcrypt
from jose import JWTError, jwt
from socialapi.core.config import settings
from socialapi.models.user import User

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    Returns bytes (32 bytes) which is well under bcrypt's 72-byte limit.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


def _is_bcrypt_hash(value: str) -> bool:
    return value.startswith(_BCRYPT_PREFIXES)


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt and return it as a string for storage."""
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pre_hashed, salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, stored_password: Optional[str]) -> bool:
    """
    Verify a password against its stored value.

    Records written before hashing was introduced hold the plaintext
    password; those are compared in constant time instead.
    """
    stored = stored_password or ""
    if not stored:
        return False
    if _is_bcrypt_hash(stored):
        pre_hashed = _pre_hash_password(plain_password)
        try:
            return bcrypt.checkpw(pre_hashed, stored.encode('utf-8'))
        except ValueError:
            return False
    return hmac.compare_digest(plain_password.encode('utf-8'), stored.encode('utf-8'))


def needs_rehash(stored_password: Optional[str]) -> bool:
    """True when the stored value is a legacy plaintext password."""
    return not _is_bcrypt_hash(stored_password or "")


def create_token(user: User, token_type: str = ACCESS_TOKEN) -> str:
    """
    Create a signed JWT for a user.

    Access tokens carry ``_id``, ``email`` and ``accountname`` and expire
    after ``ACCESS_TOKEN_EXPIRE_MINUTES``. Refresh tokens carry only ``_id``
    and ``email``, are signed with a separate secret and expire after
    ``REFRESH_TOKEN_EXPIRE_DAYS``.
    """
    now = datetime.now(timezone.utc)
    if token_type == ACCESS_TOKEN:
        to_encode = {"_id": user.id, "email": user.email, "accountname": user.accountname}
        secret = settings.ACCESS_TOKEN_SECRET
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    elif token_type == REFRESH_TOKEN:
        to_encode = {"_id": user.id, "email": user.email}
        secret = settings.REFRESH_TOKEN_SECRET
        expire = now + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    else:
        raise ValueError(f"Unknown token type: {token_type}")
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> Optional[dict]:
    """
    Decode and verify an access token.

    Only the access-token secret is checked, so refresh tokens never pass.
    Returns None for malformed, expired or wrongly signed tokens.
    """
    try:
        payload = jwt.decode(token, settings.ACCESS_TOKEN_SECRET, algorithms=[settings.ALGORITHM])
    except (JWTError, AttributeError, TypeError):
        return None
    if not payload.get("_id"):
        return None
    return payload
