"""
Signup, signin and profile update use cases.
"""
from typing import Tuple
import logging
from socialapi.core.exceptions import ConflictError, CredentialError, NotFoundError, ValidationError
from socialapi.core.security import (
    ACCESS_TOKEN,
    REFRESH_TOKEN,
    create_token,
    get_password_hash,
    needs_rehash,
    verify_password,
)
from socialapi.core.utils import generate_id, is_valid_accountname, is_valid_email
from socialapi.db.store import DocumentStore
from socialapi.models.user import User
from socialapi.schemas.user import UserPayload
from socialapi.services import user_service

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
ACCOUNTNAME_RULE = "Only letters, digits, underscore and period are allowed"


def register(db: DocumentStore, payload: UserPayload) -> User:
    """Validate a signup payload and store the new user with a hashed password."""
    if payload is None or not (
        payload.username and payload.email and payload.password and payload.accountname
    ):
        raise ValidationError("Please fill in all required fields")

    if len(payload.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if not is_valid_email(payload.email):
        raise ValidationError("Invalid email format")

    if not is_valid_accountname(payload.accountname):
        raise ValidationError(ACCOUNTNAME_RULE)

    if user_service.find_by_email(db, payload.email):
        raise ConflictError("Email is already registered")

    if user_service.find_by_accountname(db, payload.accountname):
        raise ConflictError("Accountname is already in use")

    new_user = User(
        id=generate_id(),
        username=payload.username,
        email=payload.email,
        accountname=payload.accountname,
        intro=payload.intro or "",
        image=payload.image or "",
        password=get_password_hash(payload.password),
    )
    created = user_service.insert(db, new_user)
    logger.info(f"Registered user {created.accountname}")
    return created


def authenticate(db: DocumentStore, payload: UserPayload) -> Tuple[User, str, str]:
    """
    Check signin credentials and issue an access and a refresh token.

    Legacy plaintext passwords are replaced with a hash on successful
    signin.
    """
    has_email = bool(payload and payload.email)
    has_password = bool(payload and payload.password)
    if not has_email and not has_password:
        raise ValidationError("Please enter your email or password")
    if not has_email:
        raise ValidationError("Please enter your email")
    if not has_password:
        raise ValidationError("Please enter your password")

    user = user_service.find_by_email(db, payload.email)
    if user is None or not verify_password(payload.password, user.password):
        logger.debug(f"Failed signin for {payload.email}")
        raise CredentialError()

    if needs_rehash(user.password):
        logger.info(f"Upgrading stored password of user {user.id}")
        user = user_service.update(db, user.id, password=get_password_hash(payload.password))

    return user, create_token(user, ACCESS_TOKEN), create_token(user, REFRESH_TOKEN)


def update_profile(db: DocumentStore, current: User, payload: UserPayload) -> User:
    """Apply the supplied profile fields; unspecified fields stay as they are."""
    if payload is None:
        raise ValidationError()

    if payload.accountname and payload.accountname != current.accountname:
        if not is_valid_accountname(payload.accountname):
            raise ValidationError(ACCOUNTNAME_RULE)
        if user_service.find_by_accountname(db, payload.accountname):
            raise ConflictError("Accountname is already in use")

    changes = payload.model_dump(include={"username", "accountname", "intro", "image"}, exclude_unset=True)
    changes = {key: value for key, value in changes.items() if value is not None}
    if changes.get("accountname") == "":
        del changes["accountname"]

    if not changes:
        return current
    updated = user_service.update(db, current.id, **changes)
    if updated is None:
        raise NotFoundError()
    return updated
