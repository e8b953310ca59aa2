"""
User store accessor: lookups and writes over the ``users`` collection.
"""
from typing import Optional
import logging
from socialapi.db.store import DocumentStore
from socialapi.models.user import User

logger = logging.getLogger(__name__)

USERS = "users"


def _to_user(document: Optional[dict]) -> Optional[User]:
    if document is None:
        return None
    return User.model_validate(document)


def find_by_email(db: DocumentStore, email: str) -> Optional[User]:
    return _to_user(db.find_one(USERS, email=email))


def find_by_accountname(db: DocumentStore, accountname: str) -> Optional[User]:
    return _to_user(db.find_one(USERS, accountname=accountname))


def find_by_id(db: DocumentStore, user_id: str) -> Optional[User]:
    return _to_user(db.find_one(USERS, _id=user_id))


def insert(db: DocumentStore, user: User) -> User:
    """Persist a new user. Uniqueness must be checked by the caller."""
    stored = db.insert_one(USERS, user.to_document())
    logger.info(f"Inserted user {user.id} ({user.accountname})")
    return User.model_validate(stored)


def update(db: DocumentStore, user_id: str, **fields) -> Optional[User]:
    """
    Merge the given fields into the stored user.

    Fields not passed are left untouched. Returns the updated user, or
    None when no user has ``user_id``.
    """
    return _to_user(db.update_one(USERS, {"_id": user_id}, fields))


def count(db: DocumentStore) -> int:
    return len(db.find_all(USERS))
