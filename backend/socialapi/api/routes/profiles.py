"""
Profile routes: public profiles, follow/unfollow and follow listings.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends
from socialapi.api.dependencies import get_optional_user, get_token_payload
from socialapi.core.exceptions import NotFoundError
from socialapi.core.utils import parse_int
from socialapi.db.session import get_db
from socialapi.db.store import DocumentStore
from socialapi.models.user import User
from socialapi.schemas.user import Profile, ProfileResponse
from socialapi.services import follow_service, user_service

router = APIRouter(prefix="/profile", tags=["profile"])


def get_target_user(accountname: str, db: DocumentStore) -> User:
    """Look up the account named in the path or raise 404."""
    user = user_service.find_by_accountname(db, accountname)
    if user is None:
        raise NotFoundError("Account does not exist")
    return user


def get_acting_user(payload: dict, db: DocumentStore) -> User:
    user = user_service.find_by_id(db, payload["_id"])
    if user is None:
        raise NotFoundError()
    return user


@router.get("/{accountname}", response_model=ProfileResponse)
def get_profile(
    accountname: str,
    viewer: Optional[User] = Depends(get_optional_user),
    db: DocumentStore = Depends(get_db),
):
    """Get a user's profile. ``isfollow`` reflects the signed-in viewer, if any."""
    target = get_target_user(accountname, db)
    return {"profile": follow_service.to_profile(target, viewer)}


@router.post("/{accountname}/follow", response_model=ProfileResponse)
def follow(
    accountname: str,
    payload: dict = Depends(get_token_payload),
    db: DocumentStore = Depends(get_db),
):
    """Follow a user. Following someone already followed succeeds unchanged."""
    target = get_target_user(accountname, db)
    current_user = get_acting_user(payload, db)
    updated_target, _ = follow_service.follow(db, current_user, target)
    return {"profile": follow_service.to_profile(updated_target, isfollow=True)}


@router.delete("/{accountname}/unfollow", response_model=ProfileResponse)
def unfollow(
    accountname: str,
    payload: dict = Depends(get_token_payload),
    db: DocumentStore = Depends(get_db),
):
    """Unfollow a user. Unfollowing someone not followed is a no-op."""
    target = get_target_user(accountname, db)
    current_user = get_acting_user(payload, db)
    updated_target = follow_service.unfollow(db, current_user, target)
    return {"profile": follow_service.to_profile(updated_target, isfollow=False)}


@router.get("/{accountname}/following", response_model=List[Profile])
def get_following(
    accountname: str,
    limit: Optional[str] = None,
    skip: Optional[str] = None,
    viewer: Optional[User] = Depends(get_optional_user),
    db: DocumentStore = Depends(get_db),
):
    """List the users an account follows (``skip``/``limit`` pagination)."""
    target = get_target_user(accountname, db)
    return follow_service.list_following(
        db,
        target,
        skip=parse_int(skip, follow_service.DEFAULT_SKIP),
        limit=parse_int(limit, follow_service.DEFAULT_LIMIT),
        viewer=viewer,
    )


@router.get("/{accountname}/follower", response_model=List[Profile])
def get_follower(
    accountname: str,
    limit: Optional[str] = None,
    skip: Optional[str] = None,
    viewer: Optional[User] = Depends(get_optional_user),
    db: DocumentStore = Depends(get_db),
):
    """List the users following an account (``skip``/``limit`` pagination)."""
    target = get_target_user(accountname, db)
    return follow_service.list_follower(
        db,
        target,
        skip=parse_int(skip, follow_service.DEFAULT_SKIP),
        limit=parse_int(limit, follow_service.DEFAULT_LIMIT),
        viewer=viewer,
    )
