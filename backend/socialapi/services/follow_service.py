"""
Social graph operations: follow, unfollow and paginated listings.

A follow edge is recorded on both users: the followee's id in the
follower's ``following`` list and the follower's id in the followee's
``follower`` list. The two records are written one after the other; if
the second write fails the first one is reverted before the error is
re-raised.
"""
from typing import Any, Dict, List, Optional, Tuple
import logging
from socialapi.core.exceptions import NotFoundError, ValidationError
from socialapi.db.store import DocumentStore
from socialapi.models.user import User
from socialapi.services import user_service

logger = logging.getLogger(__name__)

DEFAULT_SKIP = 0
DEFAULT_LIMIT = 10


def is_following(viewer: Optional[User], target_id: str) -> bool:
    """Whether ``viewer`` follows ``target_id``. Anonymous viewers follow nobody."""
    if viewer is None:
        return False
    return target_id in viewer.following


def to_profile(user: User, viewer: Optional[User] = None, isfollow: Optional[bool] = None) -> Dict[str, Any]:
    """Public profile summary of ``user`` as seen by ``viewer``."""
    if isfollow is None:
        isfollow = is_following(viewer, user.id)
    following = list(user.following)
    follower = list(user.follower)
    return {
        "_id": user.id,
        "username": user.username,
        "accountname": user.accountname,
        "intro": user.intro,
        "image": user.image,
        "isfollow": isfollow,
        "following": following,
        "follower": follower,
        "followerCount": len(follower),
        "followingCount": len(following),
    }


def _write_edge(
    db: DocumentStore,
    current: User,
    target: User,
    following: List[str],
    follower: List[str],
) -> User:
    """Write current.following then target.follower, reverting the first on failure."""
    user_service.update(db, current.id, following=following)
    try:
        updated_target = user_service.update(db, target.id, follower=follower)
    except Exception:
        logger.error(
            f"Failed to update follower list of {target.id}; reverting following list of {current.id}"
        )
        user_service.update(db, current.id, following=list(current.following))
        raise
    if updated_target is None:
        user_service.update(db, current.id, following=list(current.following))
        raise NotFoundError("Account does not exist")
    return updated_target


def follow(db: DocumentStore, current: User, target: User) -> Tuple[User, bool]:
    """
    Make ``current`` follow ``target``.

    Returns the target as stored afterwards and whether a new edge was
    created. Following someone already followed changes nothing.
    """
    if current.id == target.id:
        raise ValidationError("You cannot follow yourself")

    if target.id in current.following:
        logger.debug(f"{current.id} already follows {target.id}")
        return target, False

    following = current.following + [target.id]
    follower = target.follower
    if current.id not in follower:
        follower = follower + [current.id]

    updated_target = _write_edge(db, current, target, following, follower)
    logger.info(f"{current.accountname} followed {target.accountname}")
    return updated_target, True


def unfollow(db: DocumentStore, current: User, target: User) -> User:
    """Remove the follow edge from ``current`` to ``target``. No-op if absent."""
    following = [user_id for user_id in current.following if user_id != target.id]
    follower = [user_id for user_id in target.follower if user_id != current.id]
    updated_target = _write_edge(db, current, target, following, follower)
    logger.info(f"{current.accountname} unfollowed {target.accountname}")
    return updated_target


def _list_profiles(
    db: DocumentStore,
    ids: List[str],
    skip: int,
    limit: int,
    viewer: Optional[User],
) -> List[Dict[str, Any]]:
    skip = max(skip, 0)
    if limit <= 0:
        return []
    profiles = []
    for user_id in ids[skip:skip + limit]:
        user = user_service.find_by_id(db, user_id)
        if user is None:
            continue
        profiles.append(to_profile(user, viewer))
    return profiles


def list_following(
    db: DocumentStore,
    user: User,
    skip: int = DEFAULT_SKIP,
    limit: int = DEFAULT_LIMIT,
    viewer: Optional[User] = None,
) -> List[Dict[str, Any]]:
    """Page of the users ``user`` follows, in stored order."""
    return _list_profiles(db, user.following, skip, limit, viewer)


def list_follower(
    db: DocumentStore,
    user: User,
    skip: int = DEFAULT_SKIP,
    limit: int = DEFAULT_LIMIT,
    viewer: Optional[User] = None,
) -> List[Dict[str, Any]]:
    """Page of the users following ``user``, in stored order."""
    return _list_profiles(db, user.follower, skip, limit, viewer)
