"""
Tests for the social graph operations against an in-memory store.
"""
import pytest
from socialapi.core.exceptions import ValidationError
from socialapi.db.store import MemoryStore
from socialapi.models.user import User
from socialapi.services import follow_service, user_service


@pytest.fixture
def db():
    store = MemoryStore()
    for name in ("alice", "bob", "carol"):
        user_service.insert(store, User(id=name, username=name, email=f"{name}@x.com", accountname=name))
    return store


def _get(db, user_id):
    return user_service.find_by_id(db, user_id)


def test_follow_records_both_sides(db):
    target, created = follow_service.follow(db, _get(db, "alice"), _get(db, "bob"))
    assert created
    assert target.follower == ["alice"]
    assert _get(db, "alice").following == ["bob"]


def test_follow_twice_is_idempotent(db):
    follow_service.follow(db, _get(db, "alice"), _get(db, "bob"))
    target, created = follow_service.follow(db, _get(db, "alice"), _get(db, "bob"))
    assert not created
    assert target.follower == ["alice"]
    assert _get(db, "alice").following == ["bob"]


def test_cannot_follow_self(db):
    with pytest.raises(ValidationError):
        follow_service.follow(db, _get(db, "alice"), _get(db, "alice"))
    assert _get(db, "alice").following == []


def test_unfollow_not_followed_is_noop(db):
    target = follow_service.unfollow(db, _get(db, "alice"), _get(db, "bob"))
    assert target.follower == []
    assert _get(db, "alice").following == []


def test_unfollow_removes_edge(db):
    follow_service.follow(db, _get(db, "alice"), _get(db, "bob"))
    follow_service.follow(db, _get(db, "carol"), _get(db, "bob"))
    target = follow_service.unfollow(db, _get(db, "alice"), _get(db, "bob"))
    assert target.follower == ["carol"]
    assert _get(db, "alice").following == []


def test_follow_rolls_back_when_second_write_fails(db, monkeypatch):
    """If the followee cannot be updated, the follower's list is restored."""
    original_update = user_service.update

    def flaky_update(store, user_id, **fields):
        if "follower" in fields:
            raise OSError("disk full")
        return original_update(store, user_id, **fields)

    monkeypatch.setattr(user_service, "update", flaky_update)
    with pytest.raises(OSError):
        follow_service.follow(db, _get(db, "alice"), _get(db, "bob"))

    assert _get(db, "alice").following == []
    assert _get(db, "bob").follower == []


def test_list_following_pages_in_order_and_drops_unknown_ids(db):
    user_service.update(db, "alice", following=["bob", "ghost", "carol"])
    page = follow_service.list_following(db, _get(db, "alice"))
    assert [p["accountname"] for p in page] == ["bob", "carol"]

    page = follow_service.list_following(db, _get(db, "alice"), skip=2, limit=1)
    assert [p["accountname"] for p in page] == ["carol"]


def test_isfollow_reflects_viewer(db):
    follow_service.follow(db, _get(db, "carol"), _get(db, "bob"))
    user_service.update(db, "alice", follower=["bob"])
    anonymous = follow_service.list_follower(db, _get(db, "alice"))
    as_carol = follow_service.list_follower(db, _get(db, "alice"), viewer=_get(db, "carol"))
    assert anonymous[0]["isfollow"] is False
    assert as_carol[0]["isfollow"] is True


def test_profile_counts_match_lists(db):
    follow_service.follow(db, _get(db, "alice"), _get(db, "bob"))
    follow_service.follow(db, _get(db, "carol"), _get(db, "bob"))
    profile = follow_service.to_profile(_get(db, "bob"))
    assert profile["followerCount"] == len(profile["follower"]) == 2
    assert profile["followingCount"] == len(profile["following"]) == 0
