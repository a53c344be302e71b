"""Tests for password auth service."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from outfit_draw.auth import hash_password, verify_password
from outfit_draw.errors import AuthError, ConflictError, NotFoundError, ValidationError
from outfit_draw.models import Session as SessionModel
from outfit_draw.models import User


def test_signup_then_login_binds_same_user(context) -> None:
    auth = context.auth

    created, signup_session = auth.signup("alice", "pw123")
    user, login_session = auth.login("alice", "pw123")

    assert user.id == created.id
    assert user.username == "alice"
    assert login_session != signup_session
    assert auth.session_user_id(signup_session) == created.id
    assert auth.session_user_id(login_session) == created.id


def test_duplicate_signup_is_rejected(context) -> None:
    auth = context.auth
    auth.signup("alice", "pw123")

    with pytest.raises(ConflictError, match="Username already exists"):
        auth.signup("alice", "other")

    with context.database.session() as db:
        assert db.query(User).filter(User.username == "alice").count() == 1


@pytest.mark.parametrize("username,password", [("", "pw"), ("bob", ""), ("   ", "pw")])
def test_signup_requires_both_fields(context, username, password) -> None:
    with pytest.raises(ValidationError, match="Missing fields"):
        context.auth.signup(username, password)


def test_login_rejects_wrong_password_and_unknown_user(context) -> None:
    context.auth.signup("alice", "pw123")

    with pytest.raises(AuthError, match="Invalid credentials"):
        context.auth.login("alice", "wrong")
    with pytest.raises(AuthError, match="Invalid credentials"):
        context.auth.login("nobody", "pw123")


@pytest.mark.parametrize("username,password", [("", "pw123"), ("alice", ""), (None, "pw123"), ("alice", None)])
def test_login_with_empty_field_is_invalid_credentials(context, username, password) -> None:
    context.auth.signup("alice", "pw123")

    with pytest.raises(AuthError, match="Invalid credentials"):
        context.auth.login(username, password)


def test_signup_treats_none_as_missing(context) -> None:
    with pytest.raises(ValidationError, match="Missing fields"):
        context.auth.signup(None, "pw123")


def test_password_is_stored_hashed(context) -> None:
    context.auth.signup("alice", "pw123")

    with context.database.session() as db:
        stored = db.query(User).filter(User.username == "alice").one().password_hash

    assert stored != "pw123"
    assert stored.startswith("$argon2")
    assert verify_password("pw123", stored)


def test_verify_password_handles_bad_hash() -> None:
    assert verify_password("pw123", hash_password("pw123"))
    assert not verify_password("pw123", hash_password("other"))
    assert not verify_password("pw123", "not-a-hash")


def test_logout_is_idempotent(context) -> None:
    auth = context.auth
    _, session_id = auth.signup("alice", "pw123")

    assert asyncio.run(auth.logout(session_id)) is True
    assert asyncio.run(auth.logout(session_id)) is False
    assert asyncio.run(auth.logout(None)) is False
    assert auth.session_user_id(session_id) is None
    assert auth.current_user(session_id) is None


def test_expired_session_is_ignored_and_cleaned(context) -> None:
    auth = context.auth
    _, session_id = auth.signup("alice", "pw123")
    with context.database.session() as db:
        db.query(SessionModel).filter(SessionModel.session_id == session_id).update(
            {"expires_at": datetime.now(timezone.utc) - timedelta(minutes=1)}
        )
        db.commit()

    assert auth.session_user_id(session_id) is None
    assert auth.cleanup_expired_sessions() == 1


def test_get_user_missing_raises_not_found(context) -> None:
    with pytest.raises(NotFoundError, match="User not found"):
        context.auth.get_user(999)


def test_current_user_unauthenticated_returns_none(context) -> None:
    assert context.auth.current_user(None) is None
    assert context.auth.current_user("unknown-token") is None
