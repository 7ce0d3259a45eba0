"""
tests/test_user_store.py -- Tests for UserStore and the token helpers in auth/tokens.py.

Covers:
  - UserStore CRUD: create, lookups, last_login stamping, enable/disable
  - Unique username / email constraint raises IntegrityError
  - authenticate_user(): success, wrong password, unknown user, disabled account
  - JWT round-trip and rejection of tampered tokens

Fixtures used (from conftest.py):
  - store: fresh in-memory UserStore per test
"""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from auth.models import User
from auth.store import UserStore
from auth.tokens import authenticate_user, create_access_token, decode_access_token, hash_password

_PASSWORD = "Tr0ub4dor&Zx9!Qm"


def _add_user(store: UserStore, username: str = "ada", email: str = "ada@example.com", **kwargs) -> int:
    return store.create_user(
        User(
            username=username,
            email=email,
            role=kwargs.pop("role", "user"),
            hashed_password=hash_password(_PASSWORD),
            permissions=kwargs.pop("permissions", ["profile:read", "profile:update"]),
            **kwargs,
        )
    )


class TestUserStore:
    def test_empty_store(self, store: UserStore) -> None:
        assert store.has_users() is False
        assert store.get_by_username("ada") is None
        assert store.get_by_id(1) is None

    def test_create_and_get(self, store: UserStore) -> None:
        uid = _add_user(store, password_strength=100, department="Ops")
        assert store.has_users() is True

        user = store.get_by_id(uid)
        assert user is not None
        assert user.username == "ada"
        assert user.permissions == ["profile:read", "profile:update"]
        assert user.password_strength == 100
        assert user.department == "Ops"
        assert user.is_active is True
        assert user.created_at
        assert user.last_login is None

    def test_username_lookup_is_case_sensitive(self, store: UserStore) -> None:
        _add_user(store)
        assert store.get_by_username("ADA") is None

    def test_find_by_username_or_email(self, store: UserStore) -> None:
        _add_user(store)
        assert store.find_by_username_or_email("ada", "nobody@example.com") is not None
        assert store.find_by_username_or_email("nobody", "ada@example.com") is not None
        assert store.find_by_username_or_email("nobody", "nobody@example.com") is None

    def test_duplicate_username_raises(self, store: UserStore) -> None:
        _add_user(store)
        with pytest.raises(IntegrityError):
            _add_user(store, email="other@example.com")

    def test_duplicate_email_raises(self, store: UserStore) -> None:
        _add_user(store)
        with pytest.raises(IntegrityError):
            _add_user(store, username="grace")

    def test_update_last_login(self, store: UserStore) -> None:
        uid = _add_user(store)
        store.update_last_login(uid)
        assert store.get_by_id(uid).last_login is not None

    def test_set_active(self, store: UserStore) -> None:
        uid = _add_user(store)
        assert store.set_active(uid, False) is True
        assert store.get_by_id(uid).is_active is False
        assert store.set_active(9999, False) is False


class TestAuthenticateUser:
    def test_success(self, store: UserStore) -> None:
        _add_user(store)
        user = authenticate_user(store, "ada", _PASSWORD)
        assert user is not None
        assert user.username == "ada"

    def test_wrong_password(self, store: UserStore) -> None:
        _add_user(store)
        assert authenticate_user(store, "ada", "not-the-password") is None

    def test_unknown_user(self, store: UserStore) -> None:
        assert authenticate_user(store, "ghost", _PASSWORD) is None

    def test_disabled_account(self, store: UserStore) -> None:
        uid = _add_user(store)
        store.set_active(uid, False)
        assert authenticate_user(store, "ada", _PASSWORD) is None


class TestTokens:
    def test_round_trip(self) -> None:
        token = create_access_token(7, "ada", "manager", ["user:read", "team:manage"], expire_seconds=60)
        payload = decode_access_token(token)
        assert payload is not None
        assert payload["sub"] == "ada"
        assert payload["user_id"] == 7
        assert payload["role"] == "manager"
        assert payload["permissions"] == ["user:read", "team:manage"]

    def test_tampered_token_rejected(self) -> None:
        token = create_access_token(7, "ada", "user", expire_seconds=60)
        assert decode_access_token(token[:-2] + ("aa" if token[-2:] != "aa" else "bb")) is None

    def test_garbage_rejected(self) -> None:
        assert decode_access_token("not-a-jwt") is None
