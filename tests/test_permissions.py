"""Unit tests for core/permissions.py -- the fixed role table and its resolver.

Pure functions over a read-only table; no fixtures needed.
"""

import logging

import pytest

from core.models import PermissionSet, Role
from core.permissions import DEFAULT_ROLE, ROLE_PERMISSIONS, derive_permissions, parse_role

_ADMIN = {"user:create", "user:read", "user:update", "user:delete", "system:manage", "reports:view"}
_MANAGER = {"user:read", "user:update", "reports:view", "team:manage"}
_USER = {"profile:read", "profile:update"}


class TestDerivePermissions:
    def test_admin(self):
        ps = derive_permissions("admin")
        assert ps.role == Role.ADMIN
        assert set(ps) == _ADMIN
        assert len(ps) == 6

    def test_manager(self):
        assert set(derive_permissions("manager")) == _MANAGER

    def test_user(self):
        assert set(derive_permissions("user")) == _USER

    def test_accepts_role_enum(self):
        assert derive_permissions(Role.MANAGER) == derive_permissions("manager")

    def test_case_and_whitespace_insensitive(self):
        assert derive_permissions(" Admin ") == derive_permissions("admin")

    def test_unknown_role_silently_gets_user_set(self, caplog):
        """Unrecognized roles fall back to the least-privileged set instead of raising.

        The caller is not told; the fallback is only visible in the log and in
        PermissionSet.role.
        """
        with caplog.at_level(logging.WARNING, logger="core.permissions"):
            ps = derive_permissions("superuser")
        assert set(ps) == _USER
        assert ps.role == Role.USER
        assert "superuser" in caplog.text

    @pytest.mark.parametrize("value", ["", "   ", "root", None, 3])
    def test_other_unrecognized_values(self, value):
        assert derive_permissions(value).role == DEFAULT_ROLE

    def test_no_implicit_inheritance(self):
        # manager is not a superset of user, and admin does not carry team:manage
        assert not _USER <= set(derive_permissions("manager"))
        assert "team:manage" not in derive_permissions("admin")

    def test_deterministic(self):
        assert derive_permissions("admin") == derive_permissions("admin")

    def test_tokens_are_resource_action(self):
        for role in Role:
            for token in derive_permissions(role):
                resource, _, action = token.partition(":")
                assert resource and action, token

    def test_no_duplicate_tokens(self):
        for role in Role:
            tokens = derive_permissions(role).as_list()
            assert len(tokens) == len(set(tokens))


class TestParseRole:
    @pytest.mark.parametrize("value", [None, "", "  "])
    def test_missing_defaults_to_user_without_warning(self, value, caplog):
        with caplog.at_level(logging.WARNING, logger="core.permissions"):
            assert parse_role(value) == Role.USER
        assert caplog.text == ""

    def test_known(self):
        assert parse_role("manager") == Role.MANAGER
        assert parse_role("ADMIN") == Role.ADMIN

    def test_unknown_defaults_to_user_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="core.permissions"):
            assert parse_role("superuser") == Role.USER
        assert "superuser" in caplog.text


class TestRoleTable:
    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            ROLE_PERMISSIONS[Role.USER] = ("system:manage",)

    def test_every_role_has_an_entry(self):
        assert set(ROLE_PERMISSIONS) == set(Role)

    def test_returned_set_cannot_mutate_table(self):
        tokens = derive_permissions("user").as_list()
        tokens.append("system:manage")
        assert "system:manage" not in derive_permissions("user")


class TestPermissionSet:
    def test_containment(self):
        ps = PermissionSet(role=Role.USER, permissions=("profile:read",))
        assert "profile:read" in ps
        assert "profile:update" not in ps

    def test_equality(self):
        assert PermissionSet(Role.USER, ("a:b",)) == PermissionSet(Role.USER, ("a:b",))
        assert PermissionSet(Role.USER, ("a:b",)) != PermissionSet(Role.ADMIN, ("a:b",))
