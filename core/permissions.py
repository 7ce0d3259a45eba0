"""
permissions.py -- Role-to-permission resolution (RBAC).

The role table is fixed and read-only: a MappingProxyType over tuples, built
once at import. derive_permissions() never fails -- anything that is not a
known role resolves to the USER set, which is the least-privileged grant.
"""

import logging
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .models import PermissionSet, Role

logger = logging.getLogger(__name__)

ROLE_PERMISSIONS: Mapping[Role, tuple[str, ...]] = MappingProxyType(
    {
        Role.ADMIN: (
            "user:create",
            "user:read",
            "user:update",
            "user:delete",
            "system:manage",
            "reports:view",
        ),
        Role.MANAGER: (
            "user:read",
            "user:update",
            "reports:view",
            "team:manage",
        ),
        Role.USER: (
            "profile:read",
            "profile:update",
        ),
    }
)

DEFAULT_ROLE = Role.USER


def _lookup_role(value: object) -> Optional[Role]:
    if isinstance(value, Role):
        return value
    if isinstance(value, str):
        try:
            return Role(value.strip().lower())
        except ValueError:
            return None
    return None


def parse_role(value: Optional[str]) -> Role:
    """Normalize an optional role string. Missing, blank or unknown -> Role.USER."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return DEFAULT_ROLE
    role = _lookup_role(value)
    if role is None:
        logger.warning("Unrecognized role %r -- defaulting to %s", value, DEFAULT_ROLE.value)
        return DEFAULT_ROLE
    return role


def derive_permissions(role: Union[Role, str]) -> PermissionSet:
    """Return the fixed PermissionSet for role.

    Unrecognized values (e.g. "superuser") get the USER set instead of an
    error. The returned set records the role it was resolved from.
    """
    resolved = _lookup_role(role)
    if resolved is None:
        logger.warning("Unrecognized role %r -- granting %s permissions", role, DEFAULT_ROLE.value)
        resolved = DEFAULT_ROLE
    return PermissionSet(role=resolved, permissions=ROLE_PERMISSIONS[resolved])
