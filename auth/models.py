"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in core/models.py -- dataclasses own domain shape; stores and routes do the
work.

Layer rule: no imports from api/.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class User:
    """A registered identity.

    role and permissions are fixed at registration: permissions is the
    PermissionSet resolved from role at that moment, stored as a plain list so
    later reads never depend on the resolver.

    password_strength is the 0-100 score the password earned at registration,
    kept for display only -- nothing re-reads it to make a decision.
    """

    username: str
    email: str
    role: str  # "admin", "manager", "user"
    id: int | None = None
    hashed_password: str | None = None
    permissions: list[str] = field(default_factory=list)
    password_strength: int | None = None
    department: str | None = None
    created_at: str | None = None
    last_login: str | None = None
    is_active: bool = True
