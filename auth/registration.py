"""
auth/registration.py -- New-identity workflow.

Composes the two core decisions: the password must score at least
MIN_REGISTRATION_SCORE (inclusive), and the new user receives the fixed
permission set for its role. No HTTP here -- api/routes/v1/auth.py maps the
exceptions below onto status codes.

Layer rule: no imports from api/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from auth.models import User
from auth.store import UserStore
from auth.tokens import hash_password
from core.models import Role, ScoreResult
from core.permissions import derive_permissions, parse_role
from core.strength import evaluate

logger = logging.getLogger("credgate.auth.registration")

MIN_REGISTRATION_SCORE = 40  # "Medium" and above


class WeakCredentialError(ValueError):
    """The password scored below MIN_REGISTRATION_SCORE.

    result carries the full ScoreResult so the caller can show the feedback.
    """

    def __init__(self, result: ScoreResult) -> None:
        super().__init__("Password is too weak. Please choose a stronger password.")
        self.result = result


class DuplicateIdentityError(ValueError):
    """The username or email is already registered."""


@dataclass(frozen=True)
class Registration:
    user: User
    password_strength: ScoreResult


def is_acceptable(result: ScoreResult) -> bool:
    """True if result clears the registration bar (score >= 40)."""
    return result.score >= MIN_REGISTRATION_SCORE


def register_user(
    store: UserStore,
    username: str,
    email: str,
    password: str,
    role: Role | str | None = None,
    department: str | None = None,
) -> Registration:
    """Create a new user, or raise.

    Raises:
        DuplicateIdentityError: username or email already taken.
        WeakCredentialError:    password scored below 40.
        core.strength.InvalidInputError: password is not a str.
    """
    if store.find_by_username_or_email(username, email) is not None:
        raise DuplicateIdentityError("Username or email already exists")

    strength = evaluate(password)
    if not is_acceptable(strength):
        logger.info("Registration rejected for %s: password score %d", username, strength.score)
        raise WeakCredentialError(strength)

    resolved_role = role if isinstance(role, Role) else parse_role(role)
    permission_set = derive_permissions(resolved_role)

    user = User(
        username=username,
        email=email,
        role=permission_set.role.value,
        hashed_password=hash_password(password),
        permissions=permission_set.as_list(),
        password_strength=strength.score,
        department=department,
    )
    try:
        user_id = store.create_user(user)
    except IntegrityError as exc:
        # Lost a race with a concurrent registration for the same identifiers.
        raise DuplicateIdentityError("Username or email already exists") from exc

    created = store.get_by_id(user_id)
    logger.info("Registered %s (role=%s, score=%d)", username, user.role, strength.score)
    return Registration(user=created or user, password_strength=strength)
