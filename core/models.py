"""
core/models.py -- Domain value types for the credential-onboarding gate.

Pattern: Data class (pure data containers). The evaluator and resolver in
core/strength.py and core/permissions.py do the work; these types only own
the shape of their results. Everything here is frozen -- a ScoreResult or
PermissionSet handed to a caller can never be changed underneath it.

Layer rule: core/ is the kernel. No imports from api/ or auth/.
"""

from dataclasses import dataclass, fields
from enum import Enum

# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

MIN_PASSWORD_LENGTH = 8
RECOMMENDED_PASSWORD_LENGTH = 12


class StrengthLabel(str, Enum):
    """Ordered strength tiers, weakest first."""

    VERY_WEAK = "Very Weak"
    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"


class Role(str, Enum):
    """Closed set of identity classes. No role inherits from another."""

    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"


@dataclass(frozen=True)
class CriteriaSet:
    """The seven independent checks run against a password.

    Field order is the feedback order: a failed criterion earlier in the
    declaration produces its remediation line earlier in ScoreResult.feedback.
    """

    has_min_length: bool
    has_lowercase: bool
    has_uppercase: bool
    has_digit: bool
    has_symbol: bool
    has_no_whitespace: bool
    has_no_common_pattern: bool

    def __post_init__(self) -> None:
        for f in fields(self):
            if not isinstance(getattr(self, f.name), bool):
                raise TypeError(f"CriteriaSet.{f.name} must be a bool")

    def all_met(self) -> bool:
        return all(getattr(self, f.name) for f in fields(self))

    def as_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ScoreResult:
    """Verdict for one password.

    feedback is never empty: a password that meets every criterion and is at
    least RECOMMENDED_PASSWORD_LENGTH long gets a single affirmative line.
    """

    score: int  # 0-100
    strength: StrengthLabel
    feedback: tuple[str, ...]
    criteria: CriteriaSet

    def as_dict(self) -> dict:
        """Flat record with stable keys -- the shape the UI renders."""
        return {
            "score": self.score,
            "strength": self.strength.value,
            "feedback": list(self.feedback),
            "criteria": self.criteria.as_dict(),
        }


@dataclass(frozen=True)
class PermissionSet:
    """Capability tokens ("resource:action") granted to a role.

    role is the role the tokens were actually resolved from -- for an
    unrecognized input that is Role.USER, not the raw value.
    """

    role: Role
    permissions: tuple[str, ...]

    def __contains__(self, permission: object) -> bool:
        return permission in self.permissions

    def __iter__(self):
        return iter(self.permissions)

    def __len__(self) -> int:
        return len(self.permissions)

    def as_list(self) -> list[str]:
        return list(self.permissions)
