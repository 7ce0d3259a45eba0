"""
API request and response models for CredGate REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in core/models.py and
auth/models.py, which own the internal domain representation. Route handlers
map between the two.

Separation of concerns: core/ models = domain truth; api/ models = API contract.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from auth.models import User
from core.models import CriteriaSet, PermissionSet, ScoreResult

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class RoleEnum(str, Enum):
    admin = "admin"
    manager = "manager"
    user = "user"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class PasswordCheckRequest(BaseModel):
    """Request body for POST /api/v1/password/check-strength.

    Empty strings are allowed -- the evaluator scores them like any other
    input. Whitespace is NOT stripped; spaces are part of what gets scored.
    """

    password: str = Field(max_length=128)


class RegisterRequest(BaseModel):
    """Request body for POST /api/v1/auth/register."""

    username: str = Field(min_length=3, max_length=255)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    role: Optional[RoleEnum] = None
    department: Optional[str] = Field(default=None, max_length=255)


class LoginRequest(BaseModel):
    """Request body for POST /api/v1/auth/login."""

    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=128)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class CriteriaResponse(BaseModel):
    """The seven criteria booleans. Field names are rendered by the UI -- keep them stable."""

    model_config = ConfigDict(frozen=True)

    has_min_length: bool
    has_lowercase: bool
    has_uppercase: bool
    has_digit: bool
    has_symbol: bool
    has_no_whitespace: bool
    has_no_common_pattern: bool

    @classmethod
    def from_criteria(cls, criteria: CriteriaSet) -> "CriteriaResponse":
        return cls(**criteria.as_dict())


class PasswordStrengthResponse(BaseModel):
    """Flat ScoreResult record."""

    model_config = ConfigDict(frozen=True)

    score: int
    strength: str
    feedback: list[str]
    criteria: CriteriaResponse

    @classmethod
    def from_result(cls, result: ScoreResult) -> "PasswordStrengthResponse":
        """Factory Method: the mapping lives beside the output model, not in route handlers."""
        return cls(
            score=result.score,
            strength=result.strength.value,
            feedback=list(result.feedback),
            criteria=CriteriaResponse.from_criteria(result.criteria),
        )


class PermissionSetResponse(BaseModel):
    """Response for GET /api/v1/roles/{role}/permissions."""

    model_config = ConfigDict(frozen=True)

    role: str
    permissions: list[str]

    @classmethod
    def from_permission_set(cls, permission_set: PermissionSet) -> "PermissionSetResponse":
        return cls(role=permission_set.role.value, permissions=permission_set.as_list())


class UserResponse(BaseModel):
    """Public view of a user record. Never includes the password hash."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    email: str
    role: str
    department: Optional[str] = None
    permissions: list[str]
    password_strength: Optional[int] = None
    created_at: str
    last_login: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            department=user.department,
            permissions=list(user.permissions),
            password_strength=user.password_strength,
            created_at=user.created_at or "",
            last_login=user.last_login,
        )


class RegisterResponse(BaseModel):
    """Response for POST /api/v1/auth/register."""

    model_config = ConfigDict(frozen=True)

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
    password_strength: PasswordStrengthResponse


class LoginResponse(BaseModel):
    """Response for POST /api/v1/auth/login."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
