"""
api/routes/v1/password.py -- Password strength and role permission lookups.

Routes:
  POST /api/v1/password/check-strength   -- score a candidate password (public)
  GET  /api/v1/roles/{role}/permissions  -- capability tokens for a role (public)

Both are read-only wrappers over core/. Nothing is stored and the password is
never logged.
"""

from fastapi import APIRouter, Request

from api.limiter import limiter
from api.models import PasswordCheckRequest, PasswordStrengthResponse, PermissionSetResponse, RoleEnum
from core.config import get_settings
from core.permissions import derive_permissions
from core.strength import evaluate

_settings = get_settings()

# Auth policy:
# - POST /api/v1/password/check-strength: public -- the registration form calls it before an account exists
# - GET  /api/v1/roles/{role}/permissions: public -- the permission table is not secret
router = APIRouter()


@limiter.limit(_settings.check_rate_limit)
@router.post("/password/check-strength", response_model=PasswordStrengthResponse)
def check_strength(request: Request, body: PasswordCheckRequest) -> PasswordStrengthResponse:
    """Return score, strength label, feedback and criteria for a password."""
    return PasswordStrengthResponse.from_result(evaluate(body.password))


@router.get("/roles/{role}/permissions", response_model=PermissionSetResponse)
def role_permissions(role: RoleEnum) -> PermissionSetResponse:
    """Return the fixed permission set for role.

    The path parameter is validated against the three known roles (422
    otherwise). The resolver's unknown-role fallback only applies to direct
    Python callers.
    """
    return PermissionSetResponse.from_permission_set(derive_permissions(role.value))
