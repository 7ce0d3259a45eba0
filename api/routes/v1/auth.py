"""
api/routes/v1/auth.py -- Registration and authentication REST endpoints.

Routes:
  POST /api/v1/auth/register   -- create an identity; sets JWT cookie
  POST /api/v1/auth/login      -- password login; sets JWT cookie
  POST /api/v1/auth/logout     -- clears cookie; 200
  GET  /api/v1/auth/me         -- current user info (requires auth)

Security:
  POST /register and POST /login are rate-limited per IP.
  authenticate_user() provides timing equalization -- use it, never inline.
  Cache-Control: no-store on every response that carries a token.
  Register returns the same "conflict" error whether the username or the
  email is taken.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import (
    ErrorDetail,
    LoginRequest,
    LoginResponse,
    PasswordStrengthResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)
from auth.dependencies import get_current_user
from auth.models import User
from auth.registration import DuplicateIdentityError, WeakCredentialError, register_user
from auth.store import UserStore
from auth.tokens import authenticate_user, create_access_token, set_auth_cookie
from core.config import get_settings

_settings = get_settings()

# Auth policy:
# - POST /api/v1/auth/register: public -- self-registration, unless disabled in settings
# - POST /api/v1/auth/login:    public -- login endpoint must be unauthenticated
# - POST /api/v1/auth/logout:   public -- clearing a cookie needs no prior auth
# - GET  /api/v1/auth/me:       requires auth (get_current_user)
router = APIRouter()


@limiter.limit(_settings.register_rate_limit)
@router.post("/auth/register", response_model=RegisterResponse, status_code=201)
def register(request: Request, body: RegisterRequest) -> JSONResponse:
    """Create a new identity with role-derived permissions.

    Rejects passwords scoring below 40 with 400 weak_password; the error
    detail lists the evaluator's feedback so the form can show what to fix.
    """
    if not _settings.self_registration_enabled:
        raise HTTPException(
            status_code=403,
            detail={"code": "registration_disabled", "message": "Self-registration is disabled."},
        )

    user_store: UserStore = request.app.state.user_store
    try:
        registration = register_user(
            user_store,
            username=body.username,
            email=body.email,
            password=body.password,
            role=body.role.value if body.role is not None else None,
            department=body.department,
        )
    except DuplicateIdentityError as exc:
        raise HTTPException(
            status_code=409,
            detail={"code": "conflict", "message": "Username or email already exists."},
        ) from exc
    except WeakCredentialError as exc:
        raise HTTPException(
            status_code=400,
            detail=ErrorDetail(
                code="weak_password",
                message=str(exc),
                detail="; ".join(exc.result.feedback),
            ).model_dump(),
        ) from exc

    user = registration.user
    token = create_access_token(user.id, user.username, user.role, user.permissions)
    resp = JSONResponse(
        status_code=201,
        content=RegisterResponse(
            user=UserResponse.from_user(user),
            access_token=token,
            password_strength=PasswordStrengthResponse.from_result(registration.password_strength),
        ).model_dump(),
    )
    set_auth_cookie(resp, token)
    resp.headers["Cache-Control"] = "no-store"
    return resp


@limiter.limit(_settings.login_rate_limit)
@router.post("/auth/login", response_model=LoginResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with username and password; set JWT cookie.

    Returns the same generic error for wrong username and wrong password
    ("bad_credentials") to avoid leaking username existence information.
    """
    user_store: UserStore = request.app.state.user_store
    user = authenticate_user(user_store, body.username, body.password)
    if user is None:
        resp = JSONResponse(
            status_code=401,
            content={"error": {"code": "bad_credentials", "message": "Invalid username or password."}},
        )
        resp.headers["Cache-Control"] = "no-store"
        return resp

    user_store.update_last_login(user.id)
    refreshed = user_store.get_by_id(user.id) or user

    token = create_access_token(user.id, user.username, user.role, user.permissions)
    resp = JSONResponse(
        status_code=200,
        content=LoginResponse(
            access_token=token,
            expires_in=_settings.token_expire_seconds,
            user=UserResponse.from_user(refreshed),
        ).model_dump(),
    )
    set_auth_cookie(resp, token)
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/auth/logout")
async def logout() -> JSONResponse:
    """Clear the JWT cookie and end the session."""
    resp = JSONResponse(content={"message": "Logged out."})
    resp.delete_cookie("access_token")
    return resp


@router.get("/auth/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Return the current user, including role-derived permissions."""
    return UserResponse.from_user(current_user)
