"""Authentication routes.

This module handles HTTP endpoints for registration, login, logout and
session retrieval, and provides the dependencies other routes use to
resolve the caller into a principal.
"""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional, Union

import pytz
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from clubhub.api.errors import to_http_exception
from clubhub.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ADMIN_TOKEN,
    JWT_ALGORITHM,
    JWT_SECRET_KEY,
)
from clubhub.core.auth_state import SIGNED_IN, SIGNED_OUT, get_auth_state
from clubhub.core.dependencies import IdentityManagerDep
from clubhub.core.exceptions import ClubHubError
from clubhub.schemas.identity import (
    AdminPrincipal,
    AdminRegisterRequest,
    CurrentPrincipalResponse,
    LoginRequest,
    LoginResponse,
    ProfilePrincipal,
    RegisterRequest,
)
from clubhub.utils.converters import admin_to_principal, profile_to_principal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

# HTTP Bearer token security; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)

_INVALID_CREDENTIALS = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid authentication credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token.

    Args:
        data: Data to encode in the token.
        expires_delta: Optional expiration time delta.

    Returns:
        Encoded JWT token string.
    """
    to_encode = data.copy()
    expire = datetime.now(pytz.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire, "jti": str(uuid.uuid4())})
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """Verify JWT token from Authorization header.

    Args:
        credentials: HTTP Bearer token credentials.

    Returns:
        Decoded token payload.

    Raises:
        HTTPException: If token is missing, invalid, expired or revoked.
    """
    if credentials is None:
        raise _INVALID_CREDENTIALS
    try:
        payload = jwt.decode(
            credentials.credentials, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM]
        )
    except JWTError:
        raise _INVALID_CREDENTIALS
    if any(payload.get(claim) is None for claim in ("sub", "jti", "exp")):
        raise _INVALID_CREDENTIALS
    if get_auth_state().is_revoked(payload.get("jti")):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session has been signed out",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


def get_current_principal(
    identity_manager: IdentityManagerDep,
    token_payload: dict = Depends(verify_token),
) -> Union[AdminPrincipal, ProfilePrincipal]:
    """Resolve the caller into an admin or profile principal.

    Raises:
        HTTPException: 401 if the account has neither record.
    """
    principal = identity_manager.resolve_principal(token_payload["sub"])
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No admin or profile record for this account",
        )
    return principal


def require_admin(
    principal: Union[AdminPrincipal, ProfilePrincipal] = Depends(get_current_principal),
) -> AdminPrincipal:
    if not isinstance(principal, AdminPrincipal):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required.",
        )
    return principal


def require_profile(
    principal: Union[AdminPrincipal, ProfilePrincipal] = Depends(get_current_principal),
) -> ProfilePrincipal:
    if not isinstance(principal, ProfilePrincipal):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Student profile required.",
        )
    return principal


def _issue_token(user_id: str) -> str:
    token = create_access_token({"sub": user_id})
    claims = jwt.get_unverified_claims(token)
    get_auth_state().emit(SIGNED_IN, user_id, claims["jti"], claims["exp"])
    return token


@router.post("/register", response_model=LoginResponse, summary="Register a student")
def register(req: RegisterRequest, identity_manager: IdentityManagerDep) -> LoginResponse:
    """Register a student account and sign it in.

    Args:
        req: Registration request with email, password and full name.
        identity_manager: Injected IdentityManager instance.

    Returns:
        LoginResponse with the token and the new profile principal.
    """
    try:
        profile = identity_manager.register_profile(req.email, req.password, req.full_name)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return LoginResponse(
        token=_issue_token(profile.id), principal=profile_to_principal(profile)
    )


@router.post(
    "/admin/register", response_model=LoginResponse, summary="Register an administrator"
)
def register_admin(
    req: AdminRegisterRequest, identity_manager: IdentityManagerDep
) -> LoginResponse:
    """Register a school administrator.

    When ADMIN_TOKEN is configured the request must carry the same token.
    """
    if ADMIN_TOKEN and req.admin_token != ADMIN_TOKEN:
        logger.warning("Admin registration rejected for %s: bad admin token", req.email)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin token",
        )
    try:
        admin = identity_manager.register_admin(
            req.email, req.password, req.full_name, req.school_name
        )
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return LoginResponse(
        token=_issue_token(admin.user_id), principal=admin_to_principal(admin)
    )


@router.post("/login", response_model=LoginResponse, summary="Sign in")
def login(req: LoginRequest, identity_manager: IdentityManagerDep) -> LoginResponse:
    """Login with email and password.

    Returns:
        LoginResponse with the JWT and the resolved principal.
    """
    try:
        account = identity_manager.authenticate(req.email, req.password)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    principal = identity_manager.resolve_principal(account.user_id)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This account has no profile.",
        )
    return LoginResponse(token=_issue_token(account.user_id), principal=principal)


@router.post("/admin/login", response_model=LoginResponse, summary="Administrator sign in")
def admin_login(req: LoginRequest, identity_manager: IdentityManagerDep) -> LoginResponse:
    """Login that only succeeds for administrator accounts."""
    try:
        account = identity_manager.authenticate(req.email, req.password)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    principal = identity_manager.resolve_principal(account.user_id)
    if not isinstance(principal, AdminPrincipal):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This account is not registered as an administrator.",
        )
    return LoginResponse(token=_issue_token(account.user_id), principal=principal)


@router.post("/logout", summary="Sign out")
def logout(token_payload: dict = Depends(verify_token)) -> dict:
    """Revoke the presented token for the rest of the process lifetime."""
    get_auth_state().emit(
        SIGNED_OUT, token_payload["sub"], token_payload["jti"], token_payload["exp"]
    )
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me", response_model=CurrentPrincipalResponse, summary="Current principal")
def get_current_principal_info(
    identity_manager: IdentityManagerDep,
    token_payload: dict = Depends(verify_token),
) -> CurrentPrincipalResponse:
    """Return the resolved principal, or null when the account has no record yet."""
    return CurrentPrincipalResponse(
        principal=identity_manager.resolve_principal(token_payload["sub"])
    )
