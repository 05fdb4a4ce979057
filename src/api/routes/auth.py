"""Authentication routes.

This module handles HTTP endpoints for user registration and login, and the
bearer-token dependency guarding the purchase request routes.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.dependencies import SettingsDep, UserManagerDep
from core.exceptions import UnauthenticatedError, ValidationError
from core.security import verify_token
from schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserPublic

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

# Missing credentials are reported by get_current_user_id, not by HTTPBearer
security = HTTPBearer(auto_error=False)


def get_current_user_id(
    settings: SettingsDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> int:
    """Authenticate the request from its ``Authorization: Bearer`` header.

    Args:
        settings: Runtime settings used to verify the token.
        credentials: HTTP Bearer token credentials, if present.

    Returns:
        Id of the authenticated user.

    Raises:
        UnauthenticatedError: If no bearer token was sent (401).
        InvalidTokenError: If the token fails verification (403).
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Authentication required.")
    claims = verify_token(credentials.credentials, settings)
    return int(claims["sub"])


CurrentUserIdDep = Annotated[int, Depends(get_current_user_id)]


@router.post(
    "/register",
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register(req: RegisterRequest, user_manager: UserManagerDep) -> UserPublic:
    """Register a new user.

    Args:
        req: Registration request with username, email and password.
        user_manager: Injected UserManager instance.

    Returns:
        Public projection of the created user.

    Raises:
        ValidationError: If a field is missing (400).
        ConflictError: If the email or username is taken (409).
    """
    if not req.username or not req.email or not req.password:
        raise ValidationError("Username, email and password are required.")

    user = user_manager.register(
        username=req.username, email=req.email, password=req.password
    )
    return UserPublic.model_validate(user)


@router.post("/login", response_model=LoginResponse, summary="Log in")
def login(
    req: LoginRequest,
    user_manager: UserManagerDep,
    settings: SettingsDep,
) -> LoginResponse:
    """Login with email and password.

    Returns:
        LoginResponse with a signed access token.

    Raises:
        ValidationError: If a field is missing (400).
        UnauthenticatedError: If the credentials are invalid (401).
    """
    if not req.email or not req.password:
        raise ValidationError("Email and password are required.")

    access_token = user_manager.login(req.email, req.password, settings)
    return LoginResponse(access_token=access_token)
