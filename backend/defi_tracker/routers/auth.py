"""
Authentication router for registration, login and logout.

The session is a signed JWT carried in an HttpOnly cookie.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool

from defi_tracker.config import get_settings
from defi_tracker.core.rate_limit import check_rate_limit
from defi_tracker.core.security import create_access_token
from defi_tracker.database.connections import get_session
from defi_tracker.dependencies.auth import CurrentUser
from defi_tracker.models.user import User
from defi_tracker.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserInfoResponse,
)
from defi_tracker.services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["Authentication"])


def get_auth_service(session: Annotated[Session, Depends(get_session)]) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(session)


def get_client_ip(request: Request) -> str:
    """Extract client IP from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def set_session_cookie(response: Response, user: User) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_access_token(user.id),
        max_age=settings.jwt_access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def _auth_response(message: str, user: User) -> AuthResponse:
    return AuthResponse(message=message, user=UserInfoResponse.model_validate(user, from_attributes=True))


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: Request,
    response: Response,
    body: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user account and start a session.

    - **username**: 3 to 50 characters (must be unique)
    - **password**: Password (minimum 8 characters)
    """
    client_ip = get_client_ip(request)
    if not await check_rate_limit(client_ip, "/api/register", limit=10, window_seconds=60):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many registration attempts. Please try again later.",
        )

    try:
        user = await run_in_threadpool(auth_service.register_user, body)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    set_session_cookie(response, user)
    return _auth_response("Registration successful", user)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login and start a session",
)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate with username and password; sets the session cookie.

    **Rate limited** per IP, with account lockout after repeated failures.
    """
    client_ip = get_client_ip(request)
    if not await check_rate_limit(client_ip, "/api/login"):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts. Please try again later.",
        )

    try:
        user = await auth_service.login(body)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )

    set_session_cookie(response, user)
    return _auth_response("Login successful", user)


@router.post(
    "/logout",
    summary="End the session",
)
async def logout(response: Response):
    """Clear the session cookie. Succeeds whether or not a session exists."""
    settings = get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return {"message": "Logged out"}


@router.get(
    "/user",
    response_model=UserInfoResponse,
    summary="Get current user info",
)
async def get_current_user_info(current_user: CurrentUser):
    """Get information about the currently authenticated user."""
    return UserInfoResponse.model_validate(current_user, from_attributes=True)
