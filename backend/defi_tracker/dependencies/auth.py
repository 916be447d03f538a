"""
Session-cookie authentication for protected routes.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlmodel import Session

from defi_tracker.config import get_settings
from defi_tracker.core.security import JWTError, session_user_id
from defi_tracker.database.connections import get_session
from defi_tracker.models.user import User
from defi_tracker.services.auth_service import AuthService

NOT_AUTHENTICATED = "Not authenticated"


def get_current_user(
    request: Request,
    session: Annotated[Session, Depends(get_session)],
) -> User:
    """
    Resolve the `session` cookie to a User row.

    Raises:
        HTTPException 401: If the cookie is missing, invalid or expired,
            or names a user that no longer exists
    """
    token = request.cookies.get(get_settings().session_cookie_name)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NOT_AUTHENTICATED)

    try:
        user_id = session_user_id(token)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NOT_AUTHENTICATED)

    user = AuthService(session).get_user_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NOT_AUTHENTICATED)
    return user


# Type alias for cleaner route signatures
CurrentUser = Annotated[User, Depends(get_current_user)]
