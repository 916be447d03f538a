"""
Authentication service for user management and login.
"""
import logging
from typing import Optional

from sqlmodel import Session, select
from starlette.concurrency import run_in_threadpool

from defi_tracker.config import get_settings
from defi_tracker.core.rate_limit import (
    check_user_lockout,
    increment_failed_login,
    reset_failed_attempts,
    set_user_lockout,
)
from defi_tracker.core.security import hash_password, verify_password
from defi_tracker.models.user import User
from defi_tracker.schemas.auth import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, session: Session):
        """Initialize with a database session."""
        self.session = session
        self.settings = get_settings()

    def register_user(self, request: RegisterRequest) -> User:
        """
        Register a new user.

        Args:
            request: Registration request with username and password

        Returns:
            The created User row

        Raises:
            ValueError: If the username is already taken
        """
        if self.get_user_by_username(request.username) is not None:
            raise ValueError("Username already exists")

        user = User(
            username=request.username,
            hashed_password=hash_password(request.password),
        )
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)

        logger.info(f"Registered user {user.id} ({user.username})")
        return user

    async def login(self, request: LoginRequest) -> User:
        """
        Check credentials and return the user.

        Args:
            request: Login request with username and password

        Returns:
            The authenticated User

        Raises:
            ValueError: If credentials are invalid or account is locked
        """
        user = await run_in_threadpool(self.get_user_by_username, request.username)

        if user is None:
            raise ValueError("Invalid username or password")

        if await check_user_lockout(user.id):
            raise ValueError("Account temporarily locked due to too many failed attempts")

        if not await run_in_threadpool(verify_password, request.password, user.hashed_password):
            failed_count = await increment_failed_login(user.id)

            if failed_count >= self.settings.user_lockout_threshold:
                await set_user_lockout(
                    user.id,
                    self.settings.user_lockout_duration_minutes,
                )

            raise ValueError("Invalid username or password")

        await reset_failed_attempts(user.id)
        return user

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        statement = select(User).where(User.username == username)
        return self.session.exec(statement).first()
