"""
Core module - Security, rate limiting, and logging setup.
"""
from defi_tracker.core.logging_config import configure_logging
from defi_tracker.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
    session_user_id,
)
from defi_tracker.core.rate_limit import (
    check_rate_limit,
    increment_failed_login,
    check_user_lockout,
    set_user_lockout,
    reset_failed_attempts,
)

__all__ = [
    "configure_logging",
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_token",
    "session_user_id",
    "check_rate_limit",
    "increment_failed_login",
    "check_user_lockout",
    "set_user_lockout",
    "reset_failed_attempts",
]
