"""
Rate limiting utilities backed by Redis.

Counters use INCR with EXPIRE on first hit (fixed window). If Redis is
unreachable the checks fail open and the error is logged.
"""
import logging
from typing import Optional

from redis.exceptions import RedisError

from defi_tracker.config import get_settings
from defi_tracker.database.connections import get_redis_client

logger = logging.getLogger(__name__)


async def check_rate_limit(
    ip: str,
    endpoint: str,
    limit: Optional[int] = None,
    window_seconds: Optional[int] = None,
) -> bool:
    """
    Check if a request should be rate limited.

    Key pattern: "ratelimit:{endpoint}:{ip}"

    Args:
        ip: Client IP address
        endpoint: Endpoint identifier (e.g., "/api/login")
        limit: Max requests allowed (defaults to config value)
        window_seconds: Time window in seconds (defaults to config value)

    Returns:
        True if request is allowed, False if rate limited
    """
    settings = get_settings()
    if limit is None:
        limit = settings.login_rate_limit_attempts
    if window_seconds is None:
        window_seconds = settings.login_rate_limit_window_seconds

    key = f"ratelimit:{endpoint}:{ip}"
    try:
        redis = await get_redis_client()
        current = await redis.incr(key)
        if current == 1:
            await redis.expire(key, window_seconds)
    except RedisError as e:
        logger.warning(f"Rate limit check skipped for {key}: {e}")
        return True

    return current <= limit


async def increment_failed_login(user_id: int) -> int:
    """
    Increment failed login attempts counter for a user.

    Key pattern: "failed_login:{user_id}"

    Returns:
        Current number of failed attempts (0 if Redis is unavailable)
    """
    settings = get_settings()
    key = f"failed_login:{user_id}"
    try:
        redis = await get_redis_client()
        count = await redis.incr(key)
        await redis.expire(key, settings.user_lockout_duration_minutes * 60)
    except RedisError as e:
        logger.warning(f"Failed-login counter unavailable for user {user_id}: {e}")
        return 0
    return count


async def check_user_lockout(user_id: int) -> bool:
    """
    Check if a user is currently locked out due to too many failed attempts.

    Key pattern: "lockout:{user_id}"
    """
    try:
        redis = await get_redis_client()
        return bool(await redis.exists(f"lockout:{user_id}"))
    except RedisError as e:
        logger.warning(f"Lockout check skipped for user {user_id}: {e}")
        return False


async def set_user_lockout(user_id: int, duration_minutes: int) -> None:
    """
    Lock out a user for a specified duration.

    Args:
        user_id: User identifier
        duration_minutes: Lockout duration in minutes
    """
    try:
        redis = await get_redis_client()
        await redis.setex(f"lockout:{user_id}", duration_minutes * 60, "1")
        logger.warning(f"User {user_id} locked out for {duration_minutes} minutes")
    except RedisError as e:
        logger.warning(f"Could not lock out user {user_id}: {e}")


async def reset_failed_attempts(user_id: int) -> None:
    """Reset failed login attempts counter after successful login."""
    try:
        redis = await get_redis_client()
        await redis.delete(f"failed_login:{user_id}")
    except RedisError as e:
        logger.warning(f"Could not reset failed logins for user {user_id}: {e}")
