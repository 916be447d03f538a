"""
Dependencies for dependency injection in routes.
"""
from defi_tracker.dependencies.auth import CurrentUser, get_current_user

__all__ = [
    "CurrentUser",
    "get_current_user",
]
