"""
Database module - relational store and Redis connections.
"""
from defi_tracker.database.connections import (
    get_engine,
    get_session,
    get_redis_client,
    create_db_and_tables,
    ping_database,
    close_connections,
)

__all__ = [
    "get_engine",
    "get_session",
    "get_redis_client",
    "create_db_and_tables",
    "ping_database",
    "close_connections",
]
