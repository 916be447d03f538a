"""
Connection management for the relational store (SQLModel) and Redis.
"""
from typing import Iterator, Optional

from redis.asyncio import Redis
from sqlalchemy import Engine, text
from sqlmodel import Session, SQLModel, create_engine

from defi_tracker.config import get_settings

# Global connection instances
_engine: Optional[Engine] = None
_redis_client: Optional[Redis] = None


def get_engine() -> Engine:
    """Get or create the SQLAlchemy engine."""
    global _engine
    if _engine is None:
        settings = get_settings()
        connect_args = {}
        if settings.database_url.startswith("sqlite"):
            # The session is created in a worker thread and used on the event loop
            connect_args["check_same_thread"] = False
        _engine = create_engine(settings.database_url, echo=False, connect_args=connect_args)
    return _engine


def create_db_and_tables() -> None:
    """
    Create all tables registered on the SQLModel metadata.

    Production deployments with schema history should use a migration
    tool instead; this is enough for the SQLite default.
    """
    from defi_tracker import models  # noqa: F401  (registers tables)

    SQLModel.metadata.create_all(get_engine())


def ping_database() -> None:
    """Run a trivial query; raises if the database is unreachable."""
    with get_engine().connect() as conn:
        conn.execute(text("SELECT 1"))


def get_session() -> Iterator[Session]:
    """Yield a database session scoped to one request."""
    with Session(get_engine()) as session:
        yield session


async def get_redis_client() -> Redis:
    """Get or create Redis client."""
    global _redis_client
    if _redis_client is None:
        settings = get_settings()
        _redis_client = Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            decode_responses=True,
        )
    return _redis_client


async def close_connections() -> None:
    """Close Redis and dispose of the engine pool."""
    global _engine, _redis_client

    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None

    if _engine is not None:
        _engine.dispose()
        _engine = None
