"""
Liveness and readiness probes.
"""
from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool

from defi_tracker.database.connections import get_redis_client, ping_database

router = APIRouter(tags=["Health"])

HEALTHY = "healthy"


async def _probe_database() -> None:
    await run_in_threadpool(ping_database)


async def _probe_redis() -> None:
    redis = await get_redis_client()
    await redis.ping()


@router.get("/health", summary="Liveness probe")
async def health_check():
    """Returns 200 as long as the process serves requests."""
    return {"status": HEALTHY}


@router.get("/health/ready", summary="Readiness probe")
async def readiness_check():
    """
    Probe the relational store and Redis.

    Always answers 200; `status` is "degraded" when any probe fails and the
    failing entry in `checks` carries the error text.
    """
    checks = {"api": HEALTHY}
    for name, probe in (("database", _probe_database), ("redis", _probe_redis)):
        try:
            await probe()
            checks[name] = HEALTHY
        except Exception as e:
            checks[name] = f"unhealthy: {e}"

    return {
        "status": HEALTHY if all(v == HEALTHY for v in checks.values()) else "degraded",
        "checks": checks,
    }
