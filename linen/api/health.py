"""
Health endpoint for observability.

Returns structured health info: uptime, version, database connectivity and
row counts for the rotation and recap tables. Requires no authentication.
"""

import logging
import time
from typing import Any, Dict

from fastapi import APIRouter

logger = logging.getLogger(__name__)

# Start time for uptime calculation
_start_time: float = time.monotonic()


def set_start_time() -> None:
    """Reset the start time (called during app startup)."""
    global _start_time
    _start_time = time.monotonic()


def get_uptime_seconds() -> float:
    """Return seconds since the process started."""
    return time.monotonic() - _start_time


async def check_database_health() -> bool:
    """Check database connectivity.

    Returns True if database is reachable, False otherwise.
    """
    try:
        from ..core.database import health_check

        return await health_check()
    except Exception as e:
        logger.warning("Database health check failed: %s", e)
        return False


async def get_content_counts() -> Dict[str, int]:
    from ..core.database import get_table_counts

    return await get_table_counts()


def _get_version() -> str:
    """Get the application version string."""
    try:
        from ..version import __version__

        return __version__
    except Exception:
        return "unknown"


def create_health_router() -> APIRouter:
    """Create and return the health check router.

    This is a factory so the router can be included in the main app
    or used standalone in tests.
    """
    router = APIRouter()

    @router.get("/health")
    async def health_endpoint() -> Dict[str, Any]:
        """Lightweight health check endpoint (no auth required)."""
        db_healthy = await check_database_health()

        payload: Dict[str, Any] = {
            "status": "healthy" if db_healthy else "degraded",
            "service": "linen-recap",
            "version": _get_version(),
            "uptime_seconds": round(get_uptime_seconds(), 2),
            "database": "connected" if db_healthy else "disconnected",
        }
        if db_healthy:
            payload["tables"] = await get_content_counts()
        return payload

    return router
