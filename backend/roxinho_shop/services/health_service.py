import logging
import time

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from roxinho_shop.core.config import Settings

logger = logging.getLogger(__name__)


async def check_database(db: AsyncSession) -> dict:
    """Check database connectivity and measure latency."""
    try:
        start = time.monotonic()
        await db.execute(text("SELECT 1"))
        latency_ms = round((time.monotonic() - start) * 1000)
        return {"status": "up", "latency_ms": latency_ms}
    except Exception:
        logger.exception("Database health check failed")
        return {"status": "down"}


async def get_health(db: AsyncSession, settings: Settings) -> tuple[dict, int]:
    """Run health checks. Returns (response_body, status_code)."""
    checks = {"database": await check_database(db)}
    overall = "healthy" if checks["database"]["status"] == "up" else "unhealthy"
    status_code = 200 if overall == "healthy" else 503
    return {
        "status": overall,
        "version": settings.app_version,
        "checks": checks,
    }, status_code
