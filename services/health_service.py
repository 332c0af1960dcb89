import time
from typing import Tuple

from core.logging import get_logger
from core.settings import settings
from db.base import db
from schemas.health import DatabaseHealth, HealthOut, ServicesHealth
from utils.dates import utcnow

log = get_logger("health")


def check_database() -> DatabaseHealth:
    started = time.perf_counter()
    try:
        db.execute_sql("SELECT 1")
    except Exception as e:
        log.error("health_database_down", error=str(e))
        return DatabaseHealth(status="down", error="Database connection failed")
    return DatabaseHealth(status="up", latency_ms=round((time.perf_counter() - started) * 1000, 2))


class HealthService:

    @staticmethod
    async def check() -> Tuple[HealthOut, int]:
        """Overall health and the HTTP status to answer with."""
        database = check_database()

        if database.status == "up":
            status, code = "healthy", 200
        elif settings.is_production:
            status, code = "unhealthy", 503
        else:
            status, code = "degraded", 200

        return HealthOut(
            status=status,
            timestamp=utcnow(),
            version=settings.version,
            environment=settings.environment,
            services=ServicesHealth(database=database),
        ), code
