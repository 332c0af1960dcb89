from datetime import datetime
from typing import Literal, Optional

from .common import CamelModel


class DatabaseHealth(CamelModel):
    status: Literal["up", "down"]
    latency_ms: Optional[float] = None
    error: Optional[str] = None


class ServicesHealth(CamelModel):
    database: DatabaseHealth


class HealthOut(CamelModel):
    status: Literal["healthy", "degraded", "unhealthy"]
    timestamp: datetime
    version: str
    environment: str
    services: ServicesHealth
