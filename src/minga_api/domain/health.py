"""
minga_api.domain.health

Health snapshot types.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Protocol

from pydantic import BaseModel


class ServiceState(enum.StrEnum):
    up = "up"
    down = "down"


class OverallStatus(enum.StrEnum):
    healthy = "healthy"
    degraded = "degraded"
    unhealthy = "unhealthy"


class ServiceHealth(BaseModel):
    status: ServiceState
    message: str | None = None


class HealthStatus(BaseModel):
    status: OverallStatus
    timestamp: datetime
    services: dict[str, ServiceHealth]


class HealthCheckable(Protocol):
    """
    A monitored dependency. `health_check` is total: it resolves to a bool and never raises.
    """

    async def health_check(self) -> bool: ...
