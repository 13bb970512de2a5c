"""
minga_api.services.health

Health aggregation and the health-check use-case.

Responsibilities:
- Probe every monitored service concurrently, isolating each probe's failure.
- Reduce per-service states to one overall status.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime

from minga_api.domain.health import (
    HealthCheckable,
    HealthStatus,
    OverallStatus,
    ServiceHealth,
    ServiceState,
)
from minga_api.observability.logging import get_logger

log = get_logger(__name__)

CHECK_FAILED_MESSAGE = "Health check query failed"


def reduce_status(states: Iterable[ServiceState]) -> OverallStatus:
    """
    healthy iff every service is up, unhealthy iff none is, degraded otherwise.
    """

    states = list(states)
    up = sum(1 for s in states if s is ServiceState.up)
    if up == len(states):
        return OverallStatus.healthy
    if up == 0:
        return OverallStatus.unhealthy
    return OverallStatus.degraded


class HealthAggregator:
    def __init__(self, services: Mapping[str, HealthCheckable]) -> None:
        if not services:
            raise ValueError("HealthAggregator needs at least one service")
        self._services = dict(services)

    async def check(self) -> HealthStatus:
        timestamp = datetime.now(UTC)
        names = list(self._services)
        results = await asyncio.gather(*(self._probe(n, self._services[n]) for n in names))
        services = dict(zip(names, results, strict=True))
        status = reduce_status(s.status for s in results)
        if status is not OverallStatus.healthy:
            log.warning(
                "health_degraded",
                status=status.value,
                down=[n for n, s in services.items() if s.status is ServiceState.down],
            )
        return HealthStatus(status=status, timestamp=timestamp, services=services)

    @staticmethod
    async def _probe(name: str, service: HealthCheckable) -> ServiceHealth:
        try:
            healthy = await service.health_check()
        except Exception as e:
            # health_check must not raise; treat a violation as this service being down.
            log.error("health_check_raised", service=name, error=repr(e))
            return ServiceHealth(status=ServiceState.down, message=str(e) or type(e).__name__)
        if healthy:
            return ServiceHealth(status=ServiceState.up)
        return ServiceHealth(status=ServiceState.down, message=CHECK_FAILED_MESSAGE)


class HealthCheckUseCase:
    def __init__(self, aggregator: HealthAggregator) -> None:
        self._aggregator = aggregator

    async def execute(self) -> HealthStatus:
        return await self._aggregator.check()
