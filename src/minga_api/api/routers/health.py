"""
minga_api.api.routers.health

Health endpoints.

Responsibilities:
- Provide a liveness probe (`/healthz`) that touches no datastore.
- Provide the composite datastore health report (`/api/health`).
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE

from minga_api.api.deps import health_check_use_case
from minga_api.domain.health import OverallStatus
from minga_api.observability.logging import get_logger
from minga_api.services.health import HealthCheckUseCase

router = APIRouter()
log = get_logger(__name__)


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/api/health")
async def health(use_case: HealthCheckUseCase = Depends(health_check_use_case)) -> JSONResponse:
    try:
        report = await use_case.execute()
    except Exception as e:
        log.exception("health_check_error")
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": OverallStatus.unhealthy.value,
                "timestamp": datetime.now(UTC).isoformat(),
                "error": str(e),
            },
        )

    # Degraded still serves traffic; only a full outage fails the probe.
    status_code = (
        HTTP_503_SERVICE_UNAVAILABLE
        if report.status is OverallStatus.unhealthy
        else HTTP_200_OK
    )
    return JSONResponse(
        status_code=status_code,
        content=report.model_dump(mode="json", exclude_none=True),
    )
