"""
minga_api.datastores.relational

Relational datastore client (SQLAlchemy async).

Responsibilities:
- Own the process-wide async engine and its bounded connection pool.
- Execute parameterized statements, logging duration and row count.
- Provide a total health check and an idempotent close.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.engine import URL, RowMapping, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool
from sqlalchemy.sql.base import Executable

from minga_api.datastores.errors import ClientClosedError, QueryError
from minga_api.observability.logging import get_logger, preview

log = get_logger(__name__)

# Pool policy is fixed per process, never per call.
POOL_MAX_SIZE = 20
# Max connection age, checked on checkout; SQLAlchemy has no idle-time eviction.
POOL_RECYCLE_S = 30
POOL_ACQUIRE_TIMEOUT_S = 2.0
CONNECT_TIMEOUT_S = 2.0

HEALTH_STATEMENT = "SELECT 1 AS health"


class RelationalClient:
    def __init__(self, url: str | URL) -> None:
        self._url = make_url(url)
        self._engine: AsyncEngine | None = None
        self._closed = False

    @property
    def engine(self) -> AsyncEngine:
        if self._closed:
            raise ClientClosedError("relational")
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> AsyncEngine:
        connect_args: dict[str, Any] = {}
        if self._url.get_backend_name() == "postgresql":
            connect_args["timeout"] = CONNECT_TIMEOUT_S

        engine = create_async_engine(
            self._url,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=POOL_MAX_SIZE,
            max_overflow=0,
            pool_timeout=POOL_ACQUIRE_TIMEOUT_S,
            pool_recycle=POOL_RECYCLE_S,
            # Stale connections (dropped by the server while idle) are replaced on checkout.
            pool_pre_ping=True,
            connect_args=connect_args,
        )

        @event.listens_for(engine.sync_engine.pool, "invalidate")
        def _on_invalidate(dbapi_connection, connection_record, exception) -> None:  # noqa: ANN001
            log.error("relational_pool_connection_invalidated", error=repr(exception))

        log.info(
            "relational_pool_created",
            backend=self._url.get_backend_name(),
            host=self._url.host,
            database=self._url.database,
            max_size=POOL_MAX_SIZE,
        )
        return engine

    async def query(
        self,
        statement: Executable | str,
        parameters: Mapping[str, Any] | None = None,
    ) -> list[RowMapping]:
        stmt = text(statement) if isinstance(statement, str) else statement
        engine = self.engine
        start = time.perf_counter()
        try:
            async with engine.begin() as conn:
                if parameters:
                    result = await conn.execute(stmt, dict(parameters))
                else:
                    result = await conn.execute(stmt)
                rows = list(result.mappings().all()) if result.returns_rows else []
                row_count = len(rows) if result.returns_rows else result.rowcount
        except (SQLAlchemyError, OSError) as e:
            log.error("relational_query_failed", statement=preview(stmt), error=str(e))
            raise QueryError(preview(stmt), e) from e

        log.info(
            "relational_query_executed",
            statement=preview(stmt),
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            rows=row_count,
        )
        return rows

    async def health_check(self) -> bool:
        try:
            rows = await self.query(HEALTH_STATEMENT)
            return len(rows) > 0
        except Exception as e:
            log.warning("relational_health_check_failed", error=str(e))
            return False

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        engine, self._engine = self._engine, None
        if engine is not None:
            await engine.dispose()
            log.info("relational_pool_closed")


# --- Module Notes -----------------------------------------------------------
# The engine works with any SQLAlchemy async backend; PostgreSQL (asyncpg) in
# production, SQLite (aiosqlite) for local runs and tests.
