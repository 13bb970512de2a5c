"""
minga_api.datastores.graph

Graph datastore client (Neo4j async driver).

Responsibilities:
- Own the process-wide driver and its bounded connection pool.
- Run each query in its own short-lived session, released even on failure.
- Provide a total health check and an idempotent close.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

from neo4j import AsyncDriver, AsyncGraphDatabase, basic_auth
from neo4j.exceptions import DriverError, Neo4jError

from minga_api.datastores.errors import ClientClosedError, QueryError
from minga_api.observability.logging import get_logger, preview

log = get_logger(__name__)

POOL_MAX_SIZE = 50
POOL_ACQUIRE_TIMEOUT_S = 2.0
CONNECT_TIMEOUT_S = 2.0

HEALTH_STATEMENT = "RETURN 1 AS health"


class GraphClient:
    def __init__(
        self,
        *,
        uri: str,
        user: str,
        password: str,
        database: str | None = None,
    ) -> None:
        self._uri = uri
        self._auth = basic_auth(user, password)
        self._database = database
        self._driver: AsyncDriver | None = None
        self._closed = False

    @property
    def driver(self) -> AsyncDriver:
        if self._closed:
            raise ClientClosedError("graph")
        if self._driver is None:
            # Creating the driver does not connect; connections are opened on first session use.
            self._driver = AsyncGraphDatabase.driver(
                self._uri,
                auth=self._auth,
                max_connection_pool_size=POOL_MAX_SIZE,
                connection_acquisition_timeout=POOL_ACQUIRE_TIMEOUT_S,
                connection_timeout=CONNECT_TIMEOUT_S,
            )
            log.info("graph_driver_created", uri=self._uri, max_size=POOL_MAX_SIZE)
        return self._driver

    async def execute_query(
        self,
        statement: str,
        parameters: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        driver = self.driver
        start = time.perf_counter()
        try:
            # Sessions are cheap and must not outlive one logical operation.
            async with driver.session(database=self._database) as session:
                result = await session.run(statement, dict(parameters or {}))
                records = await result.data()
        except (Neo4jError, DriverError, OSError) as e:
            log.error("graph_query_failed", statement=preview(statement), error=str(e))
            raise QueryError(preview(statement), e) from e

        log.info(
            "graph_query_executed",
            statement=preview(statement),
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            records=len(records),
        )
        return records

    async def health_check(self) -> bool:
        try:
            async with self.driver.session(database=self._database) as session:
                result = await session.run(HEALTH_STATEMENT)
                record = await result.single()
            return record is not None
        except Exception as e:
            log.warning("graph_health_check_failed", error=str(e))
            return False

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        driver, self._driver = self._driver, None
        if driver is not None:
            await driver.close()
            log.info("graph_driver_closed")
