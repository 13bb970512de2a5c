"""
tests.test_datastore_clients

Relational and graph client contracts: query errors, total health checks, idempotent close.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from neo4j.exceptions import ConstraintError, ServiceUnavailable
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from minga_api.datastores import Datastores
from minga_api.datastores.errors import ClientClosedError, QueryError
from minga_api.datastores.graph import GraphClient
from minga_api.datastores.relational import RelationalClient
from tests.conftest import CLOSED_PORT_BOLT_URI, CLOSED_PORT_PG_URL


class FakeResult:
    def __init__(self, records: list[dict]) -> None:
        self._records = records

    async def data(self) -> list[dict]:
        return self._records

    async def single(self):
        return self._records[0] if self._records else None


class FakeSession:
    def __init__(self, driver: FakeDriver) -> None:
        self._driver = driver

    async def __aenter__(self) -> FakeSession:
        self._driver.opened += 1
        return self

    async def __aexit__(self, *exc_info) -> None:
        self._driver.released += 1

    async def run(self, statement: str, parameters: dict | None = None) -> FakeResult:
        self._driver.statements.append((statement, parameters))
        if self._driver.error is not None:
            raise self._driver.error
        return FakeResult([{"n": 1}])


class FakeDriver:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.opened = 0
        self.released = 0
        self.closed = 0
        self.statements: list = []

    def session(self, database: str | None = None) -> FakeSession:
        return FakeSession(self)

    async def close(self) -> None:
        self.closed += 1


def _graph_with(driver: FakeDriver) -> GraphClient:
    client = GraphClient(uri=CLOSED_PORT_BOLT_URI, user="neo4j", password="password")
    client._driver = driver  # type: ignore[assignment]
    return client


# --- relational ---------------------------------------------------------------


@pytest.mark.asyncio
async def test_relational_query_returns_row_mappings(relational) -> None:
    rows = await relational.query("SELECT :x AS value", {"x": 5})

    assert [dict(r) for r in rows] == [{"value": 5}]


@pytest.mark.asyncio
async def test_relational_engine_is_created_once(relational) -> None:
    assert relational.engine is relational.engine


@pytest.mark.asyncio
async def test_relational_query_error_carries_driver_error(relational) -> None:
    with pytest.raises(QueryError) as exc:
        await relational.query("SELEC nonsense")

    assert isinstance(exc.value.original, SQLAlchemyError)
    assert exc.value.__cause__ is exc.value.original


@pytest.mark.asyncio
async def test_relational_health_check_up(relational) -> None:
    assert await relational.health_check() is True


@pytest.mark.asyncio
async def test_relational_health_check_unreachable_is_false() -> None:
    client = RelationalClient(CLOSED_PORT_PG_URL)
    try:
        assert await client.health_check() is False
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_relational_health_check_swallows_unexpected_errors(relational, monkeypatch) -> None:
    monkeypatch.setattr(relational, "query", AsyncMock(side_effect=RuntimeError("boom")))

    assert await relational.health_check() is False


@pytest.mark.asyncio
async def test_relational_close_is_idempotent(sqlite_url) -> None:
    client = RelationalClient(sqlite_url)
    assert await client.health_check() is True

    await client.close()
    await client.close()

    assert await client.health_check() is False
    with pytest.raises(ClientClosedError):
        await client.query("SELECT 1")


@pytest.mark.asyncio
async def test_relational_close_before_first_use(sqlite_url) -> None:
    client = RelationalClient(sqlite_url)
    await client.close()
    await client.close()


# --- graph --------------------------------------------------------------------


@pytest.mark.asyncio
async def test_graph_query_uses_fresh_session_per_call() -> None:
    driver = FakeDriver()
    client = _graph_with(driver)

    assert await client.execute_query("MATCH (n) RETURN n", {"limit": 1}) == [{"n": 1}]
    assert await client.execute_query("MATCH (n) RETURN n") == [{"n": 1}]

    assert driver.opened == driver.released == 2
    assert driver.statements[0] == ("MATCH (n) RETURN n", {"limit": 1})
    assert driver.statements[1] == ("MATCH (n) RETURN n", {})


@pytest.mark.asyncio
async def test_graph_query_releases_session_on_failure() -> None:
    original = ServiceUnavailable("connection refused")
    driver = FakeDriver(error=original)
    client = _graph_with(driver)

    with pytest.raises(QueryError) as exc:
        await client.execute_query("RETURN 1")

    assert exc.value.original is original
    assert driver.opened == driver.released == 1


@pytest.mark.asyncio
async def test_graph_health_check_releases_session() -> None:
    up = FakeDriver()
    down = FakeDriver(error=ServiceUnavailable("nope"))

    assert await _graph_with(up).health_check() is True
    assert await _graph_with(down).health_check() is False
    assert up.released == down.released == 1


@pytest.mark.asyncio
async def test_graph_health_check_unreachable_is_false() -> None:
    client = GraphClient(uri=CLOSED_PORT_BOLT_URI, user="neo4j", password="password")
    try:
        assert await client.health_check() is False
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_graph_close_is_idempotent() -> None:
    driver = FakeDriver()
    client = _graph_with(driver)

    await client.close()
    await client.close()

    assert driver.closed == 1
    assert await client.health_check() is False
    with pytest.raises(ClientClosedError):
        await client.execute_query("RETURN 1")


# --- registry -----------------------------------------------------------------


@pytest.mark.asyncio
async def test_registry_builds_one_client_per_store_and_closes_both(settings) -> None:
    datastores = Datastores.from_settings(settings)

    assert list(datastores.health_services()) == ["postgres", "neo4j"]
    assert await datastores.relational.health_check() is True

    await datastores.close()
    await datastores.close()

    assert await datastores.relational.health_check() is False
    assert await datastores.graph.health_check() is False


# --- errors -------------------------------------------------------------------


@pytest.mark.parametrize(
    ("original", "expected"),
    [
        (IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed")), True),
        (ConstraintError("Node already exists with label `User`"), True),
        (OperationalError("SELECT 1", {}, Exception("connection refused")), False),
        (ServiceUnavailable("connection refused"), False),
    ],
)
def test_query_error_flags_integrity_violations(original, expected) -> None:
    assert QueryError("stmt", original).is_integrity_violation is expected


@pytest.mark.asyncio
async def test_unique_violation_from_sqlite_is_flagged(relational) -> None:
    await relational.query("CREATE TABLE t (k TEXT UNIQUE)")
    await relational.query("INSERT INTO t (k) VALUES ('a')")

    with pytest.raises(QueryError) as exc:
        await relational.query("INSERT INTO t (k) VALUES ('a')")
    assert exc.value.is_integrity_violation
