"""
minga_api.datastores

Datastore clients and the process-wide registry that owns them.

Responsibilities:
- Build exactly one client per datastore from settings at process start.
- Expose the clients by reference to repositories and the health aggregator.
- Tear every client down at shutdown, even if one of them fails to close.
"""

from __future__ import annotations

from dataclasses import dataclass

from minga_api.datastores.graph import GraphClient
from minga_api.datastores.relational import RelationalClient
from minga_api.observability.logging import get_logger
from minga_api.settings import Settings

log = get_logger(__name__)


@dataclass(slots=True)
class Datastores:
    relational: RelationalClient
    graph: GraphClient

    @classmethod
    def from_settings(cls, settings: Settings) -> Datastores:
        return cls(
            relational=RelationalClient(settings.relational_url),
            graph=GraphClient(
                uri=settings.neo4j_uri,
                user=settings.neo4j_user,
                password=settings.neo4j_password,
                database=settings.neo4j_database,
            ),
        )

    def health_services(self) -> dict[str, RelationalClient | GraphClient]:
        # Keys are the service names reported by the health endpoint.
        return {"postgres": self.relational, "neo4j": self.graph}

    async def close(self) -> None:
        for name, client in self.health_services().items():
            try:
                await client.close()
            except Exception:
                log.exception("datastore_close_failed", datastore=name)


__all__ = ["Datastores", "GraphClient", "RelationalClient"]
