"""
minga_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for both datastores and the API.
- Hide secrets (database passwords) from repr/logging.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Env-driven configuration, e.g. `MINGA_POSTGRES_HOST`, `MINGA_NEO4J_URI`.
    Defaults are safe for local development.
    """

    model_config = SettingsConfigDict(env_prefix="MINGA_", case_sensitive=False)

    # `dev`/`test` create the relational schema on startup.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "minga-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Relational store
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: str = Field(default="postgres", repr=False)
    postgres_db: str = "minga"
    # Full SQLAlchemy URL; overrides the postgres_* parts when set.
    database_url: str | None = Field(default=None, repr=False)

    # Graph store
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = Field(default="password", repr=False)
    neo4j_database: str | None = None

    @property
    def relational_url(self) -> str | URL:
        if self.database_url:
            return self.database_url
        # URL.create escapes credentials that contain reserved characters.
        return URL.create(
            "postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Pool sizes and timeouts are constants of the datastore clients, not settings.
