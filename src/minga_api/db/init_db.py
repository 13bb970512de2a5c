"""
minga_api.db.init_db

Schema bootstrap for local development and tests.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from minga_api.db import models  # noqa: F401  # registers tables on Base.metadata
from minga_api.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create missing tables. Production schemas are managed outside this service.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
