"""
minga_api.db.repositories.users

Repository for `User` entities over the relational client.

Responsibilities:
- Map the four user capabilities onto SQL statements.
- Decode rows into `User` entities through a schema check.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from sqlalchemy import desc, insert, select

from minga_api.datastores.errors import RowDecodeError
from minga_api.datastores.relational import RelationalClient
from minga_api.db.models import UserRecord, utcnow
from minga_api.domain.users import CreateUserDto, User

_users = UserRecord.__table__


class UserRepo:
    def __init__(self, client: RelationalClient) -> None:
        self._client = client

    async def find_by_id(self, user_id: str) -> User | None:
        rows = await self._client.query(select(_users).where(_users.c.id == user_id))
        return self._decode(rows[0]) if rows else None

    async def find_by_email(self, email: str) -> User | None:
        rows = await self._client.query(select(_users).where(_users.c.email == email))
        return self._decode(rows[0]) if rows else None

    async def create(self, data: CreateUserDto) -> User:
        # No uniqueness pre-check here; that policy belongs to CreateUserUseCase.
        now = utcnow()
        stmt = (
            insert(_users)
            .values(email=data.email, name=data.name, created_at=now, updated_at=now)
            .returning(*_users.c)
        )
        rows = await self._client.query(stmt)
        return self._decode(rows[0])

    async def list(self, limit: int = 10, offset: int = 0) -> list[User]:
        stmt = (
            select(_users)
            .order_by(desc(_users.c.created_at), desc(_users.c.id))
            .limit(limit)
            .offset(offset)
        )
        return [self._decode(row) for row in await self._client.query(stmt)]

    @staticmethod
    def _decode(row: Mapping[str, Any]) -> User:
        try:
            return User.model_validate(dict(row))
        except ValidationError as e:
            raise RowDecodeError("user", str(e)) from e


# --- Module Notes -----------------------------------------------------------
# Ties on created_at (same clock tick) are broken by id so paging stays deterministic.
