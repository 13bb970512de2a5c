"""
minga_api.domain.users

User entity, creation input, and the repository capability set.

Responsibilities:
- Define `User` as a schema-checked model (rows are decoded through it).
- Define `CreateUserDto` as unvalidated caller input.
- Define the `UserRepository` protocol consumed by the user use-cases.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol

from pydantic import BaseModel, ConfigDict, field_validator


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # Some backends (SQLite) hand back naive timestamps; they are stored as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class CreateUserDto(BaseModel):
    # Business validation happens in CreateUserUseCase, not here.
    email: str
    name: str | None = None


class UserRepository(Protocol):
    async def find_by_id(self, user_id: str) -> User | None: ...

    async def find_by_email(self, email: str) -> User | None: ...

    async def create(self, data: CreateUserDto) -> User: ...

    async def list(self, limit: int = 10, offset: int = 0) -> list[User]: ...
