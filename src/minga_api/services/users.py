"""
minga_api.services.users

User use-cases.

Responsibilities:
- Enforce creation rules (uniqueness, email shape, name length) in a fixed order.
- Bound pagination before it reaches the repository.
- Turn a missing user into a classified not-found failure where existence is required.
"""

from __future__ import annotations

import re

from minga_api.datastores.errors import QueryError
from minga_api.domain.errors import (
    DuplicateEmailError,
    InvalidEmailError,
    InvalidNameError,
    UserNotFoundError,
)
from minga_api.domain.users import CreateUserDto, User, UserRepository
from minga_api.observability.logging import get_logger

log = get_logger(__name__)

# Structural check only (local@domain.tld), not RFC 5322. Always use fullmatch:
# `$` would also accept a trailing newline.
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
MIN_NAME_LENGTH = 2

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def clamp_page(limit: int | None, offset: int | None) -> tuple[int, int]:
    safe_limit = DEFAULT_LIMIT if limit is None else min(max(limit, 1), MAX_LIMIT)
    safe_offset = 0 if offset is None else max(offset, 0)
    return safe_limit, safe_offset


class CreateUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    async def execute(self, data: CreateUserDto) -> User:
        # Order matters: duplicate, then email shape, then name.
        if await self._repository.find_by_email(data.email) is not None:
            raise DuplicateEmailError(data.email)

        if not is_valid_email(data.email):
            raise InvalidEmailError()

        if not data.name or len(data.name.strip()) < MIN_NAME_LENGTH:
            raise InvalidNameError()

        try:
            user = await self._repository.create(data)
        except QueryError as e:
            # A concurrent create won the race; the store's unique index rejected ours.
            if e.is_integrity_violation:
                raise DuplicateEmailError(data.email) from e
            raise

        log.info("user_created", user_id=user.id)
        return user


class GetUsersUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    async def execute(self, limit: int | None = None, offset: int | None = None) -> list[User]:
        safe_limit, safe_offset = clamp_page(limit, offset)
        return await self._repository.list(safe_limit, safe_offset)


class GetUserByIdUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    async def execute(self, user_id: str) -> User:
        user = await self._repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
