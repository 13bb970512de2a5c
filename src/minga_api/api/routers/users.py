"""
minga_api.api.routers.users

User endpoints.

Responsibilities:
- Translate HTTP input into use-case calls.
- Map classified use-case failures to status codes with `{"error": ...}` bodies.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from minga_api.api.deps import create_user_use_case, get_user_by_id_use_case, get_users_use_case
from minga_api.domain.errors import DuplicateEmailError, UserNotFoundError
from minga_api.domain.users import CreateUserDto, User
from minga_api.observability.logging import get_logger
from minga_api.services.users import CreateUserUseCase, GetUserByIdUseCase, GetUsersUseCase

router = APIRouter(prefix="/api/users", tags=["users"])
log = get_logger(__name__)


class CreateUserRequest(BaseModel):
    email: str | None = None
    name: str | None = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _parse_int(value: str | None) -> int | None:
    # Unparseable paging values fall back to the use-case defaults instead of a 422.
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _user_json(user: User) -> dict[str, Any]:
    return user.model_dump(mode="json")


@router.get("")
async def list_users(
    limit: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    use_case: GetUsersUseCase = Depends(get_users_use_case),
) -> JSONResponse:
    try:
        users = await use_case.execute(_parse_int(limit), _parse_int(offset))
    except Exception as e:
        log.exception("list_users_failed")
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    return JSONResponse(content={"users": [_user_json(u) for u in users]})


@router.post("")
async def create_user(
    body: CreateUserRequest,
    use_case: CreateUserUseCase = Depends(create_user_use_case),
) -> JSONResponse:
    if not body.email or not body.name:
        return _error(HTTP_400_BAD_REQUEST, "Email and name are required")

    try:
        user = await use_case.execute(CreateUserDto(email=body.email, name=body.name))
    except DuplicateEmailError as e:
        return _error(HTTP_409_CONFLICT, e.message)
    except Exception as e:
        # Validation failures share the generic status; the message tells them apart.
        log.exception("create_user_failed")
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    return JSONResponse(status_code=HTTP_201_CREATED, content={"user": _user_json(user)})


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    use_case: GetUserByIdUseCase = Depends(get_user_by_id_use_case),
) -> JSONResponse:
    try:
        user = await use_case.execute(user_id)
    except UserNotFoundError as e:
        return _error(HTTP_404_NOT_FOUND, e.message)
    except Exception as e:
        log.exception("get_user_failed", user_id=user_id)
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    return JSONResponse(content={"user": _user_json(user)})
