"""
minga_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide the datastore registry from app state.
- Build repositories and use-cases per request on top of the shared clients.
"""

from __future__ import annotations

from fastapi import Depends, Request

from minga_api.datastores import Datastores
from minga_api.db.repositories.users import UserRepo
from minga_api.services.health import HealthAggregator, HealthCheckUseCase
from minga_api.services.users import CreateUserUseCase, GetUserByIdUseCase, GetUsersUseCase


def datastores_from_app(request: Request) -> Datastores:
    # Built once by the lifespan in `minga_api.api.app.create_app`.
    return request.app.state.datastores  # type: ignore[attr-defined]


def user_repo(datastores: Datastores = Depends(datastores_from_app)) -> UserRepo:
    return UserRepo(datastores.relational)


def create_user_use_case(repo: UserRepo = Depends(user_repo)) -> CreateUserUseCase:
    return CreateUserUseCase(repo)


def get_users_use_case(repo: UserRepo = Depends(user_repo)) -> GetUsersUseCase:
    return GetUsersUseCase(repo)


def get_user_by_id_use_case(repo: UserRepo = Depends(user_repo)) -> GetUserByIdUseCase:
    return GetUserByIdUseCase(repo)


def health_check_use_case(
    datastores: Datastores = Depends(datastores_from_app),
) -> HealthCheckUseCase:
    return HealthCheckUseCase(HealthAggregator(datastores.health_services()))
