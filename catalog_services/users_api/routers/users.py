# This file defines the users CRUD endpoints.
# Each handler validates presence of fields, runs one statement through UsersService, and maps empty results to 404.
# Store failures arrive as StoreError and are rendered by the shared error handlers.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends

from catalog_services.api.ids import parse_entity_id
from catalog_services.api.error_handlers import NotFoundError, ValidationError
from catalog_services.api.schemas.common import ERROR_RESPONSES
from catalog_services.users_api.dependencies import get_users_service
from catalog_services.users_api.schemas.users_schemas import (
    UserCreateRequest,
    UserDeletedResponse,
    UserResponse,
    UserUpdateRequest,
)
from catalog_services.users_api.services.users_service import UsersService

router = APIRouter(prefix="/users", tags=["users"], responses=ERROR_RESPONSES)
UsersServiceDep = Annotated[UsersService, Depends(get_users_service)]

USER_NOT_FOUND = "User not found"


@router.post("", response_model=UserResponse, status_code=201)
def create_user(
    service: UsersServiceDep,
    payload: Annotated[UserCreateRequest | None, Body()] = None,
) -> dict[str, object]:
    body = payload or UserCreateRequest()
    if not body.name or not body.email:
        raise ValidationError("name & email required")
    return service.create({"name": body.name, "email": body.email})


@router.get("", response_model=list[UserResponse])
def list_users(service: UsersServiceDep) -> list[dict[str, object]]:
    return service.list()


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, service: UsersServiceDep) -> dict[str, object]:
    user = service.get_by_id(parse_entity_id(user_id))
    if user is None:
        raise NotFoundError(USER_NOT_FOUND)
    return user


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    service: UsersServiceDep,
    payload: Annotated[UserUpdateRequest | None, Body()] = None,
) -> dict[str, object]:
    entity_id = parse_entity_id(user_id)
    body = payload or UserUpdateRequest()
    if not body.name and not body.email:
        raise ValidationError("nothing to update")

    user = service.update(entity_id, {"name": body.name, "email": body.email})
    if user is None:
        raise NotFoundError(USER_NOT_FOUND)
    return user


@router.delete("/{user_id}", response_model=UserDeletedResponse)
def delete_user(user_id: str, service: UsersServiceDep) -> dict[str, object]:
    user = service.delete(parse_entity_id(user_id))
    if user is None:
        raise NotFoundError(USER_NOT_FOUND)
    return {"message": "User deleted", "user": user}
