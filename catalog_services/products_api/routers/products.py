# This file defines the products CRUD endpoints and the products-with-users composition.
# Handlers validate presence of fields, run one statement through ProductsService, and map empty results to 404.
# `/products/with-users` is registered before `/products/{product_id}` so the literal path wins.

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends

from catalog_services.api.ids import parse_entity_id
from catalog_services.api.error_handlers import NotFoundError, UpstreamError, ValidationError
from catalog_services.api.schemas.common import ERROR_RESPONSES, ErrorResponse
from catalog_services.products_api.dependencies import get_products_service, get_users_client
from catalog_services.products_api.schemas.products_schemas import (
    ProductCreateRequest,
    ProductDeletedResponse,
    ProductResponse,
    ProductsWithUsersResponse,
    ProductUpdateRequest,
)
from catalog_services.products_api.services.products_service import ProductsService
from catalog_services.products_api.services.users_client import (
    UsersApiClient,
    UsersServiceUnavailableError,
)

LOGGER = logging.getLogger("catalog.products")

router = APIRouter(prefix="/products", tags=["products"], responses=ERROR_RESPONSES)
ProductsServiceDep = Annotated[ProductsService, Depends(get_products_service)]
UsersClientDep = Annotated[UsersApiClient, Depends(get_users_client)]

PRODUCT_NOT_FOUND = "Product not found"


@router.post("", response_model=ProductResponse, status_code=201)
def create_product(
    service: ProductsServiceDep,
    payload: Annotated[ProductCreateRequest | None, Body()] = None,
) -> dict[str, object]:
    body = payload or ProductCreateRequest()
    if not body.name or not body.price:
        raise ValidationError("name & price required")
    return service.create({"name": body.name, "price": body.price})


@router.get("", response_model=list[ProductResponse])
def list_products(service: ProductsServiceDep) -> list[dict[str, object]]:
    return service.list()


@router.get(
    "/with-users",
    response_model=ProductsWithUsersResponse,
    responses={502: {"model": ErrorResponse, "description": "Users service unreachable."}},
)
def products_with_users(
    service: ProductsServiceDep,
    users_client: UsersClientDep,
) -> dict[str, object]:
    products = service.list()
    try:
        users_count = users_client.count_users()
    except UsersServiceUnavailableError as exc:
        LOGGER.warning("users service unavailable: %s", exc)
        raise UpstreamError("could not reach users service", detail=str(exc)) from exc

    return {"products": products, "usersCount": users_count}


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, service: ProductsServiceDep) -> dict[str, object]:
    product = service.get_by_id(parse_entity_id(product_id))
    if product is None:
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return product


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    service: ProductsServiceDep,
    payload: Annotated[ProductUpdateRequest | None, Body()] = None,
) -> dict[str, object]:
    entity_id = parse_entity_id(product_id)
    body = payload or ProductUpdateRequest()
    if not body.name and not body.price:
        raise ValidationError("nothing to update")

    product = service.update(entity_id, {"name": body.name, "price": body.price})
    if product is None:
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return product


@router.delete("/{product_id}", response_model=ProductDeletedResponse)
def delete_product(product_id: str, service: ProductsServiceDep) -> dict[str, object]:
    product = service.delete(parse_entity_id(product_id))
    if product is None:
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return {"message": "Product deleted", "product": product}
