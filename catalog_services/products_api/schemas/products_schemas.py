# This file defines request and response contracts for the products endpoints.
# Request fields are all optional so presence checks can answer with the service's own 400 messages.
# Prices are plain floats on the wire; the store keeps them as NUMERIC.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProductCreateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    price: float | None = Field(default=None, allow_inf_nan=False)


class ProductUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    price: float | None = Field(default=None, allow_inf_nan=False)


class ProductResponse(BaseModel):
    id: int
    name: str
    price: float


class ProductDeletedResponse(BaseModel):
    message: str
    product: ProductResponse


class ProductsWithUsersResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    products: list[ProductResponse]
    users_count: int = Field(alias="usersCount")
