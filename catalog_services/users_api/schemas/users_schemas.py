# This file defines request and response contracts for the users endpoints.
# Request fields are all optional so presence checks can answer with the service's own 400 messages.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UserCreateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None


class UserUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None


class UserResponse(BaseModel):
    id: int
    name: str
    email: str


class UserDeletedResponse(BaseModel):
    message: str
    user: UserResponse
