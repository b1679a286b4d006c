from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "5f6e8d34-292d-434f-a8ff-f48f4f3040f9",
                "username": "jsmith",
                "email": "jsmith@example.com",
                "name": "John Smith",
                "strokes_given": 9,
                "is_active": True,
                "is_admin": False,
                "created_at": "2025-05-01T20:20:10.000000",
                "updated_at": "2025-05-01T20:20:10.000000",
            }
        },
    )

    id: UUID
    username: str
    email: str | None
    name: str
    strokes_given: int
    is_active: bool
    is_admin: bool
    created_at: datetime
    updated_at: datetime


class UserListResponse(BaseModel):
    items: list[UserResponse]
    total: int
    limit: int
    offset: int
    has_more: bool


class HandicapUpdateRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={"example": {"strokes_given": 9}})

    strokes_given: int = Field(ge=0)
