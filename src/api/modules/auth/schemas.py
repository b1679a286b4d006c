from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AuthRegisterRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "jsmith",
                "email": "jsmith@example.com",
                "name": "John Smith",
                "password": "supersecret123",
            }
        }
    )

    username: str = Field(min_length=3, max_length=32)
    email: str | None = Field(default=None, max_length=255)
    name: str = Field(default="", max_length=120)
    password: str = Field(min_length=8, max_length=128)


class AuthLoginRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username_or_email": "jsmith",
                "password": "supersecret123",
            }
        }
    )

    username_or_email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=128)


class AuthUserResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "7fa22272-d5a3-4374-8f89-dfdddb4251f0",
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


class AuthTokenResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "<access_jwt>",
                "token_type": "bearer",
                "expires_in": 3600,
            }
        }
    )

    access_token: str
    token_type: str
    expires_in: int
