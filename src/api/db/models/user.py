from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(index=True, min_length=3, max_length=32)
    email: str | None = Field(default=None, index=True, max_length=255)
    name: str = Field(default="", max_length=120)
    password_hash: str | None = Field(default=None, max_length=255)
    # Current handicap; rounds snapshot it at submission time.
    strokes_given: int = Field(default=0, ge=0)

    is_active: bool = Field(default=True, index=True)
    is_admin: bool = Field(default=False, index=True)

    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
