from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Season(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("year", name="uq_season_year"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    year: int = Field(index=True)
    name: str = Field(min_length=1, max_length=120)
    start_date: date = Field(nullable=False)
    end_date: date = Field(nullable=False)
    is_active: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
