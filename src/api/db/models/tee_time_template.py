from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import JSON, UniqueConstraint
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TeeTimeTemplate(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("season_id", "day_of_week", name="uq_teetimetemplate_season_day"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    season_id: UUID = Field(foreign_key="season.id", index=True, nullable=False)
    # 0 = Sunday ... 6 = Saturday
    day_of_week: int = Field(ge=0, le=6)
    time_slots: list[str] = Field(default_factory=list, sa_type=JSON)
    max_slots_per_time: int = Field(default=4, ge=1)
    booking_opens_days_before: int = Field(ge=0)
    booking_opens_time: str = Field(max_length=5)
    booking_closes_days_before: int = Field(ge=0)
    booking_closes_time: str = Field(max_length=5)
    timezone: str = Field(max_length=64)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
