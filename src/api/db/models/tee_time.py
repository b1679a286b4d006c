from __future__ import annotations

import datetime as dt
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from api.db.enums import TeeTimeOrigin


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


class TeeTime(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("date", "time", name="uq_teetime_date_time"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    season_id: UUID = Field(foreign_key="season.id", index=True, nullable=False)
    template_id: UUID | None = Field(default=None, foreign_key="teetimetemplate.id", index=True)
    origin: TeeTimeOrigin = Field(default=TeeTimeOrigin.TEMPLATE)
    date: dt.date = Field(index=True)
    time: dt.time
    max_slots: int = Field(ge=1)
    booking_opens_at: dt.datetime = Field(nullable=False)
    booking_closes_at: dt.datetime = Field(nullable=False)
    is_available: bool = Field(default=True)
    # Bumped by every reserve/cancel so those writes serialize on this row.
    lock_version: int = Field(default=0, nullable=False)
    created_at: dt.datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: dt.datetime = Field(default_factory=utcnow, nullable=False)
