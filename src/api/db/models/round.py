from __future__ import annotations

import datetime as dt
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


class Round(SQLModel, table=True):
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    date: dt.date = Field(index=True)
    season_id: UUID = Field(foreign_key="season.id", index=True, nullable=False)
    submitted_by: UUID = Field(foreign_key="user.id", index=True, nullable=False)
    created_at: dt.datetime = Field(default_factory=utcnow, nullable=False)
