from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import JSON
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Reservation(SQLModel, table=True):
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tee_time_id: UUID = Field(foreign_key="teetime.id", index=True, nullable=False)
    user_id: UUID = Field(foreign_key="user.id", index=True, nullable=False)
    slots: int = Field(ge=1)
    player_names: list[str] = Field(default_factory=list, sa_type=JSON)
    play_for_money: list[bool] = Field(default_factory=list, sa_type=JSON)
    created_at: datetime = Field(default_factory=utcnow, nullable=False, index=True)
