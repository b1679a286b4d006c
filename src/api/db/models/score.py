from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Score(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("round_id", "user_id", name="uq_score_round_user"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    round_id: UUID = Field(foreign_key="round.id", index=True, nullable=False)
    user_id: UUID = Field(foreign_key="user.id", index=True, nullable=False)

    # Gross strokes per hole; NULL means the hole was not played.
    hole_1: int | None = Field(default=None)
    hole_2: int | None = Field(default=None)
    hole_3: int | None = Field(default=None)
    hole_4: int | None = Field(default=None)
    hole_5: int | None = Field(default=None)
    hole_6: int | None = Field(default=None)
    hole_7: int | None = Field(default=None)
    hole_8: int | None = Field(default=None)
    hole_9: int | None = Field(default=None)
    hole_10: int | None = Field(default=None)
    hole_11: int | None = Field(default=None)
    hole_12: int | None = Field(default=None)
    hole_13: int | None = Field(default=None)
    hole_14: int | None = Field(default=None)
    hole_15: int | None = Field(default=None)
    hole_16: int | None = Field(default=None)
    hole_17: int | None = Field(default=None)
    hole_18: int | None = Field(default=None)

    # Net strokes per hole after handicap deductions.
    net_hole_1: int | None = Field(default=None)
    net_hole_2: int | None = Field(default=None)
    net_hole_3: int | None = Field(default=None)
    net_hole_4: int | None = Field(default=None)
    net_hole_5: int | None = Field(default=None)
    net_hole_6: int | None = Field(default=None)
    net_hole_7: int | None = Field(default=None)
    net_hole_8: int | None = Field(default=None)
    net_hole_9: int | None = Field(default=None)
    net_hole_10: int | None = Field(default=None)
    net_hole_11: int | None = Field(default=None)
    net_hole_12: int | None = Field(default=None)
    net_hole_13: int | None = Field(default=None)
    net_hole_14: int | None = Field(default=None)
    net_hole_15: int | None = Field(default=None)
    net_hole_16: int | None = Field(default=None)
    net_hole_17: int | None = Field(default=None)
    net_hole_18: int | None = Field(default=None)

    total_score: int = Field(default=0, index=True)
    net_total_score: int = Field(default=0, index=True)
    # Handicap snapshot taken at submission time.
    strokes_given: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
