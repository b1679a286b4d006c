from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ReservationCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tee_time_id": "0b7a3c36-6b3a-4c8e-9d0f-1f2e3d4c5b6a",
                "slots": 3,
                "player_names": ["Bob Jones", "Al Smith"],
                "play_for_money": [True, False, True],
            }
        }
    )

    tee_time_id: UUID
    slots: int = Field(ge=1)
    player_names: list[str] = Field(default_factory=list)
    play_for_money: list[bool] = Field(default_factory=list)


class AdminReservationCreateRequest(ReservationCreateRequest):
    user_id: UUID


class ReservationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tee_time_id: UUID
    user_id: UUID
    slots: int
    player_names: list[str]
    play_for_money: list[bool]
    created_at: datetime


class ReservationDetailResponse(ReservationResponse):
    date: date
    time: str
    member_name: str
