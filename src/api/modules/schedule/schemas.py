from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TemplateSaveRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "season_id": "3f5e3b36-6a1a-4d0b-9f0e-3a1f7d8f9b10",
                "day_of_week": 5,
                "time_slots": ["15:30", "15:40", "15:50"],
                "max_slots_per_time": 4,
                "booking_opens_days_before": 7,
                "booking_opens_time": "21:00",
                "booking_closes_days_before": 2,
                "booking_closes_time": "18:00",
                "timezone": "America/New_York",
            }
        }
    )

    season_id: UUID
    day_of_week: int = Field(ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    time_slots: list[str] = Field(min_length=1)
    max_slots_per_time: int | None = Field(default=None, ge=1)
    booking_opens_days_before: int | None = Field(default=None, ge=0)
    booking_opens_time: str | None = None
    booking_closes_days_before: int | None = Field(default=None, ge=0)
    booking_closes_time: str | None = None
    timezone: str | None = Field(default=None, max_length=64)


class TemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    season_id: UUID
    day_of_week: int
    time_slots: list[str]
    max_slots_per_time: int
    booking_opens_days_before: int
    booking_opens_time: str
    booking_closes_days_before: int
    booking_closes_time: str
    timezone: str
    created_at: datetime
    updated_at: datetime


class GenerationResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "created_count": 2,
                "updated_count": 0,
                "dates": ["2025-05-23"],
            }
        }
    )

    created_count: int
    updated_count: int
    dates: list[date]
