from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from league.availability import WindowStatus


class TeeTimeAvailabilityResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tee_time_id": "0b7a3c36-6b3a-4c8e-9d0f-1f2e3d4c5b6a",
                "date": "2025-05-23",
                "time": "15:30",
                "max_slots": 4,
                "reserved_slots": 2,
                "available_slots": 2,
                "window_status": "open",
                "bookable": True,
                "is_available": True,
                "booking_opens_at": "2025-05-17T01:00:00",
                "booking_closes_at": "2025-05-21T22:00:00",
            }
        }
    )

    tee_time_id: UUID
    date: date
    time: str
    max_slots: int
    reserved_slots: int
    available_slots: int
    window_status: WindowStatus
    bookable: bool
    is_available: bool
    booking_opens_at: datetime
    booking_closes_at: datetime


class ManualTeeTimesRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "season_id": "3f5e3b36-6a1a-4d0b-9f0e-3a1f7d8f9b10",
                "date": "2025-07-04",
                "times": ["08:00", "08:10"],
                "max_slots": 4,
            }
        }
    )

    season_id: UUID
    date: date
    times: list[str] = Field(min_length=1)
    max_slots: int | None = Field(default=None, ge=1)


class ManualTeeTimesResponse(BaseModel):
    created: list[str]
    skipped: list[str]


class AvailabilityUpdateRequest(BaseModel):
    is_available: bool


class BulkAvailabilityItem(BaseModel):
    tee_time_id: UUID
    is_available: bool


class BulkAvailabilityRequest(BaseModel):
    items: list[BulkAvailabilityItem] = Field(min_length=1)


class BulkAvailabilityResponse(BaseModel):
    updated: int
