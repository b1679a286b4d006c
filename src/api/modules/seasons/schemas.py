from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SeasonCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "year": 2025,
                "name": "2025 Season",
                "start_date": "2025-05-02",
                "end_date": "2025-08-29",
            }
        }
    )

    year: int = Field(ge=1900, le=9999)
    name: str = Field(min_length=1, max_length=120)
    start_date: date
    end_date: date


class SeasonDatesUpdateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={"example": {"start_date": "2025-05-09", "end_date": "2025-09-05"}}
    )

    start_date: date
    end_date: date


class SeasonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    year: int
    name: str
    start_date: date
    end_date: date
    is_active: bool
    created_at: datetime
    updated_at: datetime
