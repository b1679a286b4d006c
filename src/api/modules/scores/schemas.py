from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from league.course import HOLE_COUNT

HoleList = list[int | None]


class CourseResponse(BaseModel):
    name: str
    pars: list[int]
    difficulty_ranks: list[int]
    front_nine_par: int
    back_nine_par: int
    total_par: int


class NetScoreRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "holes": [5, 4, 3, 5, 6, 3, 5, 4, 6, 3, 4, 5, 6, 4, 5, 3, 4, 6],
                "strokes_given": 3,
            }
        }
    )

    holes: HoleList = Field(min_length=HOLE_COUNT, max_length=HOLE_COUNT)
    strokes_given: int = Field(ge=0)


class NetScoreResponse(BaseModel):
    holes: HoleList
    net_holes: HoleList
    total_score: int
    net_total_score: int
    strokes_given: int
    stroke_holes: list[int]


class PlayerScoreRequest(BaseModel):
    user_id: UUID
    holes: HoleList = Field(min_length=HOLE_COUNT, max_length=HOLE_COUNT)


class RoundSubmitRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date": "2025-05-23",
                "season_id": "3f5e3b36-6a1a-4d0b-9f0e-3a1f7d8f9b10",
                "players": [
                    {
                        "user_id": "5f6e8d34-292d-434f-a8ff-f48f4f3040f9",
                        "holes": [5, 4, 3, 5, 6, 3, 5, 4, 6, 3, 4, 5, 6, 4, 5, 3, 4, 6],
                    }
                ],
            }
        }
    )

    date: date
    season_id: UUID | None = None
    players: list[PlayerScoreRequest] = Field(min_length=1)


class ScoreUpdateRequest(BaseModel):
    holes: HoleList = Field(min_length=HOLE_COUNT, max_length=HOLE_COUNT)


class ScoreResponse(BaseModel):
    id: UUID
    round_id: UUID
    user_id: UUID
    name: str
    holes: HoleList
    net_holes: HoleList
    total_score: int
    net_total_score: int
    strokes_given: int


class RoundResponse(BaseModel):
    id: UUID
    date: date
    season_id: UUID
    submitted_by: UUID
    created_at: datetime
    scores: list[ScoreResponse]


class StandingResponse(BaseModel):
    rank: int
    user_id: UUID
    name: str
    rounds: int
    gross_average: float
    net_average: float
    best_gross: int
    best_net: int


class RingerResponse(BaseModel):
    user_id: UUID
    season_id: UUID
    rounds: int
    holes: HoleList
    net_holes: HoleList
    holes_played: int
    net_holes_played: int
    total_score: int
    net_total_score: int
