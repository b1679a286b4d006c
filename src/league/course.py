from __future__ import annotations

from dataclasses import dataclass

HOLE_COUNT = 18

DEFAULT_MAX_PLAYERS_PER_TEE_TIME = 4
DEFAULT_BOOKING_OPENS_DAYS_BEFORE = 7
DEFAULT_BOOKING_OPENS_TIME = "21:00"
DEFAULT_BOOKING_CLOSES_DAYS_BEFORE = 2
DEFAULT_BOOKING_CLOSES_TIME = "18:00"
DEFAULT_TIMEZONE = "America/New_York"
MAX_STROKES_GIVEN = 20
MAX_GROSS_HOLE_SCORE = 20


@dataclass(frozen=True)
class CourseLayout:
    """Static per-hole reference data. Rank 1 is the hardest hole."""

    name: str
    pars: tuple[int, ...]
    difficulty_ranks: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.pars) != len(self.difficulty_ranks):
            raise ValueError("pars and difficulty_ranks must have the same length.")
        if not self.pars:
            raise ValueError("a course needs at least one hole.")

    @property
    def hole_count(self) -> int:
        return len(self.pars)

    @property
    def front_nine_par(self) -> int:
        return sum(self.pars[:9])

    @property
    def back_nine_par(self) -> int:
        return sum(self.pars[9:])

    @property
    def total_par(self) -> int:
        return sum(self.pars)


COURSE_LAYOUT = CourseLayout(
    name="Long Beach Golf Course (white tees)",
    pars=(4, 4, 3, 4, 5, 3, 4, 4, 5, 3, 4, 4, 5, 4, 4, 3, 4, 5),
    difficulty_ranks=(13, 9, 15, 5, 1, 17, 3, 11, 7, 12, 16, 2, 10, 8, 14, 18, 6, 4),
)
