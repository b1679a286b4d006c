from .availability import (
    Availability,
    Clock,
    WindowStatus,
    compute_availability,
    utc_now,
    window_status,
)
from .course import COURSE_LAYOUT, HOLE_COUNT, CourseLayout
from .errors import (
    CapacityError,
    ConflictError,
    ForbiddenError,
    LeagueError,
    NotFoundError,
    SeasonInUseError,
    TeeTimeInUseError,
    ValidationError,
    WindowClosedError,
)
from .schedule import BookingRule, PlannedTeeTime, expand_template
from .scoring import NetScoreResult, compute_net_scores

__all__ = [
    "COURSE_LAYOUT",
    "HOLE_COUNT",
    "Availability",
    "BookingRule",
    "CapacityError",
    "Clock",
    "ConflictError",
    "CourseLayout",
    "ForbiddenError",
    "LeagueError",
    "NetScoreResult",
    "NotFoundError",
    "PlannedTeeTime",
    "SeasonInUseError",
    "TeeTimeInUseError",
    "ValidationError",
    "WindowClosedError",
    "WindowStatus",
    "compute_availability",
    "compute_net_scores",
    "expand_template",
    "utc_now",
    "window_status",
]
