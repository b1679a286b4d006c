from __future__ import annotations


class LeagueError(Exception):
    """Base class for every error the scheduling and scoring core reports.

    ``kind`` is a stable tag the HTTP layer exposes as ``error_code`` so callers
    can branch on the failure without parsing messages.
    """

    kind = "league_error"

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(LeagueError, ValueError):
    kind = "validation_error"


class CapacityError(LeagueError):
    """Requested seats exceed what is left; retry with fresh availability."""

    kind = "capacity_exceeded"


class WindowClosedError(LeagueError):
    kind = "booking_window_closed"


class NotFoundError(LeagueError, LookupError):
    kind = "not_found"


class ConflictError(LeagueError):
    """Template misconfiguration detected while expanding slots."""

    kind = "template_conflict"


class TeeTimeInUseError(LeagueError):
    kind = "tee_time_in_use"


class SeasonInUseError(LeagueError):
    kind = "season_in_use"


class ForbiddenError(LeagueError, PermissionError):
    kind = "forbidden"
