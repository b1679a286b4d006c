from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Wall-clock now as naive UTC, the form every stored timestamp uses."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class WindowStatus(str, Enum):
    NOT_YET_OPEN = "not-yet-open"
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class Availability:
    max_slots: int
    reserved_slots: int
    available_slots: int
    window_status: WindowStatus
    is_available: bool
    bookable: bool


def window_status(now: datetime, opens_at: datetime, closes_at: datetime) -> WindowStatus:
    if now < opens_at:
        return WindowStatus.NOT_YET_OPEN
    if now > closes_at:
        return WindowStatus.CLOSED
    return WindowStatus.OPEN


def compute_availability(
    *,
    max_slots: int,
    reserved_slots: int,
    booking_opens_at: datetime,
    booking_closes_at: datetime,
    is_available: bool,
    now: datetime,
) -> Availability:
    """Evaluate one tee time at ``now``.

    Pure and cheap: callers recompute it on every read because both the
    reservation total and the clock move underneath it.
    """
    status = window_status(now, booking_opens_at, booking_closes_at)
    # A template edit can lower max_slots below what is already booked.
    available = max(0, max_slots - reserved_slots)
    return Availability(
        max_slots=max_slots,
        reserved_slots=reserved_slots,
        available_slots=available,
        window_status=status,
        is_available=is_available,
        bookable=is_available and status == WindowStatus.OPEN and available > 0,
    )
