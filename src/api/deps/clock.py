from __future__ import annotations

from league.availability import Clock, utc_now


def get_clock() -> Clock:
    """Source of "now" for window evaluation; tests override it."""
    return utc_now
