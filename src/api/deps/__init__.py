from .auth import get_admin_user_dep, get_auth_service_dep, get_current_user_dep
from .clock import get_clock
from .identity import get_identity_service_dep
from .reservations import get_reservation_service_dep
from .schedule import get_schedule_service_dep
from .scores import get_score_service_dep
from .seasons import get_season_service_dep
from .tee_times import get_tee_time_service_dep

__all__ = [
    "get_admin_user_dep",
    "get_auth_service_dep",
    "get_clock",
    "get_current_user_dep",
    "get_identity_service_dep",
    "get_reservation_service_dep",
    "get_schedule_service_dep",
    "get_score_service_dep",
    "get_season_service_dep",
    "get_tee_time_service_dep",
]
