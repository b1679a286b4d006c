from .reservation import Reservation
from .round import Round
from .score import Score
from .season import Season
from .tee_time import TeeTime
from .tee_time_template import TeeTimeTemplate
from .user import User

__all__ = [
    "Reservation",
    "Round",
    "Score",
    "Season",
    "TeeTime",
    "TeeTimeTemplate",
    "User",
]
