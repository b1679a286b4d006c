from __future__ import annotations

from enum import Enum


class TeeTimeOrigin(str, Enum):
    TEMPLATE = "template"
    MANUAL = "manual"
