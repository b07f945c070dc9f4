from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SystemConfig:
    """The single global configuration record."""

    is_login_locked: bool
    last_updated: datetime
