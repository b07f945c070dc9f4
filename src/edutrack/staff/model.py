from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class StaffMember:
    """Teacher or administrator account; which store it came from sets `role`."""

    identifier: str
    name: str
    password: str
    role: Role
    department: Optional[str] = None
    created_at: Optional[datetime] = None
