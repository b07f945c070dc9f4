from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Identity record of a student.

    `device_id` is the bound device token; once set it only changes through
    an administrative reset.
    """

    roll_number: str
    name: str
    password: str
    department: Optional[str] = None
    section: Optional[str] = None
    phone: Optional[str] = None
    device_id: Optional[str] = None
    created_at: Optional[datetime] = None
