from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceEntry:
    """One accepted check-in. Append-only: never edited once stored."""

    roll_number: str
    name: Optional[str]
    department: Optional[str]
    section: Optional[str]
    device_id: str
    timestamp: datetime


@dataclass(frozen=True)
class AttendanceSession:
    """A teacher-opened attendance window for one course meeting."""

    session_id: str
    course_name: str
    teacher_id: str
    start_time: datetime
    is_active: bool = True
    attendance: tuple[AttendanceEntry, ...] = field(default_factory=tuple)

    def has_marked(self, roll_number: str) -> bool:
        return any(e.roll_number == roll_number for e in self.attendance)
