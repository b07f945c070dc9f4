from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AppendOutcome
from .model import AttendanceEntry, AttendanceSession


class SessionRepository(Protocol):
    """Store of attendance sessions and their embedded rosters."""

    def find_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def find_active_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        """Return the session only while its activity flag is set."""

        raise NotImplementedError

    def deactivate(self, session_id: str) -> None:
        raise NotImplementedError

    def open_for_issuer(self, session: AttendanceSession) -> int:
        """Deactivate the issuer's active sessions and create `session` as one atomic step.

        Returns how many sessions were closed.
        """

        raise NotImplementedError

    def append_attendance_if_absent(self, session_id: str, entry: AttendanceEntry) -> AppendOutcome:
        """Atomically append unless the roll number is already present.

        INACTIVE when the session is missing or no longer active at write time.
        """

        raise NotImplementedError

    def list_attendance(self, session_id: str) -> Sequence[AttendanceEntry]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceSession]:
        """All sessions, newest first."""

        raise NotImplementedError

    def list_for_issuer(self, teacher_id: str) -> Sequence[AttendanceSession]:
        raise NotImplementedError
