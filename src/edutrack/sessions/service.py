from __future__ import annotations

import logging
import uuid
from typing import Callable, Optional

from ..common.datetime_utils import now_local, to_iso
from ..common.validators import canonical_identifier, require_non_empty
from ..core.constants import SESSION_ID_LENGTH
from ..core.exceptions import NotFoundError
from .model import AttendanceEntry, AttendanceSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


def entry_view(entry: AttendanceEntry) -> dict:
    return {
        "rollNumber": entry.roll_number,
        "name": entry.name,
        "department": entry.department,
        "section": entry.section,
        "deviceId": entry.device_id,
        "timestamp": to_iso(entry.timestamp),
    }


def session_view(session: AttendanceSession) -> dict:
    return {
        "id": session.session_id,
        "courseName": session.course_name,
        "teacherId": session.teacher_id,
        "startTime": to_iso(session.start_time),
        "isActive": session.is_active,
        "attendance": [entry_view(e) for e in session.attendance],
    }


def _new_session_id() -> str:
    return uuid.uuid4().hex[:SESSION_ID_LENGTH].upper()


class SessionLifecycleService:
    """Opens and closes sessions; at most one active session per issuer."""

    def __init__(
        self,
        sessions: SessionRepository,
        *,
        clock: Optional[Callable] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._sessions = sessions
        self._clock = clock or now_local
        self._id_factory = id_factory or _new_session_id

    def open(self, *, issuer: str, label: str) -> AttendanceSession:
        issuer = canonical_identifier(issuer, "Teacher ID")
        label = require_non_empty(label, "Course name")

        session = AttendanceSession(
            session_id=self._id_factory(),
            course_name=label,
            teacher_id=issuer,
            start_time=self._clock(),
            is_active=True,
        )
        closed = self._sessions.open_for_issuer(session)

        logger.info("Session %s opened by %s (%s); %s previous session(s) closed", session.session_id, issuer, label, closed)
        return session

    def close(self, session_id: str) -> AttendanceSession:
        session = self.get_session(session_id)
        if session.is_active:
            self._sessions.deactivate(session.session_id)
            logger.info("Session %s closed", session.session_id)
        return self.get_session(session.session_id)

    def get_session(self, session_id: str) -> AttendanceSession:
        session_id = require_non_empty(session_id, "Session ID")
        session = self._sessions.find_by_id(session_id)
        if not session:
            raise NotFoundError("Session not found.")
        return session

    def list_roster(self, session_id: str) -> list[AttendanceEntry]:
        session = self.get_session(session_id)
        return list(self._sessions.list_attendance(session.session_id))

    def list_sessions(self) -> list[AttendanceSession]:
        return list(self._sessions.list_all())

    def list_for_issuer(self, issuer: str) -> list[AttendanceSession]:
        return list(self._sessions.list_for_issuer(canonical_identifier(issuer, "Teacher ID")))
