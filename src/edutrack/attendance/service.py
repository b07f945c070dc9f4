from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..auth.policy import LoginLockPolicy
from ..common.datetime_utils import now_local
from ..common.validators import canonical_identifier, require_non_empty
from ..core.enums import AppendOutcome, BindOutcome, Role
from ..core.exceptions import (
    AlreadyMarked,
    DeviceAlreadyUsedBy,
    DeviceConflict,
    DomainError,
    SessionNotActive,
    UnknownIdentity,
)
from ..sessions.model import AttendanceEntry
from ..sessions.repository import SessionRepository
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import DisplayFields

logger = logging.getLogger(__name__)


class AdmissionService:
    """Decides whether a check-in is accepted and commits it.

    Checks run in a fixed order and stop at the first failure:
    active session, duplicate, identity, device binding, device reuse.
    Everything before the commit is read-only. The commit relies on the
    store's conditional writes (bind only if unbound, append only if absent
    and still active), with the append as the final step.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        students: StudentRepository,
        *,
        lock_policy: Optional[LoginLockPolicy] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._sessions = sessions
        self._students = students
        self._lock_policy = lock_policy
        self._clock = clock or now_local

    def mark_attendance(
        self,
        session_id: Optional[str],
        identifier: Optional[str],
        device_id: Optional[str],
        display: Optional[DisplayFields] = None,
    ) -> AttendanceEntry:
        session_id = require_non_empty(session_id, "Session ID")
        roll = canonical_identifier(identifier, "Roll Number")
        device_id = require_non_empty(device_id, "Device ID")

        try:
            entry = self._admit(session_id, roll, device_id, display or DisplayFields())
        except DomainError as e:
            logger.warning("Check-in rejected: session=%s roll=%s reason=%s", session_id, roll, e.code)
            raise

        logger.info("Check-in accepted: session=%s roll=%s", session_id, roll)
        return entry

    def _admit(self, session_id: str, roll: str, device_id: str, display: DisplayFields) -> AttendanceEntry:
        if self._lock_policy is not None:
            self._lock_policy.ensure_allowed(Role.STUDENT)
        session = self._sessions.find_active_by_id(session_id)
        if not session:
            raise SessionNotActive()

        if session.has_marked(roll):
            raise AlreadyMarked()

        student = self._students.get_by_roll_number(roll)
        if not student:
            raise UnknownIdentity()

        if student.device_id and student.device_id != device_id:
            raise DeviceConflict()

        other = self._students.find_by_device(device_id, exclude_roll_number=roll)
        if other:
            raise DeviceAlreadyUsedBy(other.name)

        return self._commit(session_id, student, device_id, display)

    def _commit(self, session_id: str, student: Student, device_id: str, display: DisplayFields) -> AttendanceEntry:
        if not student.device_id:
            self._bind(student.roll_number, device_id)

        entry = AttendanceEntry(
            roll_number=student.roll_number,
            name=display.name or student.name,
            department=display.department or student.department,
            section=display.section or student.section,
            device_id=device_id,
            timestamp=self._clock(),
        )
        outcome = self._sessions.append_attendance_if_absent(session_id, entry)
        if outcome == AppendOutcome.DUPLICATE:
            raise AlreadyMarked()
        if outcome == AppendOutcome.INACTIVE:
            raise SessionNotActive()
        return entry

    def _bind(self, roll: str, device_id: str) -> None:
        outcome = self._students.bind_device(roll, device_id)
        if outcome == BindOutcome.BOUND:
            return
        if outcome == BindOutcome.ALREADY_BOUND:
            raise DeviceConflict()
        if outcome == BindOutcome.MISSING:
            raise UnknownIdentity()

        holder = self._students.find_by_device(device_id, exclude_roll_number=roll)
        raise DeviceAlreadyUsedBy(holder.name if holder else "another student")
