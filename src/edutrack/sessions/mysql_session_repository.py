from __future__ import annotations

import hashlib
import logging
from typing import Optional, Sequence

import mysql.connector

from ..core.constants import OPEN_LOCK_PREFIX, OPEN_LOCK_TIMEOUT_SECONDS
from ..core.enums import AppendOutcome
from ..core.exceptions import StoreUnavailableError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceEntry, AttendanceSession
from .repository import SessionRepository

_SESSION_COLUMNS = "session_id, course_name, teacher_id, start_time, is_active"
_ENTRY_COLUMNS = "session_id, roll_number, name, department, section, device_id, marked_at"

logger = logging.getLogger(__name__)


def _open_lock_name(teacher_id: str) -> str:
    # MySQL caps lock names at 64 characters.
    return OPEN_LOCK_PREFIX + hashlib.sha1(teacher_id.encode("utf-8")).hexdigest()


def _to_entry(row: dict) -> AttendanceEntry:
    return AttendanceEntry(
        roll_number=row["roll_number"],
        name=row.get("name"),
        department=row.get("department"),
        section=row.get("section"),
        device_id=row.get("device_id"),
        timestamp=row["marked_at"],
    )


def _to_session(row: dict, entries: Sequence[AttendanceEntry]) -> AttendanceSession:
    return AttendanceSession(
        session_id=row["session_id"],
        course_name=row["course_name"],
        teacher_id=row["teacher_id"],
        start_time=row["start_time"],
        is_active=bool(row["is_active"]),
        attendance=tuple(entries),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load_entries(self, cur, session_ids: Sequence[str]) -> dict[str, list[AttendanceEntry]]:
        by_session: dict[str, list[AttendanceEntry]] = {sid: [] for sid in session_ids}
        if not session_ids:
            return by_session
        placeholders = ",".join(["%s"] * len(session_ids))
        cur.execute(
            f"""
            SELECT {_ENTRY_COLUMNS}
            FROM attendance_entries
            WHERE session_id IN ({placeholders})
            ORDER BY entry_id ASC
            """,
            tuple(session_ids),
        )
        for r in fetchall(cur):
            by_session[r["session_id"]].append(_to_entry(r))
        return by_session

    def _query_sessions(self, where: str, params: tuple) -> list[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SESSION_COLUMNS} FROM sessions {where}", params)
            rows = fetchall(cur)
            entries = self._load_entries(cur, [r["session_id"] for r in rows])
            return [_to_session(r, entries[r["session_id"]]) for r in rows]

    def find_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        found = self._query_sessions("WHERE session_id=%s", (session_id,))
        return found[0] if found else None

    def find_active_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        found = self._query_sessions("WHERE session_id=%s AND is_active=1", (session_id,))
        return found[0] if found else None

    def deactivate(self, session_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE sessions SET is_active=0 WHERE session_id=%s", (session_id,))

    def open_for_issuer(self, session: AttendanceSession) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            # Named lock serialises opens per issuer across workers; released when the connection closes.
            cur.execute("SELECT GET_LOCK(%s, %s) AS acquired", (_open_lock_name(session.teacher_id), OPEN_LOCK_TIMEOUT_SECONDS))
            row = fetchone(cur)
            if not row or row.get("acquired") != 1:
                logger.error("Timed out waiting to open a session for %s", session.teacher_id)
                raise StoreUnavailableError()
            cur.execute("UPDATE sessions SET is_active=0 WHERE teacher_id=%s AND is_active=1", (session.teacher_id,))
            closed = int(cur.rowcount)
            cur.execute(
                """
                INSERT INTO sessions(session_id, course_name, teacher_id, start_time, is_active)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (session.session_id, session.course_name, session.teacher_id, session.start_time, int(session.is_active)),
            )
            return closed

    def append_attendance_if_absent(self, session_id: str, entry: AttendanceEntry) -> AppendOutcome:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                # Active check and insert in one statement; the unique key rejects duplicates.
                cur.execute(
                    """
                    INSERT INTO attendance_entries(session_id, roll_number, name, department, section, device_id, marked_at)
                    SELECT session_id, %s, %s, %s, %s, %s, %s
                    FROM sessions
                    WHERE session_id=%s AND is_active=1
                    """,
                    (
                        entry.roll_number,
                        entry.name,
                        entry.department,
                        entry.section,
                        entry.device_id,
                        entry.timestamp,
                        session_id,
                    ),
                )
            except mysql.connector.IntegrityError as exc:
                if is_duplicate_key(exc):
                    return AppendOutcome.DUPLICATE
                raise
            return AppendOutcome.APPENDED if cur.rowcount > 0 else AppendOutcome.INACTIVE

    def list_attendance(self, session_id: str) -> Sequence[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load_entries(cur, [session_id])[session_id]

    def list_all(self) -> Sequence[AttendanceSession]:
        return self._query_sessions("ORDER BY start_time DESC", ())

    def list_for_issuer(self, teacher_id: str) -> Sequence[AttendanceSession]:
        return self._query_sessions("WHERE teacher_id=%s ORDER BY start_time DESC", (teacher_id,))
