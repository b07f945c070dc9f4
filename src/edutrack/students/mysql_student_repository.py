from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import BindOutcome
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Student
from .repository import StudentRepository

_COLUMNS = "roll_number, name, password, department, section, phone, device_id, created_at"


def _to_student(row: dict) -> Student:
    return Student(
        roll_number=row["roll_number"],
        name=row["name"],
        password=row["password"],
        department=row.get("department"),
        section=row.get("section"),
        phone=row.get("phone"),
        device_id=row.get("device_id"),
        created_at=row.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_roll_number(self, roll_number: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE roll_number=%s", (roll_number,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def find_by_device(self, device_id: str, *, exclude_roll_number: Optional[str] = None) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            if exclude_roll_number is None:
                cur.execute(f"SELECT {_COLUMNS} FROM students WHERE device_id=%s", (device_id,))
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM students WHERE device_id=%s AND roll_number<>%s",
                    (device_id, exclude_roll_number),
                )
            row = fetchone(cur)
            return _to_student(row) if row else None

    def bind_device(self, roll_number: str, device_id: str) -> BindOutcome:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    "UPDATE students SET device_id=%s WHERE roll_number=%s AND device_id IS NULL",
                    (device_id, roll_number),
                )
            except mysql.connector.IntegrityError as exc:
                if is_duplicate_key(exc):
                    return BindOutcome.TOKEN_TAKEN
                raise
            if cur.rowcount > 0:
                return BindOutcome.BOUND

            cur.execute("SELECT device_id FROM students WHERE roll_number=%s", (roll_number,))
            row = fetchone(cur)
            if not row:
                return BindOutcome.MISSING
            if row.get("device_id") == device_id:
                return BindOutcome.BOUND
            return BindOutcome.ALREADY_BOUND

    def clear_device(self, roll_number: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET device_id=NULL WHERE roll_number=%s", (roll_number,))
            return cur.rowcount > 0

    def create(self, student: Student) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO students(roll_number, name, password, department, section, phone)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        student.roll_number,
                        student.name,
                        student.password,
                        student.department,
                        student.section,
                        student.phone,
                    ),
                )
            except mysql.connector.IntegrityError as exc:
                if is_duplicate_key(exc):
                    return False
                raise
            return True

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY roll_number ASC")
            return [_to_student(r) for r in fetchall(cur)]

    def delete(self, roll_number: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE roll_number=%s", (roll_number,))
            return cur.rowcount > 0
