from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import StaffMember
from .repository import StaffRepository


class _MySQLStaffRepository(StaffRepository):
    table = ""
    role = Role.TEACHER
    columns = "identifier, name, password, created_at"

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _to_member(self, row: dict) -> StaffMember:
        return StaffMember(
            identifier=row["identifier"],
            name=row["name"],
            password=row["password"],
            role=self.role,
            department=row.get("department"),
            created_at=row.get("created_at"),
        )

    def get_by_identifier(self, identifier: str) -> Optional[StaffMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {self.columns} FROM {self.table} WHERE identifier=%s", (identifier,))
            row = fetchone(cur)
            return self._to_member(row) if row else None

    def list_all(self) -> Sequence[StaffMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {self.columns} FROM {self.table} ORDER BY identifier ASC")
            return [self._to_member(r) for r in fetchall(cur)]

    def delete(self, identifier: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self.table} WHERE identifier=%s", (identifier,))
            return cur.rowcount > 0


class MySQLTeacherRepository(_MySQLStaffRepository):
    table = "teachers"
    role = Role.TEACHER
    columns = "identifier, name, password, department, created_at"

    def create(self, member: StaffMember) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    "INSERT INTO teachers(identifier, name, password, department) VALUES(%s,%s,%s,%s)",
                    (member.identifier, member.name, member.password, member.department),
                )
            except mysql.connector.IntegrityError as exc:
                if is_duplicate_key(exc):
                    return False
                raise
            return True


class MySQLAdminRepository(_MySQLStaffRepository):
    table = "admins"
    role = Role.ADMIN

    def create(self, member: StaffMember) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    "INSERT INTO admins(identifier, name, password) VALUES(%s,%s,%s)",
                    (member.identifier, member.name, member.password),
                )
            except mysql.connector.IntegrityError as exc:
                if is_duplicate_key(exc):
                    return False
                raise
            return True
