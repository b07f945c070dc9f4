from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from ..common.datetime_utils import to_iso
from ..common.validators import canonical_identifier, optional_text, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkImportResult:
    added: int
    skipped: int


def student_view(student: Student) -> dict:
    """Public representation; the password never leaves the service."""
    return {
        "rollNumber": student.roll_number,
        "name": student.name,
        "department": student.department,
        "section": student.section,
        "phone": student.phone,
        "deviceId": student.device_id,
        "createdAt": to_iso(student.created_at),
    }


class StudentService:
    """Use case: manage student accounts (registration and admin tools)."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def _build(self, data: Mapping[str, Optional[str]]) -> Student:
        return Student(
            roll_number=canonical_identifier(data.get("rollNumber") or data.get("identifier"), "Roll Number"),
            name=require_non_empty(data.get("name"), "Name"),
            password=require_non_empty(data.get("password"), "Password"),
            department=optional_text(data.get("department")),
            section=optional_text(data.get("section")),
            phone=optional_text(data.get("phone")),
        )

    def register(self, data: Mapping[str, Optional[str]]) -> str:
        student = self._build(data)
        if self._students.get_by_roll_number(student.roll_number):
            raise ConflictError("This Roll Number is already in use.")
        if not self._students.create(student):
            raise ConflictError("This Roll Number is already in use.")
        logger.info("Student registered: %s", student.roll_number)
        return student.roll_number

    def bulk_import(self, rows: Iterable[Mapping[str, Optional[str]]]) -> BulkImportResult:
        if rows is None:
            raise ValidationError("students list is required.")
        # Validate every row before writing any.
        students = []
        for index, data in enumerate(rows, start=1):
            if not isinstance(data, Mapping):
                raise ValidationError(f"Row {index} must be an object.")
            try:
                students.append(self._build(data))
            except ValidationError as e:
                raise ValidationError(f"Row {index}: {e.message}") from e

        added = skipped = 0
        for student in students:
            if self._students.create(student):
                added += 1
            else:
                skipped += 1
        logger.info("Bulk import finished: added=%s skipped=%s", added, skipped)
        return BulkImportResult(added=added, skipped=skipped)

    def list_students(self) -> list[dict]:
        return [student_view(s) for s in self._students.list_all()]

    def get_student(self, roll_number: str) -> Student:
        student = self._students.get_by_roll_number(canonical_identifier(roll_number, "Roll Number"))
        if not student:
            raise NotFoundError("Student record not found.")
        return student

    def delete_student(self, roll_number: str) -> None:
        roll = canonical_identifier(roll_number, "Roll Number")
        if not self._students.delete(roll):
            raise NotFoundError("Student record not found.")
        logger.info("Student deleted: %s", roll)

    def reset_device(self, roll_number: str) -> None:
        """Administrative reset: the only way a bound device token is cleared."""
        student = self.get_student(roll_number)
        if student.device_id is None:
            return
        self._students.clear_device(student.roll_number)
        logger.info("Device binding reset for %s", student.roll_number)
