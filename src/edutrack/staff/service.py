from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..common.datetime_utils import to_iso
from ..common.validators import canonical_identifier, optional_text, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError
from .model import StaffMember
from .repository import StaffRepository

logger = logging.getLogger(__name__)


def staff_view(member: StaffMember) -> dict:
    return {
        "identifier": member.identifier,
        "name": member.name,
        "department": member.department,
        "role": member.role.value,
        "createdAt": to_iso(member.created_at),
    }


class StaffService:
    """Use case: teacher accounts (registration and admin tools)."""

    def __init__(self, teachers: StaffRepository, admins: StaffRepository):
        self._teachers = teachers
        self._admins = admins

    def register_teacher(self, data: Mapping[str, Optional[str]]) -> str:
        member = StaffMember(
            identifier=canonical_identifier(data.get("identifier"), "Faculty ID"),
            name=require_non_empty(data.get("name"), "Name"),
            password=require_non_empty(data.get("password"), "Password"),
            role=Role.TEACHER,
            department=optional_text(data.get("department")),
        )
        # Faculty and administrator ids share one namespace at login.
        if self._teachers.get_by_identifier(member.identifier) or self._admins.get_by_identifier(member.identifier):
            raise ConflictError("This Faculty ID is already registered.")
        if not self._teachers.create(member):
            raise ConflictError("This Faculty ID is already registered.")
        logger.info("Teacher registered: %s", member.identifier)
        return member.identifier

    def list_teachers(self) -> list[dict]:
        return [staff_view(m) for m in self._teachers.list_all()]

    def get_teacher(self, identifier: str) -> StaffMember:
        member = self._teachers.get_by_identifier(canonical_identifier(identifier, "Faculty ID"))
        if not member:
            raise NotFoundError("Teacher record not found.")
        return member

    def delete_teacher(self, identifier: str) -> None:
        ident = canonical_identifier(identifier, "Faculty ID")
        if not self._teachers.delete(ident):
            raise NotFoundError("Teacher record not found.")
        logger.info("Teacher deleted: %s", ident)
