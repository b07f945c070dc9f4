from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from ..common.validators import canonical_identifier, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..staff.repository import StaffRepository
from ..staff.service import StaffService
from ..students.repository import StudentRepository
from ..students.service import StudentService
from .policy import LoginLockPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Authenticated account, tagged by the store that matched it."""

    identifier: str
    name: str
    role: Role

    def to_dict(self) -> dict:
        return {"success": True, "name": self.name, "role": self.role.value, "identifier": self.identifier}


def _parse_role(value: Optional[str]) -> Role:
    try:
        return Role(require_non_empty(value, "Role").upper())
    except ValueError:
        raise ValidationError("Unknown role.")


class AuthService:
    """Use case: login for all three account kinds through one entry point."""

    def __init__(
        self,
        students: StudentRepository,
        teachers: StaffRepository,
        admins: StaffRepository,
        lock_policy: LoginLockPolicy,
    ):
        self._students = students
        self._teachers = teachers
        self._admins = admins
        self._lock_policy = lock_policy

    def login(self, *, role: Optional[str], identifier: Optional[str], password: Optional[str]) -> Principal:
        ident = canonical_identifier(identifier, "ID")
        secret = require_non_empty(password, "Password")
        requested = _parse_role(role or Role.STUDENT.value)

        principal = self._resolve(requested, ident, secret)
        if principal is None:
            logger.warning("Failed login for %s (requested role %s)", ident, requested.value)
            raise AuthenticationError()
        return principal

    def _resolve(self, requested: Role, ident: str, secret: str) -> Optional[Principal]:
        if requested == Role.STUDENT:
            self._lock_policy.ensure_allowed(Role.STUDENT)
            student = self._students.get_by_roll_number(ident)
            if student and student.password == secret:
                return Principal(identifier=ident, name=student.name, role=Role.STUDENT)
            return None

        admin = self._admins.get_by_identifier(ident)
        if admin and admin.password == secret:
            self._lock_policy.ensure_allowed(Role.ADMIN)
            return Principal(identifier=ident, name=admin.name, role=Role.ADMIN)

        self._lock_policy.ensure_allowed(Role.TEACHER)
        teacher = self._teachers.get_by_identifier(ident)
        if teacher and teacher.password == secret:
            return Principal(identifier=ident, name=teacher.name, role=Role.TEACHER)
        return None


class RegistrationService:
    """Self-service sign-up; administrators are provisioned out of band."""

    def __init__(self, students: StudentService, staff: StaffService):
        self._students = students
        self._staff = staff

    def register(self, data: Mapping[str, Optional[str]]) -> str:
        for field in ("identifier", "name", "password", "role"):
            if not data.get(field):
                raise ValidationError("All fields are mandatory for registration.")
        role = _parse_role(data.get("role"))
        if role == Role.ADMIN:
            raise AuthorizationError("Administrative registration is restricted.")
        if role == Role.STUDENT:
            return self._students.register(data)
        return self._staff.register_teacher(data)
