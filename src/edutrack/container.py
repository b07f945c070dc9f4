from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .attendance.service import AdmissionService
from .auth.policy import LoginLockPolicy, parse_roles
from .auth.service import AuthService, RegistrationService
from .core.constants import DEFAULT_LOCK_EXEMPT_ROLES
from .database.connection import DBConfig, DatabaseConnection
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionLifecycleService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .staff.mysql_staff_repository import MySQLAdminRepository, MySQLTeacherRepository
from .staff.repository import StaffRepository
from .staff.service import StaffService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    teachers_repo: StaffRepository
    admins_repo: StaffRepository
    sessions_repo: SessionRepository
    settings_repo: SettingsRepository

    settings_service: SettingsService
    student_service: StudentService
    staff_service: StaffService
    auth_service: AuthService
    registration_service: RegistrationService
    session_service: SessionLifecycleService
    admission_service: AdmissionService


def assemble(
    *,
    students_repo: StudentRepository,
    teachers_repo: StaffRepository,
    admins_repo: StaffRepository,
    sessions_repo: SessionRepository,
    settings_repo: SettingsRepository,
    lock_exempt_roles: Iterable[str] = DEFAULT_LOCK_EXEMPT_ROLES,
    admission_enforces_login_lock: bool = True,
) -> Container:
    """Wire services over any set of repositories (MySQL or in-memory)."""
    settings_service = SettingsService(settings_repo)
    lock_policy = LoginLockPolicy(settings=settings_service, exempt_roles=parse_roles(lock_exempt_roles))
    student_service = StudentService(students_repo)
    staff_service = StaffService(teachers_repo, admins_repo)

    return Container(
        students_repo=students_repo,
        teachers_repo=teachers_repo,
        admins_repo=admins_repo,
        sessions_repo=sessions_repo,
        settings_repo=settings_repo,
        settings_service=settings_service,
        student_service=student_service,
        staff_service=staff_service,
        auth_service=AuthService(students_repo, teachers_repo, admins_repo, lock_policy),
        registration_service=RegistrationService(student_service, staff_service),
        session_service=SessionLifecycleService(sessions_repo),
        admission_service=AdmissionService(
            sessions_repo,
            students_repo,
            lock_policy=lock_policy if admission_enforces_login_lock else None,
        ),
    )


def build_container(
    *,
    db_config: dict,
    lock_exempt_roles: Optional[Iterable[str]] = None,
    admission_enforces_login_lock: bool = True,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble(
        students_repo=MySQLStudentRepository(conn),
        teachers_repo=MySQLTeacherRepository(conn),
        admins_repo=MySQLAdminRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        lock_exempt_roles=lock_exempt_roles if lock_exempt_roles is not None else DEFAULT_LOCK_EXEMPT_ROLES,
        admission_enforces_login_lock=admission_enforces_login_lock,
    )
