from __future__ import annotations

import pytest

from edutrack.auth.policy import is_lock_exempt, parse_roles
from edutrack.core.enums import Role
from edutrack.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    SystemLockedError,
    ValidationError,
)
from tests.fakes import admin, make_container, make_student, teacher


def _container(**kwargs):
    return make_container(
        students=[make_student("CS101", "Asha", password="secret")],
        teachers=[teacher("FAC01", "Dr. Rao", password="teach")],
        admins=[admin("ADMIN01", "Root", password="root")],
        **kwargs,
    )


def test_student_login_normalizes_identifier_and_trims_password():
    c = _container()

    principal = c.auth_service.login(role="STUDENT", identifier=" cs101 ", password=" secret ")

    assert principal.role == Role.STUDENT
    assert principal.identifier == "CS101"
    assert principal.to_dict() == {"success": True, "name": "Asha", "role": "STUDENT", "identifier": "CS101"}


def test_staff_login_resolves_admin_before_teacher():
    c = _container()

    assert c.auth_service.login(role="TEACHER", identifier="admin01", password="root").role == Role.ADMIN
    assert c.auth_service.login(role="TEACHER", identifier="fac01", password="teach").role == Role.TEACHER


def test_wrong_password_is_authentication_error():
    c = _container()

    with pytest.raises(AuthenticationError):
        c.auth_service.login(role="STUDENT", identifier="CS101", password="nope")
    with pytest.raises(AuthenticationError):
        c.auth_service.login(role="TEACHER", identifier="FAC01", password="nope")


def test_missing_credentials_are_invalid():
    c = _container()

    with pytest.raises(ValidationError):
        c.auth_service.login(role="STUDENT", identifier="", password="x")


@pytest.mark.parametrize("password", [None, "  ", 1234, ["secret"]])
def test_non_text_or_blank_password_is_invalid(password):
    c = _container()

    with pytest.raises(ValidationError):
        c.auth_service.login(role="STUDENT", identifier="CS101", password=password)


def test_lock_blocks_students_and_teachers_but_not_admins():
    c = _container()
    c.settings_service.replace({"isLoginLocked": True})

    with pytest.raises(SystemLockedError):
        c.auth_service.login(role="STUDENT", identifier="CS101", password="secret")
    with pytest.raises(SystemLockedError):
        c.auth_service.login(role="TEACHER", identifier="FAC01", password="teach")
    assert c.auth_service.login(role="TEACHER", identifier="ADMIN01", password="root").role == Role.ADMIN


def test_exempt_roles_are_configurable():
    c = _container(lock_exempt_roles=["ADMIN", "TEACHER"])
    c.settings_service.replace({"isLoginLocked": True})

    assert c.auth_service.login(role="TEACHER", identifier="FAC01", password="teach").role == Role.TEACHER


def test_is_lock_exempt_is_pure():
    exempt = parse_roles(["admin", " teacher "])

    assert exempt == frozenset({Role.ADMIN, Role.TEACHER})
    assert is_lock_exempt(Role.ADMIN, exempt)
    assert not is_lock_exempt(Role.STUDENT, exempt)


def test_register_student_and_teacher():
    c = _container()

    roll = c.registration_service.register(
        {"identifier": "cs102", "name": "Bala", "password": "pw", "role": "STUDENT", "section": "B"}
    )
    fac = c.registration_service.register({"identifier": "fac02", "name": "Dr. Iyer", "password": "pw", "role": "TEACHER"})

    assert roll == "CS102"
    assert c.students_repo.get_by_roll_number("CS102").section == "B"
    assert fac == "FAC02"
    assert c.teachers_repo.get_by_identifier("FAC02").name == "Dr. Iyer"


def test_register_rejects_duplicates_across_staff_stores():
    c = _container()

    with pytest.raises(ConflictError):
        c.registration_service.register({"identifier": "cs101", "name": "X", "password": "pw", "role": "STUDENT"})
    with pytest.raises(ConflictError):
        c.registration_service.register({"identifier": "admin01", "name": "X", "password": "pw", "role": "TEACHER"})


def test_admin_self_registration_is_refused():
    c = _container()

    with pytest.raises(AuthorizationError):
        c.registration_service.register({"identifier": "ADM2", "name": "X", "password": "pw", "role": "ADMIN"})


def test_register_requires_all_fields():
    c = _container()

    with pytest.raises(ValidationError):
        c.registration_service.register({"identifier": "X1", "name": "", "password": "pw", "role": "STUDENT"})
