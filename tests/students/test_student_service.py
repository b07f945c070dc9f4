from __future__ import annotations

import pytest

from edutrack.core.exceptions import NotFoundError, ValidationError
from edutrack.students.service import StudentService, student_view
from tests.fakes import InMemoryStudents, make_student


def test_bulk_import_counts_added_and_skipped():
    repo = InMemoryStudents([make_student("CS101", "Asha")])
    svc = StudentService(repo)

    result = svc.bulk_import(
        [
            {"rollNumber": "cs101", "name": "Dup", "password": "pw"},
            {"rollNumber": "cs102", "name": "Bala", "password": " pw "},
            {"rollNumber": "CS103", "name": "Chitra", "password": "pw", "department": "ECE"},
        ]
    )

    assert (result.added, result.skipped) == (2, 1)
    assert repo.get_by_roll_number("CS101").name == "Asha"
    assert repo.get_by_roll_number("CS102").password == "pw"


def test_bulk_import_rejects_rows_without_password():
    svc = StudentService(InMemoryStudents())

    with pytest.raises(ValidationError):
        svc.bulk_import([{"rollNumber": "CS1", "name": "A"}])


def test_bulk_import_writes_nothing_when_a_later_row_is_invalid():
    repo = InMemoryStudents()
    svc = StudentService(repo)

    with pytest.raises(ValidationError, match="Row 2"):
        svc.bulk_import(
            [
                {"rollNumber": "CS1", "name": "A", "password": "pw"},
                {"rollNumber": "CS2", "name": "B"},
            ]
        )

    assert repo.list_all() == []


@pytest.mark.parametrize("row", ["CS1", 42, None, ["CS1", "A", "pw"]])
def test_bulk_import_rejects_rows_that_are_not_objects(row):
    repo = InMemoryStudents()
    svc = StudentService(repo)

    with pytest.raises(ValidationError):
        svc.bulk_import([{"rollNumber": "CS1", "name": "A", "password": "pw"}, row])

    assert repo.list_all() == []


def test_list_is_sorted_and_hides_password():
    svc = StudentService(InMemoryStudents([make_student("CS2", "B"), make_student("CS1", "A")]))

    listed = svc.list_students()

    assert [s["rollNumber"] for s in listed] == ["CS1", "CS2"]
    assert all("password" not in s for s in listed)


def test_reset_device_clears_binding():
    repo = InMemoryStudents([make_student("CS1", "A", device_id="D1")])
    svc = StudentService(repo)

    svc.reset_device("cs1")

    assert repo.get_by_roll_number("CS1").device_id is None
    assert student_view(svc.get_student("CS1"))["deviceId"] is None


def test_missing_student_is_not_found():
    svc = StudentService(InMemoryStudents())

    with pytest.raises(NotFoundError):
        svc.get_student("nope")
    with pytest.raises(NotFoundError):
        svc.reset_device("nope")
    with pytest.raises(NotFoundError):
        svc.delete_student("nope")
