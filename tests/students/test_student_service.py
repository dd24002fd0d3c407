import re

import pytest

from tuition_center.core.enums import RecordStatus
from tuition_center.core.exceptions import NotFoundError, ValidationError
from tuition_center.students.repository import StudentRepository
from tuition_center.students.service import StudentService


def test_admit_assigns_code_and_defaults(container):
    student = container.student_service.admit(full_name=" Asha Rao ", grade="10", phone="98000", parent_name="Ravi")

    assert re.fullmatch(r"DT-ST-\d{4}", student.student_code)
    assert student.full_name == "Asha Rao"
    assert student.status == RecordStatus.ACTIVE
    assert student.joining_date is not None
    assert student.parent_name == "Ravi"


def test_admit_requires_core_fields(container):
    with pytest.raises(ValidationError):
        container.student_service.admit(full_name="", grade="10", phone="1")
    with pytest.raises(ValidationError):
        container.student_service.admit(full_name="A", grade="10")
    with pytest.raises(ValidationError):
        container.student_service.admit(full_name="A", grade="10", phone="1", dob="31-12-2010")
    with pytest.raises(ValidationError):
        container.student_service.admit(full_name="A", grade="10", phone="1", nickname="x")


def test_code_is_redrawn_on_clash(store):
    class ScriptedRng:
        def __init__(self, values):
            self._values = iter(values)

        def randint(self, low, high):
            return next(self._values)

    repo = StudentRepository(store)
    service = StudentService(repo, rng=ScriptedRng([1234, 1234, 5678]))

    first = service.admit(full_name="A", grade="10", phone="1")
    second = service.admit(full_name="B", grade="10", phone="2")

    assert first.student_code == "DT-ST-1234"
    assert second.student_code == "DT-ST-5678"


def test_update_and_toggle_status(container):
    student = container.student_service.admit(full_name="A", grade="9", phone="1")

    updated = container.student_service.update(student.student_id, grade="10", email="a@example.com")
    assert (updated.grade, updated.email, updated.full_name) == ("10", "a@example.com", "A")

    assert container.student_service.toggle_status(student.student_id) == RecordStatus.INACTIVE
    assert container.student_service.toggle_status(student.student_id) == RecordStatus.ACTIVE

    with pytest.raises(ValidationError):
        container.student_service.update(student.student_id)
    with pytest.raises(ValidationError):
        container.student_service.update(student.student_id, phone="  ")
    with pytest.raises(NotFoundError):
        container.student_service.update("missing", grade="10")
    with pytest.raises(NotFoundError):
        container.student_service.toggle_status("missing")


def test_list_filters(container):
    a = container.student_service.admit(full_name="Zed", grade="10", phone="1")
    b = container.student_service.admit(full_name="Amy", grade="10", phone="2")
    container.student_service.admit(full_name="Kim", grade="9", phone="3")
    container.student_service.update(a.student_id, status="Inactive")

    assert [s.full_name for s in container.student_service.list(grade="10")] == ["Amy", "Zed"]
    assert [s.student_id for s in container.student_service.list(grade="10", status="Active")] == [b.student_id]
    assert len(container.student_service.list()) == 3


def test_delete(container):
    student = container.student_service.admit(full_name="A", grade="9", phone="1")

    container.student_service.delete(student.student_id)

    assert container.student_service.get(student.student_id) is None
    with pytest.raises(NotFoundError):
        container.student_service.delete(student.student_id)
