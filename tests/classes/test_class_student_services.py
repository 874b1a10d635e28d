from __future__ import annotations

import pytest

from classroom_attendance.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError


def test_list_classes_ordered_by_name(seeded, container):
    for p in (seeded.admin_p, seeded.teacher_p, seeded.student_p):
        assert [c.name for c in container.class_service.list_classes(p)] == ["Class 11", "Class 12"]


def test_create_class(seeded, container):
    created = container.class_service.create_class(seeded.admin_p, name="  Class 10 ", description="  ")
    assert created.to_dict() == {"id": created.class_id, "name": "Class 10", "description": None}


def test_create_class_rules(seeded, container):
    svc = container.class_service
    with pytest.raises(ValidationError, match="Class name is required"):
        svc.create_class(seeded.admin_p, name="   ")
    with pytest.raises(ConflictError, match="already exists"):
        svc.create_class(seeded.admin_p, name="Class 12")
    with pytest.raises(AuthorizationError):
        svc.create_class(seeded.teacher_p, name="Class 9")


def test_students_see_only_themselves(seeded, container):
    rows = container.student_service.list_students(seeded.student_p, class_id=seeded.other_class_id)
    assert [s.student_id for s in rows] == [seeded.alice_id]


def test_staff_list_students_by_class(seeded, container):
    svc = container.student_service
    assert [s.name for s in svc.list_students(seeded.teacher_p, class_id=seeded.class_id)] == ["Alice", "Bob"]
    assert [s.name for s in svc.list_students(seeded.admin_p)] == ["Alice", "Bob", "Olga"]
    with pytest.raises(ValidationError, match="Invalid class_id"):
        svc.list_students(seeded.admin_p, class_id="abc")


def test_create_student(seeded, container):
    student = container.student_service.create_student(
        seeded.admin_p, name=" Chen ", class_id=str(seeded.class_id), roll_number=" 103 "
    )
    assert student.to_dict() == {"id": student.student_id, "name": "Chen", "roll_number": "103", "class_id": seeded.class_id}
    assert seeded.data.students[student.student_id].class_id == seeded.class_id


def test_create_student_rules(seeded, container):
    svc = container.student_service
    with pytest.raises(ValidationError, match="Student name and class_id are required"):
        svc.create_student(seeded.admin_p, name="", class_id=seeded.class_id)
    with pytest.raises(ValidationError, match="Invalid class_id"):
        svc.create_student(seeded.admin_p, name="Chen", class_id="zero")
    with pytest.raises(NotFoundError, match="class does not exist"):
        svc.create_student(seeded.admin_p, name="Chen", class_id=999)
    with pytest.raises(AuthorizationError):
        svc.create_student(seeded.teacher_p, name="Chen", class_id=seeded.class_id)
