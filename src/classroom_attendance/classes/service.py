from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..access.policy import authorize, narrow_students
from ..common.validators import coerce_positive_int, optional_text, require_non_empty
from ..core.enums import Action
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import Principal
from .model import SchoolClass, Student
from .repository import ClassRepository, StudentRepository

logger = logging.getLogger(__name__)


def _optional_class_filter(class_id) -> Optional[int]:
    if class_id in (None, ""):
        return None
    cid = coerce_positive_int(class_id)
    if cid is None:
        raise ValidationError("Invalid class_id")
    return cid


class ClassService:
    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def list_classes(self, principal: Optional[Principal]) -> Sequence[SchoolClass]:
        authorize(principal, Action.LIST_CLASSES)
        return self._classes.list_all()

    def create_class(self, principal: Optional[Principal], *, name: str, description: Optional[str] = None) -> SchoolClass:
        authorize(principal, Action.CREATE_CLASS)
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Class name is required")
        name = name.strip()
        description = optional_text(description)

        class_id = self._classes.create_class(name=name, description=description)
        logger.info("Created class id=%s name=%s", class_id, name)
        return SchoolClass(class_id=class_id, name=name, description=description)


class StudentService:
    def __init__(self, students: StudentRepository, classes: ClassRepository):
        self._students = students
        self._classes = classes

    def list_students(self, principal: Optional[Principal], *, class_id=None) -> Sequence[Student]:
        authorize(principal, Action.LIST_STUDENTS)
        scope = narrow_students(principal, _optional_class_filter(class_id))
        if scope.empty:
            return []
        return self._students.list_students(class_id=scope.class_id, student_id=scope.student_id)

    def create_student(
        self,
        principal: Optional[Principal],
        *,
        name: str,
        class_id,
        roll_number: Optional[str] = None,
    ) -> Student:
        authorize(principal, Action.CREATE_STUDENT)
        if not name or class_id in (None, ""):
            raise ValidationError("Student name and class_id are required")
        name = require_non_empty(name, "Student name")

        cid = coerce_positive_int(class_id)
        if cid is None:
            raise ValidationError("Invalid class_id")
        if not self._classes.get_by_id(cid):
            raise NotFoundError("Invalid class_id: class does not exist")

        roll = optional_text(roll_number)
        student_id = self._students.create_student(name=name, roll_number=roll, class_id=cid)
        logger.info("Created student id=%s class_id=%s", student_id, cid)
        return Student(student_id=student_id, name=name, roll_number=roll, class_id=cid)
