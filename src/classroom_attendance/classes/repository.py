from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SchoolClass, Student


class ClassRepository(Protocol):
    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        raise NotImplementedError

    def list_all(self) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def create_class(self, *, name: str, description: Optional[str]) -> int:
        """Raises ConflictError when the name is taken."""

        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_students(
        self,
        *,
        class_id: Optional[int] = None,
        student_id: Optional[int] = None,
    ) -> Sequence[Student]:
        raise NotImplementedError

    def create_student(self, *, name: str, roll_number: Optional[str], class_id: int) -> int:
        raise NotImplementedError

    def count_all(self, *, class_id: Optional[int] = None) -> int:
        raise NotImplementedError
