from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SchoolClass:
    """Domain entity: a class (group of students), not a Python class."""

    class_id: int
    name: str
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.class_id, "name": self.name, "description": self.description}


@dataclass(frozen=True)
class Student:
    student_id: int
    name: str
    roll_number: Optional[str]
    class_id: int

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "roll_number": self.roll_number,
            "class_id": self.class_id,
        }
