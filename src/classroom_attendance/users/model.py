from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account row.

    Note: Plain data object, no DB access code here.
    """

    user_id: int
    username: str
    password_hash: str
    role: Role
    display_name: Optional[str] = None
    class_id: Optional[int] = None
    student_id: Optional[int] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    experience: Optional[str] = None


@dataclass(frozen=True)
class Principal:
    """The authenticated actor of a request; what an auth token resolves to."""

    user_id: int
    username: str
    role: Role
    class_id: Optional[int] = None
    student_id: Optional[int] = None

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            user_id=user.user_id,
            username=user.username,
            role=user.role,
            class_id=user.class_id or None,
            student_id=user.student_id or None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "class_id": self.class_id,
            "student_id": self.student_id,
        }


@dataclass(frozen=True)
class TeacherRow:
    """Read-model for the admin teacher listing."""

    user_id: int
    username: str
    display_name: Optional[str]
    class_id: Optional[int]
    class_name: Optional[str]
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    experience: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "display_name": self.display_name,
            "class_id": self.class_id,
            "class_name": self.class_name,
            "email": self.email,
            "phone": self.phone,
            "subject": self.subject,
            "experience": self.experience,
        }
