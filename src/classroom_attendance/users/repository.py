from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import TeacherRow, User


class UserRepository(Protocol):
    """Repository interface for accounts.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        display_name: Optional[str] = None,
        class_id: Optional[int] = None,
        student_id: Optional[int] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        subject: Optional[str] = None,
        experience: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_password_hash(self, user_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def list_teachers(self, *, class_id: Optional[int] = None) -> Sequence[TeacherRow]:
        raise NotImplementedError

    def count_by_role(self, role: Role) -> int:
        raise NotImplementedError
