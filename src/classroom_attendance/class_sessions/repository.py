from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ClassSession


class ClassSessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[ClassSession]:
        raise NotImplementedError

    def list_sessions(self, *, class_id: Optional[int] = None) -> Sequence[ClassSession]:
        """Newest first: date DESC, then id DESC."""

        raise NotImplementedError

    def create_session(self, *, class_id: int, session_date: date, topic: Optional[str]) -> int:
        raise NotImplementedError

    def count_for_class_on(self, *, class_id: int, session_date: date) -> int:
        raise NotImplementedError
