from __future__ import annotations

from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import SessionAttendanceRow


class AttendanceUnitOfWork(Protocol):
    """Reads and writes bound to one open transaction."""

    def lock_session(self, session_id: int) -> Optional[int]:
        """Lock the session row for the rest of the transaction and return its class_id."""

        raise NotImplementedError

    def count_students_in_class(self, student_ids: Sequence[int], class_id: int) -> int:
        raise NotImplementedError

    def upsert(self, *, session_id: int, student_id: int, status: AttendanceStatus) -> None:
        """Insert, or update status only; an existing marked_at is left untouched."""

        raise NotImplementedError


class AttendanceRepository(Protocol):
    def transaction(self) -> ContextManager[AttendanceUnitOfWork]:
        """All-or-nothing scope: commit on normal exit, rollback on any exception."""

        raise NotImplementedError

    def list_for_session(self, session_id: int) -> Sequence[SessionAttendanceRow]:
        raise NotImplementedError
