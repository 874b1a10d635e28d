from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_iso_date
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceMark:
    """One normalized entry of a commit batch."""

    student_id: int
    status: AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: the stored mark of one student for one session."""

    record_id: int
    session_id: int
    student_id: int
    status: AttendanceStatus
    marked_at: datetime


@dataclass(frozen=True)
class SessionAttendanceRow:
    """Read-model for the attendance-by-session listing."""

    record_id: int
    status: AttendanceStatus
    marked_at: Optional[datetime]
    student_id: int
    student_name: str
    roll_number: Optional[str]
    date: date
    topic: Optional[str]
    class_name: str

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "status": self.status.value,
            "marked_at": self.marked_at.isoformat() if self.marked_at else None,
            "student_id": self.student_id,
            "student_name": self.student_name,
            "roll_number": self.roll_number,
            "date": format_iso_date(self.date),
            "topic": self.topic,
            "class_name": self.class_name,
        }


@dataclass(frozen=True)
class CommitResult:
    session_id: int
    saved: int
