from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..common.datetime_utils import format_iso_date
from ..core.enums import AttendanceStatus


def percent_present(presents: int, total: int) -> float:
    """Display-only percentage, one decimal with halves rounded up; 0.0 when nothing was recorded."""

    if not total:
        return 0.0
    pct = Decimal(presents * 100) / Decimal(total)
    return float(pct.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class StudentReportRow:
    """One session in a student's attendance history."""

    session_id: int
    date: date
    class_id: int
    class_name: str
    topic: Optional[str]
    status: AttendanceStatus
    marked_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "date": format_iso_date(self.date),
            "class_id": self.class_id,
            "class_name": self.class_name,
            "topic": self.topic,
            "status": self.status.value,
            "marked_at": self.marked_at.isoformat() if self.marked_at else None,
        }


@dataclass(frozen=True)
class ClassSummaryRow:
    """Per-student aggregate; total counts sessions where the student has any mark."""

    student_id: int
    student_name: str
    roll_number: Optional[str]
    total: int
    presents: int

    @property
    def absents(self) -> int:
        return self.total - self.presents

    @property
    def percent(self) -> float:
        return percent_present(self.presents, self.total)

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "student_name": self.student_name,
            "roll_number": self.roll_number,
            "total": self.total,
            "presents": self.presents,
            "absents": self.absents,
            "percent": self.percent,
        }
