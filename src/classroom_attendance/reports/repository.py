from __future__ import annotations

from typing import Protocol, Sequence

from .model import ClassSummaryRow, StudentReportRow


class ReportRepository(Protocol):
    def student_history(self, student_id: int) -> Sequence[StudentReportRow]:
        raise NotImplementedError

    def class_summary(self, class_id: int) -> Sequence[ClassSummaryRow]:
        """One row per student of the class, students without marks included."""

        raise NotImplementedError
