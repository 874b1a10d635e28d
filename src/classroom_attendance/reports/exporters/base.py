from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from ...core.enums import ExportFormat
from ..model import ClassSummaryRow, StudentReportRow


@dataclass(frozen=True)
class ExportedFile:
    """What the export sink receives: a filename, a content-kind tag and the body."""

    filename: str
    content_kind: ExportFormat
    mimetype: str
    body: bytes


class ReportExporter(ABC):
    """Strategy Pattern: one physical encoding for both report kinds."""

    format: ExportFormat
    extension: str
    mimetype: str

    @abstractmethod
    def render_student_history(self, rows: Sequence[StudentReportRow], *, title: str) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def render_class_summary(self, rows: Sequence[ClassSummaryRow], *, title: str) -> bytes:
        raise NotImplementedError

    def export_student_history(self, rows: Sequence[StudentReportRow], *, student_id: int) -> ExportedFile:
        body = self.render_student_history(rows, title="Student Attendance Report")
        return self._wrap(f"student-{student_id}-report", body)

    def export_class_summary(self, rows: Sequence[ClassSummaryRow], *, class_id: int) -> ExportedFile:
        body = self.render_class_summary(rows, title="Class Attendance Summary")
        return self._wrap(f"class-{class_id}-summary", body)

    def _wrap(self, stem: str, body: bytes) -> ExportedFile:
        return ExportedFile(
            filename=f"{stem}.{self.extension}",
            content_kind=self.format,
            mimetype=self.mimetype,
            body=body,
        )
