from __future__ import annotations

import io
from typing import Sequence
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from ...common.datetime_utils import format_iso_date
from ...core.enums import ExportFormat
from ..model import ClassSummaryRow, StudentReportRow
from .base import ReportExporter


def student_history_line(row: StudentReportRow) -> str:
    return f"{format_iso_date(row.date)}  |  {row.class_name}  |  {row.topic or ''}  |  {row.status.value.upper()}"


def class_summary_line(row: ClassSummaryRow) -> str:
    return f"{row.student_name} ({row.roll_number or ''}) - {row.presents}/{row.total} ({row.percent:.1f}%)"


class PdfExporter(ReportExporter):
    """Paginated document: a centered title, then one text line per row in report order."""

    format = ExportFormat.DOCUMENT
    extension = "pdf"
    mimetype = "application/pdf"

    def __init__(self, *, margin: int = 40, font_size: int = 11):
        self._margin = margin
        self._font_size = font_size

    def render_student_history(self, rows: Sequence[StudentReportRow], *, title: str) -> bytes:
        return self._render(title, [student_history_line(r) for r in rows])

    def render_class_summary(self, rows: Sequence[ClassSummaryRow], *, title: str) -> bytes:
        return self._render(title, [class_summary_line(r) for r in rows])

    def _render(self, title: str, lines: Sequence[str]) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=self._margin,
            rightMargin=self._margin,
            topMargin=self._margin,
            bottomMargin=self._margin,
            title=title,
        )
        styles = getSampleStyleSheet()
        title_style = ParagraphStyle("ReportTitle", parent=styles["Title"], fontSize=18, alignment=TA_CENTER)
        line_style = ParagraphStyle("ReportLine", parent=styles["Normal"], fontSize=self._font_size, leading=self._font_size + 4)

        story = [Paragraph(escape(title), title_style), Spacer(1, 12)]
        # Paragraph parses mini-markup, so row text is escaped.
        story.extend(Paragraph(escape(line), line_style) for line in lines)

        doc.build(story)
        return buffer.getvalue()
