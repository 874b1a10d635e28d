from __future__ import annotations

import csv
import io
from typing import Iterable, Sequence

from ...common.datetime_utils import format_iso_date
from ...core.enums import ExportFormat
from ..model import ClassSummaryRow, StudentReportRow
from .base import ReportExporter

STUDENT_HISTORY_COLUMNS = ["Date", "Class", "Topic", "Status"]
CLASS_SUMMARY_COLUMNS = ["Student", "Roll", "Presents", "Total", "Percent"]


def _write_csv(header: Sequence[str], rows: Iterable[Sequence[object]]) -> bytes:
    # QUOTE_MINIMAL quotes values holding a comma, quote or newline and doubles embedded quotes.
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow(["" if v is None else v for v in row])
    return out.getvalue().encode("utf-8")


class CsvExporter(ReportExporter):
    """Comma-delimited tabular encoding."""

    format = ExportFormat.TABULAR
    extension = "csv"
    mimetype = "text/csv; charset=utf-8"

    def render_student_history(self, rows: Sequence[StudentReportRow], *, title: str) -> bytes:
        return _write_csv(
            STUDENT_HISTORY_COLUMNS,
            ([format_iso_date(r.date), r.class_name, r.topic or "", r.status.value] for r in rows),
        )

    def render_class_summary(self, rows: Sequence[ClassSummaryRow], *, title: str) -> bytes:
        return _write_csv(
            CLASS_SUMMARY_COLUMNS,
            ([r.student_name, r.roll_number or "", r.presents, r.total, f"{r.percent:.1f}"] for r in rows),
        )
