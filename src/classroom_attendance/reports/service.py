from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..access.policy import AccessScope, authorize
from ..common.validators import coerce_positive_int
from ..core.enums import Action
from ..core.exceptions import ValidationError
from ..users.model import Principal
from .exporters.base import ExportedFile
from .factory import ExporterFactory, parse_export_format
from .model import ClassSummaryRow, StudentReportRow
from .repository import ReportRepository

logger = logging.getLogger(__name__)


def _require_id(value, field_name: str) -> int:
    if value in (None, ""):
        raise ValidationError(f"{field_name} is required")
    num = coerce_positive_int(value)
    if num is None:
        raise ValidationError(f"Invalid {field_name}")
    return num


class ReportService:
    """Use case: attendance history per student and per-class summaries, plus exports."""

    def __init__(self, reports: ReportRepository, *, exporter_factory: Optional[ExporterFactory] = None):
        self._reports = reports
        self._factory = exporter_factory or ExporterFactory()

    def student_report(self, principal: Optional[Principal], *, student_id) -> Sequence[StudentReportRow]:
        sid = _require_id(student_id, "student_id")
        authorize(principal, Action.VIEW_STUDENT_REPORT, AccessScope(student_id=sid))
        return self._reports.student_history(sid)

    def class_summary(self, principal: Optional[Principal], *, class_id) -> Sequence[ClassSummaryRow]:
        cid = _require_id(class_id, "class_id")
        authorize(principal, Action.VIEW_CLASS_SUMMARY, AccessScope(class_id=cid))
        return self._sorted_summary(cid)

    def export_student_report(self, principal: Optional[Principal], *, student_id, export_format=None) -> ExportedFile:
        sid = _require_id(student_id, "student_id")
        fmt = parse_export_format(export_format)
        authorize(principal, Action.EXPORT_STUDENT_REPORT, AccessScope(student_id=sid, export_format=fmt))
        if fmt is None:
            raise ValidationError("Invalid format. Use tabular or document")

        rows = self._reports.student_history(sid)
        exported = self._factory.for_format(fmt).export_student_history(rows, student_id=sid)
        logger.info("Exported student report student_id=%s format=%s rows=%d", sid, fmt.value, len(rows))
        return exported

    def export_class_summary(self, principal: Optional[Principal], *, class_id, export_format=None) -> ExportedFile:
        cid = _require_id(class_id, "class_id")
        authorize(principal, Action.EXPORT_CLASS_SUMMARY, AccessScope(class_id=cid))
        fmt = parse_export_format(export_format)
        if fmt is None:
            raise ValidationError("Invalid format. Use tabular or document")

        rows = self._sorted_summary(cid)
        exported = self._factory.for_format(fmt).export_class_summary(rows, class_id=cid)
        logger.info("Exported class summary class_id=%s format=%s rows=%d", cid, fmt.value, len(rows))
        return exported

    def _sorted_summary(self, class_id: int) -> list[ClassSummaryRow]:
        # Case-sensitive name order whatever the store's collation did.
        return sorted(self._reports.class_summary(class_id), key=lambda r: (r.student_name, r.student_id))
