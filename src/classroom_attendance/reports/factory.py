from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ExportFormat
from .exporters.base import ReportExporter
from .exporters.document import PdfExporter
from .exporters.tabular import CsvExporter

_FORMAT_ALIASES = {
    "tabular": ExportFormat.TABULAR,
    "csv": ExportFormat.TABULAR,
    "document": ExportFormat.DOCUMENT,
    "pdf": ExportFormat.DOCUMENT,
}


def parse_export_format(value: Optional[str]) -> Optional[ExportFormat]:
    """Missing means tabular; an unknown value gives None."""

    if value is None or not str(value).strip():
        return ExportFormat.TABULAR
    return _FORMAT_ALIASES.get(str(value).strip().lower())


@dataclass
class ExporterFactory:
    """Factory Pattern: pick the encoding for a requested export format."""

    def for_format(self, export_format: ExportFormat) -> ReportExporter:
        if export_format == ExportFormat.DOCUMENT:
            return PdfExporter()
        return CsvExporter()
