from __future__ import annotations

from datetime import date

import pytest

from classroom_attendance.core.enums import AttendanceStatus, ExportFormat
from classroom_attendance.core.exceptions import AuthorizationError, ValidationError
from classroom_attendance.reports.model import ClassSummaryRow, percent_present

P = AttendanceStatus.PRESENT
A = AttendanceStatus.ABSENT


def test_summary_lists_every_student_even_without_sessions(seeded, container):
    rows = container.report_service.class_summary(seeded.teacher_p, class_id=seeded.class_id)

    assert [(r.student_name, r.total, r.presents, r.absents, r.percent) for r in rows] == [
        ("Alice", 0, 0, 0, 0.0),
        ("Bob", 0, 0, 0, 0.0),
    ]


def test_summary_counts_one_session(seeded, container):
    seeded.data.mark(seeded.session_id, seeded.alice_id, P)
    seeded.data.mark(seeded.session_id, seeded.bob_id, A)

    rows = container.report_service.class_summary(seeded.admin_p, class_id=str(seeded.class_id))

    assert [(r.student_name, r.total, r.presents, r.absents) for r in rows] == [
        ("Alice", 1, 1, 0),
        ("Bob", 1, 0, 1),
    ]


def test_summary_total_counts_only_sessions_with_a_mark(seeded, container):
    s2 = seeded.data.add_session(seeded.class_id, date(2026, 3, 3))
    s3 = seeded.data.add_session(seeded.class_id, date(2026, 3, 4))
    seeded.data.mark(seeded.session_id, seeded.alice_id, P)
    seeded.data.mark(s2.session_id, seeded.alice_id, A)
    seeded.data.mark(s3.session_id, seeded.alice_id, P)
    seeded.data.mark(s3.session_id, seeded.bob_id, P)

    rows = {r.student_name: r for r in container.report_service.class_summary(seeded.teacher_p, class_id=seeded.class_id)}

    assert (rows["Alice"].total, rows["Alice"].presents, rows["Alice"].percent) == (3, 2, 66.7)
    assert (rows["Bob"].total, rows["Bob"].presents, rows["Bob"].percent) == (1, 1, 100.0)
    for r in rows.values():
        assert r.presents + r.absents == r.total
        assert 0 <= r.presents <= r.total


def test_summary_orders_by_case_sensitive_name(seeded, container):
    seeded.data.add_student("alan", seeded.class_id)
    seeded.data.add_student("Zed", seeded.class_id)

    rows = container.report_service.class_summary(seeded.teacher_p, class_id=seeded.class_id)

    assert [r.student_name for r in rows] == ["Alice", "Bob", "Zed", "alan"]


def test_summary_for_unknown_class_is_empty(seeded, container):
    assert container.report_service.class_summary(seeded.teacher_p, class_id=4040) == []


def test_summary_denied_to_students(seeded, container):
    with pytest.raises(AuthorizationError):
        container.report_service.class_summary(seeded.student_p, class_id=seeded.class_id)


@pytest.mark.parametrize("class_id, message", [(None, "class_id is required"), ("x", "Invalid class_id")])
def test_summary_requires_class_id(seeded, container, class_id, message):
    with pytest.raises(ValidationError, match=message):
        container.report_service.class_summary(seeded.teacher_p, class_id=class_id)


def test_student_history_newest_first(seeded, container):
    later = seeded.data.add_session(seeded.class_id, date(2026, 3, 9), "Geometry")
    seeded.data.mark(seeded.session_id, seeded.alice_id, P)
    seeded.data.mark(later.session_id, seeded.alice_id, A)

    rows = container.report_service.student_report(seeded.student_p, student_id=seeded.alice_id)

    assert [(r.to_dict()["date"], r.topic, r.status) for r in rows] == [
        ("2026-03-09", "Geometry", A),
        ("2026-03-02", "Algebra", P),
    ]
    assert rows[0].class_name == "Class 12"


def test_student_cannot_read_another_students_history(seeded, container):
    with pytest.raises(AuthorizationError):
        container.report_service.student_report(seeded.student_p, student_id=seeded.bob_id)


def test_student_history_for_unknown_student_is_empty(seeded, container):
    assert container.report_service.student_report(seeded.admin_p, student_id=5555) == []


def test_student_export_tabular_is_rejected_for_students(seeded, container):
    svc = container.report_service
    with pytest.raises(ValidationError, match="Students can only download PDF reports."):
        svc.export_student_report(seeded.student_p, student_id=seeded.alice_id, export_format="tabular")
    with pytest.raises(ValidationError, match="Students can only download PDF reports."):
        svc.export_student_report(seeded.student_p, student_id=seeded.alice_id)


def test_student_export_document(seeded, container):
    seeded.data.mark(seeded.session_id, seeded.alice_id, P)

    exported = container.report_service.export_student_report(
        seeded.student_p, student_id=seeded.alice_id, export_format="document"
    )

    assert exported.content_kind == ExportFormat.DOCUMENT
    assert exported.filename == f"student-{seeded.alice_id}-report.pdf"
    assert exported.body.startswith(b"%PDF")


def test_student_export_of_another_student_is_forbidden(seeded, container):
    for fmt in ("document", "tabular"):
        with pytest.raises(AuthorizationError):
            container.report_service.export_student_report(seeded.student_p, student_id=seeded.bob_id, export_format=fmt)


def test_teacher_export_student_csv(seeded, container):
    seeded.data.mark(seeded.session_id, seeded.alice_id, P)

    exported = container.report_service.export_student_report(seeded.teacher_p, student_id=seeded.alice_id)

    assert exported.content_kind == ExportFormat.TABULAR
    assert exported.filename == f"student-{seeded.alice_id}-report.csv"
    assert exported.body.decode("utf-8") == "Date,Class,Topic,Status\n2026-03-02,Class 12,Algebra,present\n"


def test_export_rejects_unknown_format(seeded, container):
    with pytest.raises(ValidationError, match="Invalid format"):
        container.report_service.export_class_summary(seeded.teacher_p, class_id=seeded.class_id, export_format="xlsx")


def test_class_summary_export_uses_summary_rows(seeded, container):
    seeded.data.mark(seeded.session_id, seeded.alice_id, P)
    seeded.data.mark(seeded.session_id, seeded.bob_id, A)

    exported = container.report_service.export_class_summary(seeded.admin_p, class_id=seeded.class_id, export_format="csv")

    assert exported.filename == f"class-{seeded.class_id}-summary.csv"
    assert exported.body.decode("utf-8").splitlines() == [
        "Student,Roll,Presents,Total,Percent",
        "Alice,101,1,1,100.0",
        "Bob,102,0,1,0.0",
    ]


def test_class_summary_export_denied_to_students(seeded, container):
    with pytest.raises(AuthorizationError):
        container.report_service.export_class_summary(seeded.student_p, class_id=seeded.class_id, export_format="pdf")


def test_percent_present():
    assert percent_present(0, 0) == 0.0
    assert percent_present(1, 3) == 33.3
    assert percent_present(2, 2) == 100.0
    assert percent_present(1, 16) == 6.3
    assert percent_present(5, 16) == 31.3
    assert ClassSummaryRow(student_id=1, student_name="A", roll_number=None, total=4, presents=1).absents == 3
