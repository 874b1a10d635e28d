from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..access.policy import authorize
from ..class_sessions.repository import ClassSessionRepository
from ..common.validators import coerce_positive_int
from ..core.enums import Action, AttendanceStatus
from ..core.exceptions import InvalidSessionError, ValidationError
from ..users.model import Principal
from .model import AttendanceMark, CommitResult, SessionAttendanceRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_VALID_STATUSES = {s.value for s in AttendanceStatus}


def _raw_status(record: Any) -> str:
    value = record.get("status") if isinstance(record, dict) else None
    return str(value).strip().lower()


def normalize_records(records: Sequence[Any]) -> list[AttendanceMark]:
    """Validate a raw batch and turn it into marks.

    Entries whose student_id is not a positive integer are dropped. A bad status anywhere
    in the batch, dropped entries included, rejects the whole batch, as does a batch that
    ends up empty.
    """

    if any(_raw_status(r) not in _VALID_STATUSES for r in records):
        raise ValidationError('Invalid status values. Must be "present" or "absent"')

    marks: list[AttendanceMark] = []
    for r in records:
        student_id = coerce_positive_int(r.get("student_id"))
        if student_id is None:
            continue
        marks.append(AttendanceMark(student_id=student_id, status=AttendanceStatus(_raw_status(r))))

    if not marks:
        raise ValidationError("No valid student_ids provided")
    return marks


class AttendanceService:
    """Use case: teachers commit a session's attendance; staff read it back."""

    def __init__(self, attendance: AttendanceRepository, sessions: ClassSessionRepository):
        self._attendance = attendance
        self._sessions = sessions

    def commit_attendance(self, principal: Optional[Principal], *, session_id, records) -> CommitResult:
        authorize(principal, Action.MARK_ATTENDANCE)

        if session_id in (None, "") or not isinstance(records, list) or not records:
            raise ValidationError("session_id and an array of records are required")
        sid = coerce_positive_int(session_id)
        if sid is None:
            raise ValidationError("Invalid session_id")

        with self._attendance.transaction() as uow:
            class_id = uow.lock_session(sid)
            if class_id is None:
                raise InvalidSessionError("Invalid session_id")

            marks = normalize_records(records)

            distinct_ids = sorted({m.student_id for m in marks})
            if uow.count_students_in_class(distinct_ids, class_id) != len(distinct_ids):
                logger.warning(
                    "Rejected attendance batch for session_id=%s: students outside class_id=%s",
                    sid,
                    class_id,
                )
                raise ValidationError("Some students do not belong to this session's class")

            for m in marks:
                uow.upsert(session_id=sid, student_id=m.student_id, status=m.status)

        logger.info("Saved attendance session_id=%s records=%d", sid, len(marks))
        return CommitResult(session_id=sid, saved=len(marks))

    def list_for_session(self, principal: Optional[Principal], *, session_id) -> Sequence[SessionAttendanceRow]:
        authorize(principal, Action.VIEW_SESSION_ATTENDANCE)
        if session_id in (None, ""):
            raise ValidationError("session_id is required")
        sid = coerce_positive_int(session_id)
        if sid is None or not self._sessions.get_by_id(sid):
            raise InvalidSessionError("Invalid session_id")
        return self._attendance.list_for_session(sid)
