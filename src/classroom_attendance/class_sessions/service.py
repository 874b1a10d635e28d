from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..access.policy import authorize, narrow_sessions
from ..classes.repository import ClassRepository
from ..common.datetime_utils import parse_iso_date
from ..common.validators import coerce_positive_int, optional_text
from ..core.enums import Action
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import Principal
from .model import ClassSession
from .repository import ClassSessionRepository

logger = logging.getLogger(__name__)


class ClassSessionService:
    def __init__(self, sessions: ClassSessionRepository, classes: ClassRepository):
        self._sessions = sessions
        self._classes = classes

    def list_sessions(self, principal: Optional[Principal], *, class_id=None) -> Sequence[ClassSession]:
        authorize(principal, Action.VIEW_SESSIONS_FOR_CLASS)

        requested = None
        if class_id not in (None, ""):
            requested = coerce_positive_int(class_id)
            if requested is None:
                raise ValidationError("Invalid class_id")

        scope = narrow_sessions(principal, requested)
        if scope.empty:
            return []
        return self._sessions.list_sessions(class_id=scope.class_id)

    def create_session(self, principal: Optional[Principal], *, class_id, date, topic: Optional[str] = None) -> ClassSession:
        authorize(principal, Action.CREATE_SESSION)
        if class_id in (None, "") or not date:
            raise ValidationError("class_id and date are required")

        cid = coerce_positive_int(class_id)
        if cid is None:
            raise ValidationError("Invalid class_id")
        session_date = parse_iso_date(date)

        if not self._classes.get_by_id(cid):
            raise NotFoundError("Invalid class_id: class does not exist")

        topic = optional_text(topic)
        session_id = self._sessions.create_session(class_id=cid, session_date=session_date, topic=topic)
        logger.info("Created session id=%s class_id=%s date=%s", session_id, cid, session_date)
        return ClassSession(session_id=session_id, class_id=cid, date=session_date, topic=topic)
