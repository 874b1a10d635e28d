from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_iso_date


@dataclass(frozen=True)
class ClassSession:
    """Domain entity: one meeting of a class on a date (not a login session)."""

    session_id: int
    class_id: int
    date: date
    topic: Optional[str] = None
    class_name: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "id": self.session_id,
            "class_id": self.class_id,
            "date": format_iso_date(self.date),
            "topic": self.topic,
        }
        if self.class_name is not None:
            out["class_name"] = self.class_name
        return out
