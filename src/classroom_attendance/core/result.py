from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from .constants import GENERIC_STORE_MESSAGE
from .exceptions import DomainError

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed core operation: ``kind`` is the error family, ``detail`` a caller-safe message."""

    kind: str
    detail: str
    debug_detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[Any], Err]


def capture(fn: Callable[[], T]) -> Result:
    """Run a service call and fold its outcome into ``Ok`` / ``Err``.

    Domain errors keep their message. Anything else is treated as a store failure:
    logged with traceback and reported with a generic message.
    """

    try:
        return Ok(fn())
    except DomainError as e:
        return Err(kind=e.kind, detail=str(e), debug_detail=getattr(e, "detail", None))
    except Exception as e:
        logger.exception("Unexpected failure in core operation")
        return Err(kind="store", detail=GENERIC_STORE_MESSAGE, debug_detail=str(e))
