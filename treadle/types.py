"""Treadle value types."""
from __future__ import annotations
import enum
from typing import Any, Callable, Mapping, Optional

State = Any
Action = Mapping[str, Any]
Reducer = Callable[[Optional[State], Action], State]
Listener = Callable[[], None]
Unsubscribe = Callable[[], None]


class _Null(enum.Enum):
    """Deliberately empty state value.

    ``None`` means "no value yet" and may never be returned by a reducer.
    Return ``NULL`` instead when a slice should hold nothing.
    """

    NULL = "NULL"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NULL"


NULL = _Null.NULL


def is_plain_record(value: Any) -> bool:
    """Check whether a value is a plain data record (a mapping)."""
    return isinstance(value, Mapping)
