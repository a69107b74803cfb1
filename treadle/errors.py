"""Treadle errors."""
from __future__ import annotations
from typing import Any, Optional


class StoreError(Exception):
    """Base class for all treadle errors."""


class ConfigurationError(StoreError, TypeError):
    """Bad input from the caller, such as a reducer that is not callable."""


class InvalidOperationError(StoreError, RuntimeError):
    """A store method was called while a reducer is executing."""


class StateError(StoreError, ValueError):
    """A reducer returned None.

    Args:
        key: The state slice whose reducer misbehaved.
        action_type: The type of the action being reduced, if any.
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        action_type: Any = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.action_type = action_type


class ReducerShapeError(ConfigurationError, StateError):
    """A combined reducer failed validation when it was built.

    Raised the first time the combined reducer is called, not when
    it is created.
    """
