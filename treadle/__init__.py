"""Treadle - a predictable state container for Python."""
from . import action_types
from .combine import combine_reducers
from .compose import compose
from .errors import (
    ConfigurationError,
    InvalidOperationError,
    ReducerShapeError,
    StateError,
    StoreError,
)
from .observable import Observable, ObserverHandle, SubscriptionStrategy
from .store import Enhancer, Store, StoreFactory, create_store
from .types import NULL, is_plain_record

__all__ = [
    "ConfigurationError",
    "Enhancer",
    "InvalidOperationError",
    "NULL",
    "Observable",
    "ObserverHandle",
    "ReducerShapeError",
    "StateError",
    "Store",
    "StoreError",
    "StoreFactory",
    "SubscriptionStrategy",
    "action_types",
    "combine_reducers",
    "compose",
    "create_store",
    "is_plain_record",
]
