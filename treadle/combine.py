"""Combine independently owned reducers into one root reducer."""
from __future__ import annotations
import logging
from typing import Any, Dict, Mapping, Optional

from . import action_types
from .config import is_production
from .errors import ReducerShapeError, StateError
from .types import Action, Reducer, State, is_plain_record

logger = logging.getLogger(__name__)


def _undefined_state_message(key: str, action: Action) -> str:
    action_type = action.get("type") if is_plain_record(action) else None
    action_description = (
        f'action "{action_type}"' if action_type is not None else "an action"
    )

    return (
        f'Given {action_description}, reducer "{key}" returned None. '
        "To ignore an action, you must explicitly return the previous state. "
        "If you want this reducer to hold no value, return NULL instead of None."
    )


def _unexpected_state_shape_message(
    state: Any,
    reducers: Mapping[str, Reducer],
    action: Action,
    unexpected_key_cache: Dict[Any, bool],
) -> Optional[str]:
    reducer_keys = [str(key) for key in reducers]
    action_type = action.get("type") if is_plain_record(action) else None
    argument_name = (
        "preloaded_state argument passed to create_store"
        if action_type == action_types.INIT
        else "previous state received by the reducer"
    )

    if len(reducer_keys) == 0:
        return (
            "Store does not have a valid reducer. Make sure the argument passed "
            "to combine_reducers is a mapping whose values are reducers."
        )

    if not is_plain_record(state):
        return (
            f'The {argument_name} has unexpected type of "{type(state).__name__}". '
            "Expected argument to be a mapping with the following keys: "
            f'"{", ".join(reducer_keys)}"'
        )

    if action_type == action_types.REPLACE:
        return None

    unexpected_keys = [
        key
        for key in state
        if key not in reducers and key not in unexpected_key_cache
    ]

    for key in unexpected_keys:
        unexpected_key_cache[key] = True

    if len(unexpected_keys) > 0:
        return (
            f"Unexpected {'keys' if len(unexpected_keys) > 1 else 'key'} "
            f'"{", ".join(str(key) for key in unexpected_keys)}" '
            f"found in {argument_name}. "
            "Expected to find one of the known reducer keys instead: "
            f'"{", ".join(reducer_keys)}". Unexpected keys will be ignored.'
        )

    return None


def _assert_reducer_shape(reducers: Mapping[str, Reducer]) -> None:
    for key, reducer in reducers.items():
        initial_state = reducer(None, {"type": action_types.INIT})

        if initial_state is None:
            raise ReducerShapeError(
                f'Reducer "{key}" returned None during initialization. '
                "If the state passed to the reducer is None, you must "
                "explicitly return the initial state. The initial state may "
                "not be None. If you don't want to set a value for this "
                "reducer, you can use NULL instead of None.",
                key=key,
                action_type=action_types.INIT,
            )

        probe_type = action_types.probe_unknown_action()

        if reducer(None, {"type": probe_type}) is None:
            raise ReducerShapeError(
                f'Reducer "{key}" returned None when probed with a random type. '
                f'Don\'t try to handle {action_types.INIT} or other actions in the '
                '"@@treadle/*" namespace. They are considered private. Instead, '
                "you must return the current state for any unknown actions, "
                "unless it is None, in which case you must return the initial "
                "state, regardless of the action type. The initial state may "
                "not be None, but can be NULL.",
                key=key,
                action_type=probe_type,
            )


def combine_reducers(reducers: Mapping[str, Reducer]) -> Reducer:
    """Turn a mapping of reducers into a single reducer.

    Each reducer owns the slice of state under its key. The combined reducer
    calls every one of them and gathers their results into a new dict.
    If no slice changed identity, the previous state object is returned as-is.

    Entries that are not callable are dropped. Each reducer is checked once
    against the reserved init action and a random unknown action; if either
    returns None, the resulting :class:`ReducerShapeError` is raised the
    first time the combined reducer is called. An error raised by a reducer
    during this check is deferred the same way.

    Args:
        reducers: Reducers, by state key.

    Returns:
        A reducer for the combined state.
    """
    development = not is_production()
    final_reducers: Dict[str, Reducer] = {}

    for key, reducer in reducers.items():
        if callable(reducer):
            final_reducers[key] = reducer
        elif development:
            logger.warning('No reducer provided for key "%s"', key)

    unexpected_key_cache: Dict[Any, bool] = {}
    shape_assertion_error: Optional[Exception] = None

    try:
        _assert_reducer_shape(final_reducers)
    except Exception as e:
        shape_assertion_error = e

    def combination(state: Optional[State], action: Action) -> State:
        if shape_assertion_error is not None:
            raise shape_assertion_error

        if state is None:
            state = {}

        if development:
            warning_message = _unexpected_state_shape_message(
                state, final_reducers, action, unexpected_key_cache
            )
            if warning_message:
                logger.warning(warning_message)

        has_changed = False
        next_state: Dict[str, State] = {}

        for key, reducer in final_reducers.items():
            previous_state_for_key = (
                state.get(key) if is_plain_record(state) else None
            )
            next_state_for_key = reducer(previous_state_for_key, action)

            if next_state_for_key is None:
                raise StateError(
                    _undefined_state_message(key, action),
                    key=key,
                    action_type=action.get("type"),
                )

            next_state[key] = next_state_for_key
            has_changed = (
                has_changed or next_state_for_key is not previous_state_for_key
            )

        return next_state if has_changed else state

    return combination
