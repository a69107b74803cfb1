"""Treadle stores."""
from __future__ import annotations
import logging
from typing import Any, Callable, Generic, List, Optional, Protocol, TypeVar

from . import action_types
from .errors import ConfigurationError, InvalidOperationError
from .observable import Observable
from .types import Action, Listener, Reducer, Unsubscribe, is_plain_record

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")


class StoreFactory(Protocol):
    """Anything with the signature of :func:`create_store`."""

    def __call__(
        self,
        reducer: Reducer,
        preloaded_state: Any = ...,
        enhancer: Optional[Enhancer] = None,
    ) -> Store[Any]:
        ...


Enhancer = Callable[[StoreFactory], StoreFactory]


class Store(Generic[StateT]):
    """A state store.

    State may only change by dispatching an action, which the store passes
    to its reducer along with the current state. Listeners are called
    synchronously after every dispatch. The reserved init action is
    dispatched before the constructor returns, so reducers get a chance to
    produce their initial state.

    Prefer :func:`create_store`, which also applies enhancers.

    Args:
        reducer: Function returning the next state, given the current
            state and an action.
        preloaded_state: Initial state. Leave it out to let the reducer
            provide one.
    """

    def __init__(
        self,
        reducer: Reducer,
        preloaded_state: StateT = ...,  # type: ignore[assignment]
    ) -> None:
        if not callable(reducer):
            raise ConfigurationError("Expected the reducer to be a function.")

        self._reducer = reducer
        self._state: Optional[StateT] = (
            None if preloaded_state is Ellipsis else preloaded_state
        )
        self._current_listeners: List[Listener] = []
        self._next_listeners = self._current_listeners
        self._is_dispatching = False

        logger.debug("Creating store with reducer %r", reducer)
        self.dispatch({"type": action_types.INIT})

    @property
    def state(self) -> StateT:
        """The current state."""
        return self.get_state()

    def get_state(self) -> StateT:
        """Read the current state."""
        if self._is_dispatching:
            raise InvalidOperationError(
                "You may not call store.get_state() while the reducer is executing. "
                "The reducer has already received the state as an argument. "
                "Pass it down from the top reducer instead of reading it "
                "from the store."
            )

        return self._state  # type: ignore[return-value]

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Add a listener to be called after every dispatch.

        A listener added while a dispatch is notifying will first be called
        on the next dispatch. A listener removed while a dispatch is notifying
        is still called by that dispatch.

        Args:
            listener: Callback taking no arguments. Call ``get_state`` from
                it to read the new state.

        Returns:
            A function that removes the listener. Calling it again does nothing.
        """
        if not callable(listener):
            raise ConfigurationError("Expected the listener to be a function.")

        if self._is_dispatching:
            raise InvalidOperationError(
                "You may not call store.subscribe() while the reducer is executing. "
                "If you would like to be notified after the store has been "
                "updated, subscribe from outside the reducer and call "
                "store.get_state() in the callback to access the latest state."
            )

        is_subscribed = True

        self._ensure_can_mutate_next_listeners()
        self._next_listeners.append(listener)

        def unsubscribe() -> None:
            nonlocal is_subscribed

            if not is_subscribed:
                return

            if self._is_dispatching:
                raise InvalidOperationError(
                    "You may not unsubscribe from a store listener "
                    "while the reducer is executing."
                )

            is_subscribed = False

            self._ensure_can_mutate_next_listeners()
            self._next_listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> Action:
        """Dispatch an action into the store.

        Args:
            action: Mapping with a ``"type"`` key that is not None.

        Returns:
            The same action.
        """
        if not is_plain_record(action):
            raise ConfigurationError(
                "Actions must be plain mappings. "
                "Use custom middleware for async actions."
            )

        if action.get("type") is None:
            raise ConfigurationError(
                'Actions may not have a missing or None "type" key. '
                "Have you misspelled a constant?"
            )

        if self._is_dispatching:
            raise InvalidOperationError("Reducers may not dispatch actions.")

        try:
            self._is_dispatching = True
            self._state = self._reducer(self._state, action)
        finally:
            self._is_dispatching = False

        listeners = self._current_listeners = self._next_listeners

        for listener in listeners:
            listener()

        return action

    def replace_reducer(self, next_reducer: Reducer) -> None:
        """Replace the reducer used to compute state.

        The reserved replace action is dispatched right away so that
        the new reducer can rebuild its state.
        """
        if not callable(next_reducer):
            raise ConfigurationError("Expected the next_reducer to be a function.")

        logger.debug("Replacing reducer with %r", next_reducer)
        self._reducer = next_reducer
        self.dispatch({"type": action_types.REPLACE})

    def observable(self) -> Observable:
        """Get a reactive-stream view of this store's state."""
        return Observable(self)

    def _ensure_can_mutate_next_listeners(self) -> None:
        if self._next_listeners is self._current_listeners:
            self._next_listeners = list(self._current_listeners)


def create_store(
    reducer: Reducer,
    preloaded_state: Any = ...,
    enhancer: Optional[Enhancer] = None,
) -> Store[Any]:
    """Create a store.

    Args:
        reducer: Function returning the next state, given the current
            state and an action.
        preloaded_state: Initial state. If this is callable and no
            ``enhancer`` is given, it is used as the enhancer instead.
        enhancer: Store enhancer. It receives ``create_store`` and must
            return a function with the same signature, which is then
            called with ``reducer`` and ``preloaded_state``.
            Chain several enhancers with :func:`~treadle.compose`.

    Returns:
        The new store, or whatever the enhanced factory returned.
    """
    if callable(preloaded_state) and enhancer is None:
        enhancer = preloaded_state
        preloaded_state = ...

    if enhancer is not None:
        if not callable(enhancer):
            raise ConfigurationError("Expected the enhancer to be a function.")

        logger.debug("Delegating store creation to enhancer %r", enhancer)
        return enhancer(create_store)(reducer, preloaded_state)

    return Store(reducer, preloaded_state)
