"""Reactive-stream projection of a store."""
from __future__ import annotations
import collections
import contextlib
import enum
from anyio import Event
from typing import (
    TYPE_CHECKING,
    Any,
    AsyncIterator,
    Callable,
    Deque,
    Generator,
    NamedTuple,
    Optional,
)

from .errors import ConfigurationError
from .types import State, Unsubscribe

if TYPE_CHECKING:
    from .store import Store


class SubscriptionStrategy(str, enum.Enum):
    """Message strategy to use for a state stream.

    Props:
        LATEST: Receive the latest state. Guarantees that the store's state
            will match the state in the notification, but may miss transitions.
        EVERY: Receive every state change. Guarantees that you will be notified
            of every state transition, but the store's state have transitioned
            again by the time the notification is handled.
    """

    LATEST = "latest"
    EVERY = "every"


class ObserverHandle(NamedTuple):
    """Handle returned by :meth:`Observable.subscribe`."""

    unsubscribe: Unsubscribe


class StateStream(AsyncIterator[State]):
    """An asynchronous iterator of store states."""

    def __init__(self, strategy: SubscriptionStrategy) -> None:
        self._strategy = strategy
        self._notification_event = Event()
        self._queue: Deque[State] = collections.deque(
            maxlen=1 if strategy == SubscriptionStrategy.LATEST else None
        )

    def on_next(self, state: State) -> None:
        self._queue.append(state)
        self._notification_event.set()

    async def __anext__(self) -> State:
        while len(self._queue) == 0:
            await self._notification_event.wait()
            self._notification_event = Event()

        return self._queue.popleft()

    def __aiter__(self) -> AsyncIterator[State]:
        return self


class Observable:
    """Push a store's state to observers after every dispatch.

    Holds no state of its own; everything goes through the store's
    ``subscribe`` and ``get_state``.

    Args:
        store: The store to observe.
    """

    def __init__(self, store: Store[Any]) -> None:
        self._store = store

    def subscribe(self, observer: Any) -> ObserverHandle:
        """Subscribe an observer to state changes.

        The observer receives the current state right away, then the new
        state after each dispatch until it unsubscribes.

        Args:
            observer: An object with an ``on_next(state)`` method, or a
                callable taking the state.

        Returns:
            A handle whose ``unsubscribe`` stops the notifications.
        """
        if observer is None:
            raise ConfigurationError("Expected the observer to be an object.")

        on_next: Optional[Callable[[State], Any]] = getattr(observer, "on_next", None)

        if on_next is None and callable(observer):
            on_next = observer

        def _observe_state() -> None:
            if on_next is not None:
                on_next(self._store.get_state())

        _observe_state()
        unsubscribe = self._store.subscribe(_observe_state)

        return ObserverHandle(unsubscribe=unsubscribe)

    @contextlib.contextmanager
    def stream(
        self,
        strategy: SubscriptionStrategy = SubscriptionStrategy.LATEST,
    ) -> Generator[StateStream, None, None]:
        """Create an asynchronous stream of state changes.

        Must be entered from inside a running event loop.

        Args:
            strategy: whether to receive only the latest state (default)
                or every state.

        Returns:
            A context manager wrapping the stream. The current state is
            already queued when the context is entered.
        """
        states = StateStream(strategy=strategy)
        handle = self.subscribe(states)

        try:
            yield states
        finally:
            handle.unsubscribe()
