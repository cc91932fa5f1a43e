"""
Observable Store - Immutable state snapshots with change notification.

Each store keeps its state as a frozen dataclass. A transition replaces the
whole snapshot in one assignment, so a listener never sees half of an update.
"""

import dataclasses
import logging
from typing import Any, Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")

Listener = Callable[[Any], None]


class ObservableStore(Generic[S]):
    """
    Base class for the session and pet stores.

    The state dataclass must carry is_loading and error fields. is_loading
    stays True while any tracked operation is in flight.

    Example:
        unsubscribe = store.subscribe(lambda state: render(state))
        ...
        unsubscribe()
    """

    def __init__(self, initial_state: S):
        self._state = initial_state
        self._version = 0
        self._listeners: List[Listener] = []
        self._pending = 0

    @property
    def state(self) -> S:
        """Current snapshot."""
        return self._state

    @property
    def version(self) -> int:
        """Number of committed transitions since construction."""
        return self._version

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the new snapshot after every commit.

        Args:
            listener: Callable receiving the state snapshot

        Returns:
            Callable that removes the listener (safe to call twice)
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _begin(self) -> None:
        """Enter a tracked operation: loading on, previous error cleared."""
        self._pending += 1
        self._commit(is_loading=True, error=None)

    def _settle(self, **changes: Any) -> S:
        """Leave a tracked operation, committing its outcome in the same transition."""
        self._pending = max(0, self._pending - 1)
        return self._commit(is_loading=self._pending > 0, **changes)

    def _commit(self, **changes: Any) -> S:
        """Apply changes as one transition and notify listeners."""
        self._state = dataclasses.replace(self._state, **changes)
        self._version += 1
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                # A broken renderer must not leave the store half-notified
                logger.exception("State listener %r failed", listener)
        return self._state
