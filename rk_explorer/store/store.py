from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable, Deque, Generic, Iterable, List, Optional, Tuple, TypeVar

from .actions import Action

logger = logging.getLogger(__name__)

S = TypeVar("S")

Dispatch = Callable[[Action], None]
Reducer = Callable[[S, Action], S]
Effect = Callable[[Action, Dispatch], None]
Listener = Callable[[S], None]


class Subscription:
    """
    Disposable handle returned by Store.subscribe().

    dispose() is idempotent; use the handle as a context manager to make the
    release unconditional.
    """

    def __init__(self, release: Callable[[], None]):
        self._release: Optional[Callable[[], None]] = release

    @property
    def active(self) -> bool:
        return self._release is not None

    def dispose(self) -> None:
        release, self._release = self._release, None
        if release is not None:
            release()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc) -> None:
        self.dispose()


class Store(Generic[S]):
    """
    Unidirectional state container.

    Purpose:
    - Holds one immutable state snapshot, replaced by the reducer on every action
    - Runs effects after each reduction; effects may dispatch further actions

    Design Notes:
    - Single writer: actions are queued and applied one at a time, in dispatch
      order, by whichever thread is currently draining the queue. A dispatch
      made from inside an effect or listener (or from another thread while a
      drain is running) is queued and returns immediately
    - Readers always see a complete snapshot; there is no partial update
    - Every applied action is appended to a bounded action log
    - A reducer that raises is logged and its action dropped (no version bump,
      no effects); listener and effect failures are logged the same way
    """

    def __init__(
            self,
            initial_state: S,
            reducer: Reducer,
            effects: Iterable[Effect] = (),
            *,
            action_log_limit: int = 1000,
    ):
        self._state = initial_state
        self._reducer = reducer
        self._effects: List[Effect] = list(effects)
        self._listeners: List[Listener] = []
        self._version = 0
        self._log: Deque[Action] = deque(maxlen=action_log_limit)

        self._queue: Deque[Action] = deque()
        self._queue_lock = threading.Lock()
        self._draining = threading.Lock()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def state(self) -> S:
        return self._state

    @property
    def version(self) -> int:
        """Number of actions applied so far; changes whenever the state may have changed."""
        return self._version

    @property
    def action_log(self) -> Tuple[Action, ...]:
        return tuple(self._log)

    def subscribe(self, listener: Listener) -> Subscription:
        self._listeners.append(listener)

        def release() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(release)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------
    def add_effect(self, effect: Effect) -> None:
        self._effects.append(effect)

    def dispatch(self, action: Action) -> None:
        if not isinstance(action, Action):
            raise TypeError(f"Expected an Action, got {type(action).__name__}")
        with self._queue_lock:
            self._queue.append(action)
        self._drain()

    def _next_action(self) -> Optional[Action]:
        with self._queue_lock:
            return self._queue.popleft() if self._queue else None

    def _drain(self) -> None:
        while True:
            if not self._draining.acquire(blocking=False):
                # someone else (possibly our own caller further up the stack) is draining
                return
            try:
                action = self._next_action()
                while action is not None:
                    self._apply(action)
                    action = self._next_action()
            finally:
                self._draining.release()

            # An action may have been queued between the last check and the release
            with self._queue_lock:
                if not self._queue:
                    return

    def _apply(self, action: Action) -> None:
        try:
            new_state = self._reducer(self._state, action)
        except Exception:
            # The action is dropped; the snapshot stays as it was and the queue keeps draining
            logger.exception("Reducer failed", extra={"action": type(action).__name__})
            return

        self._state = new_state
        self._version += 1
        self._log.append(action)
        logger.debug(
            "Action applied",
            extra={"action": type(action).__name__, "version": self._version},
        )

        state = self._state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Store listener failed", extra={"action": type(action).__name__})

        for effect in list(self._effects):
            try:
                effect(action, self.dispatch)
            except Exception:
                logger.exception(
                    "Effect failed",
                    extra={"action": type(action).__name__, "effect": getattr(effect, "__qualname__", repr(effect))},
                )
