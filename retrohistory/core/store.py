"""Store — owns the current history state and dispatches actions through it."""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable

from retrohistory.core.types import INIT, Action, Begin, End, HistoryState, Transition
from retrohistory.history.with_history import REDO, UNDO

logger = logging.getLogger(__name__)

Listener = Callable[[HistoryState], None]


class Store:
    """
    Sequential dispatch loop around a history transition.

    Every dispatch runs to completion before the next one starts. Subscribers
    are only notified when the transition returns a new state object, so a
    no-op action costs nothing downstream.

    Usage:
        store = Store(HistoryAmender(with_history(reducer)))
        store.dispatch(Action("EDIT", {"title": "Draft"}))
        store.undo()
    """

    def __init__(
        self,
        reducer: Transition,
        *,
        state: HistoryState | None = None,
    ) -> None:
        if not callable(reducer):
            raise TypeError(f"reducer must be callable, got {reducer!r}")
        self._reducer = reducer
        self._listeners: list[Listener] = []
        self._dispatching = False
        self._step = 0
        self._state = reducer(state, INIT)

    @property
    def step(self) -> int:
        return self._step

    def get_state(self) -> HistoryState:
        return self._state

    def dispatch(self, action: Any) -> HistoryState:
        """Run ``action`` through the reducer and return the resulting state."""
        if self._dispatching:
            raise RuntimeError("Store.dispatch() may not be called while a transition is running")

        self._step += 1
        previous = self._state
        self._dispatching = True
        try:
            next_state = self._reducer(previous, action)
        finally:
            self._dispatching = False

        self._state = next_state

        if next_state is previous:
            logger.debug("Step %d left state unchanged", self._step)
            return next_state

        logger.debug(
            "Step %d: past=%d future=%d pending=%d",
            self._step,
            len(next_state.past),
            len(next_state.future),
            len(next_state.pending),
        )
        for listener in list(self._listeners):
            listener(next_state)
        return next_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""
        if not callable(listener):
            raise TypeError(f"listener must be callable, got {listener!r}")
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Shortcuts
    # ------------------------------------------------------------------

    def undo(self) -> HistoryState:
        return self.dispatch(Action(UNDO))

    def redo(self) -> HistoryState:
        return self.dispatch(Action(REDO))

    def begin(self, op_id: Hashable, action_type: str, **payload: Any) -> HistoryState:
        """Dispatch an action that opens operation ``op_id``."""
        return self.dispatch(Action(action_type, payload, amend=Begin(op_id)))

    def end(self, op_id: Hashable, action_type: str, **payload: Any) -> HistoryState:
        """Dispatch an action that closes ``op_id`` and amends history since it began."""
        return self.dispatch(Action(action_type, payload, amend=End(op_id)))
