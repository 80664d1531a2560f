"""HistoryAmender — retroactively folds a late change into recorded history."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Hashable, Mapping

from retrohistory.amender.identity_cache import IdentityCache
from retrohistory.amender.merge import identity_merge
from retrohistory.amender.past import amend_past, find_last_index
from retrohistory.core.types import (
    INIT,
    Begin,
    End,
    HistoryState,
    MergeFunction,
    Transition,
    read_directive,
)

logger = logging.getLogger(__name__)


class HistoryAmender:
    """
    Wraps a history-tracking transition (see ``with_history``) so that its
    past can be rewritten.

    An action carrying ``Begin(id)`` records the present value it produced in
    ``state.pending``. A later action carrying ``End(id)`` finds that value in
    the past and runs ``merge(present, entry, action)`` on it and on every
    entry after it. The End action does not get a history entry of its own,
    so undoing afterwards steps back through the amended entries.

    Usage:
        reducer = HistoryAmender(with_history(document_reducer), merge=merge_keys("saved"))
        state = reducer(None, INIT)
        state = reducer(state, Action("SAVE", amend=Begin("save-1")))
    """

    def __init__(self, reducer: Transition, *, merge: MergeFunction | None = None) -> None:
        if not callable(reducer):
            raise TypeError(f"reducer must be callable, got {reducer!r}")
        if merge is not None and not callable(merge):
            raise TypeError(f"merge must be callable, got {merge!r}")
        self._reducer = reducer
        self._merge = merge or identity_merge
        self._cache = IdentityCache()

    def __call__(self, state: HistoryState | None, action: Any) -> HistoryState:
        return self.transition(state, action)

    def initial_state(self) -> HistoryState:
        """Build the starting state and prime the identity cache with the wrapped baseline."""
        baseline = self._reducer(None, INIT)
        self._cache.update(baseline)
        return replace(baseline, pending={})

    def transition(self, state: HistoryState | None, action: Any) -> HistoryState:
        if state is None:
            state = self.initial_state()

        pending = state.pending
        directive = read_directive(action)

        wrapped = self._reducer(state, action)
        unchanged = self._cache.holds(wrapped)
        self._cache.update(wrapped)

        if isinstance(directive, Begin):
            # Pending bookkeeping now differs from what the cache saw
            self._cache.reset()
            logger.debug("Captured present for operation %r", directive.id)
            return replace(wrapped, pending={**pending, directive.id: wrapped.present})

        if isinstance(directive, End):
            self._cache.reset()
            amended = self._amend(wrapped, pending, directive.id, action)
            if amended is not None:
                return amended
            logger.warning("history could not be amended: invalid operation id %r", directive.id)

        if unchanged:
            return state
        if wrapped.pending is pending:
            return wrapped
        return replace(wrapped, pending=pending)

    def _amend(
        self,
        wrapped: HistoryState,
        pending: Mapping[Hashable, Any],
        op_id: Hashable,
        action: Any,
    ) -> HistoryState | None:
        """Rewrite ``wrapped.past`` from the operation's snapshot onward, or None when it can't be found."""
        if op_id not in pending:
            return None

        index = find_last_index(wrapped.past, pending[op_id])
        if index < 0:
            return None

        past = amend_past(wrapped.past, index, wrapped.present, action, self._merge)
        logger.debug(
            "Amended %d past entries for operation %r",
            len(wrapped.past) - index,
            op_id,
        )
        return replace(
            wrapped,
            past=past,
            pending={k: v for k, v in pending.items() if k != op_id},
        )


def with_history_amender(reducer: Transition, *, merge: MergeFunction | None = None) -> HistoryAmender:
    """Factory spelling of ``HistoryAmender(reducer, merge=merge)``."""
    return HistoryAmender(reducer, merge=merge)
