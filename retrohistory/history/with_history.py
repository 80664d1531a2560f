"""Undo history — turns a plain reducer into a past/present/future transition."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable

from retrohistory.core.types import INIT, HistoryState, Reducer, Transition, action_type

UNDO = "UNDO"
REDO = "REDO"
CREATE_UNDO_LEVEL = "CREATE_UNDO_LEVEL"


def with_history(
    reducer: Reducer,
    *,
    reset_types: Iterable[str] = (),
    ignore_types: Iterable[str] = (),
    limit: int | None = None,
) -> Transition:
    """
    Wrap ``reducer(present, action) -> present`` so every change is undoable.

    When ``state`` is None the reducer is first called with ``(None, INIT)`` to
    build the starting present, then the action is applied to it as usual.

    A change is any action for which the reducer returns a new object; when it
    hands back the same ``present``, the history state is returned by reference.

    reset_types  — action types that clear past and future (e.g. loading a document)
    ignore_types — action types that update present without recording history
    limit        — keep at most this many past entries (oldest dropped first)
    """
    if not callable(reducer):
        raise TypeError(f"reducer must be callable, got {reducer!r}")
    if limit is not None and (not isinstance(limit, int) or limit < 1):
        raise ValueError(f"limit must be a positive integer or None, got {limit!r}")

    resets = frozenset(reset_types)
    ignores = frozenset(ignore_types)

    def transition(state: HistoryState | None, action: Any) -> HistoryState:
        if state is None:
            state = HistoryState(present=reducer(None, INIT))

        kind = action_type(action)

        if kind == UNDO:
            if not state.past:
                return state
            return replace(
                state,
                past=state.past[:-1],
                present=state.past[-1],
                future=(state.present,) + state.future,
            )

        if kind == REDO:
            if not state.future:
                return state
            return replace(
                state,
                past=state.past + (state.present,),
                present=state.future[0],
                future=state.future[1:],
            )

        if kind == CREATE_UNDO_LEVEL:
            return replace(state, past=state.past + (state.present,), future=())

        next_present = reducer(state.present, action)

        if kind in resets:
            return replace(state, past=(), present=next_present, future=())

        if next_present is state.present:
            return state

        if kind in ignores:
            return replace(state, present=next_present)

        past = state.past + (state.present,)
        if limit is not None and len(past) > limit:
            past = past[-limit:]
        return replace(state, past=past, present=next_present, future=())

    return transition
