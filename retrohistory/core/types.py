"""Shared types and dataclasses for retrohistory."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Hashable, Union


class AmendKind(str, Enum):
    BEGIN = "BEGIN"
    END = "END"


@dataclass(frozen=True)
class Begin:
    """Marks the present value as the start of a long-running operation."""

    id: Hashable


@dataclass(frozen=True)
class End:
    """Folds the action into every history entry recorded since the matching Begin."""

    id: Hashable


AmendDirective = Union[Begin, End]


@dataclass(frozen=True)
class Action:
    """A dispatched instruction, optionally carrying an amendment directive."""

    type: str
    payload: Mapping[str, Any] = field(default_factory=dict)
    amend: AmendDirective | None = None


@dataclass(frozen=True)
class HistoryState:
    """
    Undoable state: the present value plus what came before and after it.

    past    — oldest first; the last entry is what UNDO restores
    future  — next REDO first
    pending — operation id -> present value captured at its Begin
    """

    past: tuple[Any, ...] = ()
    present: Any = None
    future: tuple[Any, ...] = ()
    pending: Mapping[Hashable, Any] = field(default_factory=dict)

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)


Reducer = Callable[[Any, Any], Any]
Transition = Callable[["HistoryState | None", Any], HistoryState]
MergeFunction = Callable[[Any, Any, Any], Any]

# Dispatched once to build the initial state
INIT = Action(type="@@retrohistory/INIT")


def action_type(action: Any) -> Any:
    """Return the action's type for Action instances, mappings, or plain strings."""
    if isinstance(action, Mapping):
        return action.get("type")
    if isinstance(action, str):
        return action
    return getattr(action, "type", None)


def read_directive(action: Any) -> AmendDirective | None:
    """
    Extract the amendment directive carried by an action.

    Mapping actions may carry ``{"amend": {"kind": "BEGIN", "id": ...}}``;
    an already-built Begin / End is returned as-is.
    """
    if isinstance(action, Mapping):
        raw = action.get("amend")
    else:
        raw = getattr(action, "amend", None)

    if raw is None or isinstance(raw, (Begin, End)):
        return raw

    if isinstance(raw, Mapping):
        kind = AmendKind(raw["kind"])
        if kind is AmendKind.BEGIN:
            return Begin(raw["id"])
        return End(raw["id"])

    raise ValueError(f"Unsupported amendment directive: {raw!r}")
