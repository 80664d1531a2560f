from retrohistory.core.store import Store
from retrohistory.core.types import (
    INIT,
    Action,
    AmendDirective,
    AmendKind,
    Begin,
    End,
    HistoryState,
    MergeFunction,
    read_directive,
)
from retrohistory.history.with_history import (
    CREATE_UNDO_LEVEL,
    REDO,
    UNDO,
    with_history,
)
from retrohistory.amender.amender import HistoryAmender, with_history_amender
from retrohistory.amender.merge import identity_merge, merge_keys, replace_with_present

__all__ = [
    "Store",
    "INIT",
    "Action",
    "AmendDirective",
    "AmendKind",
    "Begin",
    "End",
    "HistoryState",
    "MergeFunction",
    "read_directive",
    # Undo history
    "CREATE_UNDO_LEVEL",
    "REDO",
    "UNDO",
    "with_history",
    # Amendment
    "HistoryAmender",
    "identity_merge",
    "merge_keys",
    "replace_with_present",
    "with_history_amender",
]
