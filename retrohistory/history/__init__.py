from retrohistory.history.with_history import (
    CREATE_UNDO_LEVEL,
    REDO,
    UNDO,
    with_history,
)

__all__ = ["CREATE_UNDO_LEVEL", "REDO", "UNDO", "with_history"]
