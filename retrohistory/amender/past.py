"""Pure helpers for rewriting the recorded past."""

from __future__ import annotations

from typing import Any, Sequence

from retrohistory.core.types import MergeFunction


def find_last_index(entries: Sequence[Any], target: Any) -> int:
    """Index of the most recent entry that *is* ``target``, or -1."""
    for index in range(len(entries) - 1, -1, -1):
        if entries[index] is target:
            return index
    return -1


def amend_past(
    original: Sequence[Any],
    from_index: int,
    present: Any,
    action: Any,
    merge: MergeFunction,
) -> tuple[Any, ...]:
    """
    Return a new past where every entry from ``from_index`` onward has been
    passed through ``merge(present, entry, action)`` and the newest entry
    dropped. ``original`` is left untouched.

    The dropped entry is the one the wrapped transition recorded for the
    amending action itself.
    """
    if not 0 <= from_index < len(original):
        raise IndexError(f"from_index {from_index} out of range for past of length {len(original)}")

    amended = list(original)
    for index in range(from_index, len(amended)):
        amended[index] = merge(present, original[index], action)
    amended.pop()
    return tuple(amended)
