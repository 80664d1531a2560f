"""Identity cache — remembers the last wrapped state by reference."""

from __future__ import annotations

from typing import Any


class IdentityCache:
    """
    Single-slot store: keeps the most recent state produced by the wrapped
    transition so the next call can tell whether anything changed.

    Compared with ``is`` only; an empty slot never matches.
    """

    def __init__(self) -> None:
        self._previous: Any = None
        self._filled = False

    def holds(self, value: Any) -> bool:
        return self._filled and value is self._previous

    def update(self, value: Any) -> None:
        self._previous = value
        self._filled = True

    def reset(self) -> None:
        self._previous = None
        self._filled = False
