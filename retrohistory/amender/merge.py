"""Merge functions for amending past snapshots."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from retrohistory.core.types import MergeFunction


def identity_merge(present: Any, entry: Any, action: Any) -> Any:
    """Keep the past entry as it was."""
    return entry


def replace_with_present(present: Any, entry: Any, action: Any) -> Any:
    """Make every amended entry look like the present."""
    return present


def merge_keys(*keys: str) -> MergeFunction:
    """
    Build a merge that copies ``keys`` from the present into each past entry.

    Only applies when both values are mappings; other entries pass through.
    Keys missing from the present are left alone in the entry.
    """

    def merge(present: Any, entry: Any, action: Any) -> Any:
        if not isinstance(present, Mapping) or not isinstance(entry, Mapping):
            return entry
        updates = {k: present[k] for k in keys if k in present}
        if all(k in entry and entry[k] is v for k, v in updates.items()):
            return entry
        return {**entry, **updates}

    return merge
