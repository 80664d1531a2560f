from retrohistory.amender.amender import HistoryAmender, with_history_amender
from retrohistory.amender.identity_cache import IdentityCache
from retrohistory.amender.merge import identity_merge, merge_keys, replace_with_present
from retrohistory.amender.past import amend_past, find_last_index

__all__ = [
    "HistoryAmender",
    "IdentityCache",
    "amend_past",
    "find_last_index",
    "identity_merge",
    "merge_keys",
    "replace_with_present",
    "with_history_amender",
]
