"""Locale-independent references to Things lists.

Things localizes the display names of its built-in lists ("Today" is "Heute"
in a German install), so a script that says ``list "Today"`` only works in
English. Built-in lists are therefore addressed by their internal source id.
"""
from typing import Dict, Optional

from .utils import quote_applescript_string

# Ids as reported by: osascript -e 'tell application "Things3" to get id of every list'
BUILT_IN_LIST_IDS: Dict[str, str] = {
    "inbox": "TMInboxListSource",
    "today": "TMTodayListSource",
    "upcoming": "TMCalendarListSource",
    "anytime": "TMNextListSource",
    "someday": "TMSomedayListSource",
    "logbook": "TMLogbookListSource",
}


def built_in_list_id(name: str) -> Optional[str]:
    """Return the internal id for a built-in list name, or ``None``."""
    return BUILT_IN_LIST_IDS.get(name.strip().lower())


def resolve_list(name: str) -> str:
    """Return an AppleScript reference to the list called ``name``.

    Unknown names (custom lists, typos) fall back to a by-name reference and
    are left for Things to reject.
    """
    list_id = built_in_list_id(name)
    if list_id:
        return f'list id "{list_id}"'
    return f"list {quote_applescript_string(name)}"
