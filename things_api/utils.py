"""Utility functions for the Things API."""

from typing import Iterable


def escape_applescript_string(text: str) -> str:
    """Escape special characters for AppleScript strings.

    Backslashes are doubled before quotes are escaped, otherwise the escape
    added for a quote would itself be doubled.
    """
    if not text:
        return ""
    return text.replace('\\', '\\\\').replace('"', '\\"')


def quote_applescript_string(text: str) -> str:
    """Return ``text`` as a double-quoted, escaped AppleScript literal."""
    return f'"{escape_applescript_string(text)}"'


def join_tag_names(tags: Iterable[str]) -> str:
    """Things stores tag names as one comma-separated string."""
    return ", ".join(tags)
