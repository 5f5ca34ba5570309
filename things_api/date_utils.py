"""Date parsing and AppleScript date literals.

User input arrives in many shapes ("2024-12-25", "12/25/2024", "Dec 25, 2024",
"next friday"). :func:`parse_date` normalises it to a :class:`datetime.date`,
trying in order:

1. strict ISO ``YYYY-MM-DD``;
2. a fixed list of numeric formats, which read the same under any locale;
3. the current ``LC_TIME`` short date (``%x``) and month-name styles;
4. natural-language detection via ``dateparser``.

:func:`render_date` always writes ``date "YYYY-MM-DD"`` so the literal Things
receives never depends on the host's regional settings.
"""
from __future__ import annotations

import datetime
import re
from typing import Optional

import dateparser
from dateparser.search import search_dates

from .errors import DateParseError
from .utils import escape_applescript_string

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Month-first is tried before day-first: "01/02/2024" is January 2.
NEUTRAL_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y", "%d/%m/%Y")

# Only %x follows the locale's field order; the rest are fixed month-day-year
# orders that match the locale's month and weekday names. Day-first or
# year-first wordings fall through to dateparser.
LOCALE_DATE_STYLES = ("%x", "%b %d, %Y", "%B %d, %Y", "%A, %B %d, %Y")

_DATEPARSER_SETTINGS = {
    "PREFER_DATES_FROM": "future",
    "RETURN_AS_TIMEZONE_AWARE": False,
}


def _parse_iso(text: str) -> Optional[datetime.date]:
    if not _ISO_DATE.match(text):
        return None
    try:
        return datetime.date.fromisoformat(text)
    except ValueError:
        return None


def _parse_with_formats(text: str, formats) -> Optional[datetime.date]:
    for fmt in formats:
        try:
            return datetime.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _parse_natural(text: str) -> Optional[datetime.date]:
    parsed = dateparser.parse(text, settings=_DATEPARSER_SETTINGS)
    if parsed:
        return parsed.date()
    found = search_dates(text, settings=_DATEPARSER_SETTINGS)
    if found:
        return found[0][1].date()
    return None


def parse_date(text: str) -> datetime.date:
    """Parse ``text`` into a calendar date or raise :class:`DateParseError`."""
    if not text or not text.strip():
        raise DateParseError(text or "")
    cleaned = text.strip()
    for stage in (
        _parse_iso,
        lambda s: _parse_with_formats(s, NEUTRAL_FORMATS),
        lambda s: _parse_with_formats(s, LOCALE_DATE_STYLES),
        _parse_natural,
    ):
        result = stage(cleaned)
        if result is not None:
            return result
    raise DateParseError(text)


def render_date(value: datetime.date) -> str:
    return f'date "{value.isoformat()}"'


def date_literal(text: str) -> str:
    """AppleScript date literal for user-supplied ``text``.

    Unparseable input is passed through as-is (escaped); Things will reject it.
    """
    try:
        return render_date(parse_date(text))
    except DateParseError:
        return f'date "{escape_applescript_string(text)}"'
