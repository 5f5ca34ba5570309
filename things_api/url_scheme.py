"""Things URL-scheme commands.

Checklist items cannot be written through AppleScript, only through
``things:///update``. URL commands are one-way: Things opens them and returns
nothing, so there is no result to parse.
"""
from typing import Optional, Sequence
from urllib.parse import quote

from .errors import InvalidParameter, UrlSchemeError

URL_SCHEME = "things"
UPDATE_COMMAND = "update"


def build_checklist_url(
    todo_id: str,
    items: Sequence[str],
    append: bool = True,
    auth_token: Optional[str] = None,
) -> str:
    """URL that appends to (or, with ``append=False``, replaces) a checklist.

    ``auth_token`` is only added when set; Things accepts token-less update
    URLs when URL-scheme authorization is off.
    """
    if not todo_id or not todo_id.strip():
        raise InvalidParameter("id is required")
    parameter = "append-checklist-items" if append else "checklist-items"
    try:
        query = [
            f"id={quote(todo_id, safe='')}",
            f"{parameter}={quote(chr(10).join(items), safe='')}",
        ]
        if auth_token:
            query.append(f"auth-token={quote(auth_token, safe='')}")
    except (TypeError, UnicodeEncodeError) as e:
        raise UrlSchemeError(f"Failed to encode checklist items: {e}") from e
    return f"{URL_SCHEME}:///{UPDATE_COMMAND}?" + "&".join(query)
