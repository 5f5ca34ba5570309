"""AppleScript execution for Things 3.

:func:`execute_things_applescript` is the one place that talks to
``osascript``. It blocks until Things answers, which for large lists can take
many seconds, so async callers go through :class:`AppleScriptRunner`: it hands
each call to a single background worker thread and awaits the result. One
worker also means Things never sees two scripts at once; its scripting engine
is single-threaded and not safe to drive concurrently.

Nothing here retries. A failure is reported once, classified as
:class:`ApplicationNotRunning` when Things cannot be reached, otherwise as
:class:`ScriptError` carrying osascript's message unchanged.
"""
from __future__ import annotations

import asyncio
import logging
import os
import re
import subprocess
import tempfile
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Final, Optional

from .errors import ApplicationNotRunning, ScriptError, UrlSchemeError

__all__: Final = [
    "AppleScriptRunner",
    "execute_things_applescript",
    "open_things_url",
    "MISSING_OBJECT_ERROR_NUMBERS",
]

logger = logging.getLogger(__name__)

DEFAULT_OSASCRIPT = "osascript"
OSASCRIPT_ENV = "THINGSCLI_OSASCRIPT"

# "Can't get <object>" / "no such object": the addressed item does not exist.
MISSING_OBJECT_ERROR_NUMBERS: Final = (-1728, -1719)
APPLICATION_NOT_RUNNING_ERROR_NUMBERS: Final = (-600, -10810)
_NOT_RUNNING_PHRASES: Final = ("isn't running", "can't get application", "application isn't running")

_ERROR_NUMBER = re.compile(r"\((-?\d+)\)\s*$")


def _write_temp_applescript(script: str) -> str:
    """Write *script* to a temporary *.applescript* file and return its path."""
    tmp_file = tempfile.NamedTemporaryFile(mode="w", delete=False, suffix=".applescript", encoding="utf-8")
    tmp_file.write(script)
    tmp_file.flush()
    tmp_file.close()
    return tmp_file.name


def _error_number(message: str) -> Optional[int]:
    match = _ERROR_NUMBER.search(message)
    return int(match.group(1)) if match else None


def classify_failure(message: str) -> Exception:
    """Map an osascript error message to the matching exception.

    The message quotes the script's own text (names, ids), so the wording is
    only consulted when osascript gave no error number.
    """
    number = _error_number(message)
    if number is not None:
        if number in APPLICATION_NOT_RUNNING_ERROR_NUMBERS:
            return ApplicationNotRunning(message)
        return ScriptError(message, number=number)
    normalized = message.replace("’", "'").lower()
    if any(p in normalized for p in _NOT_RUNNING_PHRASES):
        return ApplicationNotRunning(message)
    return ScriptError(message)


def execute_things_applescript(script: str) -> str:
    """Run an AppleScript snippet and return its *stdout* as ``str``.

    The interpreter is ``osascript`` unless ``THINGSCLI_OSASCRIPT`` names
    another binary.
    """
    script_path = _write_temp_applescript(script)
    cmd = [os.getenv(OSASCRIPT_ENV, DEFAULT_OSASCRIPT), script_path]

    try:
        try:
            process = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise ApplicationNotRunning(f"{cmd[0]} not available: {e}") from e
        if process.returncode != 0:
            message = process.stderr.strip() or f"osascript exited with code {process.returncode}"
            logger.warning("AppleScript execution failed (code %s): %s", process.returncode, message)
            raise classify_failure(message)
        return process.stdout.strip()
    finally:
        # Ensure the temporary file is always removed.
        try:
            os.remove(script_path)
        except FileNotFoundError:
            pass


def open_things_url(url: str) -> None:
    """Hand ``url`` to macOS ``open``. Things' URL commands return nothing."""
    try:
        process = subprocess.run(["open", url], capture_output=True, text=True, check=False)
    except OSError as e:
        raise UrlSchemeError(f"Failed to open URL: {e}") from e
    if process.returncode != 0:
        raise UrlSchemeError(f"Failed to open URL: {process.stderr.strip() or process.returncode}")


class AppleScriptRunner:
    """Serializes blocking Things calls onto one worker thread.

    ``execute`` and ``opener`` default to the real osascript/open helpers and
    can be replaced, e.g. by tests.
    """

    def __init__(
        self,
        execute: Callable[[str], str] = execute_things_applescript,
        opener: Callable[[str], None] = open_things_url,
    ):
        self._execute = execute
        self._opener = opener
        self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="things-applescript")

    async def run(self, script: str) -> str:
        logger.debug("Running AppleScript:\n%s", script)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._pool, self._execute, script)

    async def open_url(self, url: str) -> None:
        # Query string left out: it may carry the auth token.
        logger.debug("Opening URL: %s", url.split("?", 1)[0])
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self._pool, self._opener, url)

    def close(self) -> None:
        self._pool.shutdown(wait=True)
