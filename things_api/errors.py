"""Exception types raised by the Things 3 API layer."""
from typing import Optional


class ThingsError(Exception):
    """Base class for every error surfaced by this package."""


class ScriptError(ThingsError):
    """Things' scripting engine reported a failure.

    ``message`` is the underlying osascript message, unchanged. ``number`` is the
    AppleScript error number when one could be read from it (e.g. ``-1728``).
    """

    def __init__(self, message: str, number: Optional[int] = None):
        self.message = message
        self.number = number
        super().__init__(f"AppleScript error: {message}")


class ApplicationNotRunning(ThingsError):
    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__("Things 3 is not running or could not be reached. Please launch Things 3 and try again.")


class NotFound(ThingsError):
    def __init__(self, item: str):
        self.item = item
        super().__init__(f"Not found: {item}")


class TodoNotFound(NotFound):
    def __init__(self, todo_id: str):
        self.item = todo_id
        ThingsError.__init__(self, f"To-do not found with ID: {todo_id}")


class ProjectNotFound(NotFound):
    def __init__(self, project_id: str):
        self.item = project_id
        ThingsError.__init__(self, f"Project not found with ID: {project_id}")


class AreaNotFound(NotFound):
    def __init__(self, area_id: str):
        self.item = area_id
        ThingsError.__init__(self, f"Area not found with ID: {area_id}")


class TagNotFound(NotFound):
    def __init__(self, name: str):
        self.item = name
        ThingsError.__init__(self, f"Tag not found: {name}")


class InvalidParameter(ThingsError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Invalid parameter: {message}")


class UrlSchemeError(ThingsError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"URL Scheme error: {message}")


class DateParseError(ThingsError, ValueError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Could not parse date: {text!r}")
