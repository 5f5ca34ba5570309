"""
Things 3 API layer package.
Builds AppleScript for Things, runs it off the event loop and parses the results.
"""

from .data_models import Area, BatchItemResult, BatchResult, Project, Status, Tag, Todo
from .errors import (
    ApplicationNotRunning,
    AreaNotFound,
    DateParseError,
    InvalidParameter,
    NotFound,
    ProjectNotFound,
    ScriptError,
    TagNotFound,
    ThingsError,
    TodoNotFound,
    UrlSchemeError,
)
from .task_operations import ThingsManager

__all__ = [
    'ThingsManager',
    'Todo',
    'Project',
    'Area',
    'Tag',
    'Status',
    'BatchItemResult',
    'BatchResult',
    'ThingsError',
    'ScriptError',
    'ApplicationNotRunning',
    'NotFound',
    'TodoNotFound',
    'ProjectNotFound',
    'AreaNotFound',
    'TagNotFound',
    'InvalidParameter',
    'UrlSchemeError',
    'DateParseError',
]
