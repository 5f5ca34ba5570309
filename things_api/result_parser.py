"""Decoding of the flat text that fetch scripts return.

Scripts flatten records as ``field|||field|||…###`` with ``###`` closing each
record. Empty fields mean "unset" and become ``None``; tag lists are a single
``", "``-separated field. The separators are fixed: a name or note that
contains one of them will be split wrongly, and tag names cannot contain
``", "``. That is a property of the wire format and is left as is.
"""
import logging
from typing import Callable, List, Optional, Sequence, TypeVar

from .data_models import Area, Project, Status, Tag, Todo

logger = logging.getLogger(__name__)

RECORD_SEPARATOR = "###"
FIELD_SEPARATOR = "|||"
LIST_SEPARATOR = ", "
EMPTY_VALUE = ""

TODO_FIELD_COUNT = 10
PROJECT_FIELD_COUNT = 7
AREA_FIELD_COUNT = 3
TAG_FIELD_COUNT = 2

T = TypeVar("T")


def split_records(text: str) -> List[List[str]]:
    """Split raw script output into records of fields."""
    if not text:
        return []
    return [record.split(FIELD_SEPARATOR) for record in text.split(RECORD_SEPARATOR) if record]


def format_records(rows: Sequence[Sequence[Optional[str]]]) -> str:
    """Inverse of :func:`split_records`; ``None`` is written as the empty value."""
    return "".join(
        FIELD_SEPARATOR.join(EMPTY_VALUE if value is None else value for value in row) + RECORD_SEPARATOR
        for row in rows
    )


def optional(value: str) -> Optional[str]:
    return None if value == EMPTY_VALUE else value


def split_list(value: str) -> List[str]:
    if value == EMPTY_VALUE:
        return []
    return value.split(LIST_SEPARATOR)


def _parse(text: str, min_fields: int, build: Callable[[List[str]], T], kind: str) -> List[T]:
    items = []
    for parts in split_records(text):
        if len(parts) < min_fields:
            logger.debug("Dropping %s record with %d of %d fields", kind, len(parts), min_fields)
            continue
        try:
            items.append(build(parts))
        except ValueError as e:
            logger.debug("Dropping malformed %s record: %s", kind, e)
    return items


def _todo(parts: List[str]) -> Todo:
    return Todo(
        id=parts[0],
        name=parts[1],
        notes=optional(parts[2]),
        status=Status(parts[3]),
        tag_names=split_list(parts[4]),
        due_date=optional(parts[5]),
        scheduled_date=optional(parts[6]),
        completion_date=optional(parts[7]),
        project_name=optional(parts[8]),
        area_name=optional(parts[9]),
    )


def _project(parts: List[str]) -> Project:
    try:
        todo_count = int(parts[6])
    except ValueError:
        todo_count = 0
    return Project(
        id=parts[0],
        name=parts[1],
        notes=optional(parts[2]),
        status=Status(parts[3]),
        tag_names=split_list(parts[4]),
        area_name=optional(parts[5]),
        todo_count=todo_count,
    )


def _area(parts: List[str]) -> Area:
    return Area(id=parts[0], name=parts[1], tag_names=split_list(parts[2]))


def _tag(parts: List[str]) -> Tag:
    return Tag(id=parts[0], name=parts[1])


def parse_todos(text: str) -> List[Todo]:
    return _parse(text, TODO_FIELD_COUNT, _todo, "to-do")


def parse_projects(text: str) -> List[Project]:
    return _parse(text, PROJECT_FIELD_COUNT, _project, "project")


def parse_areas(text: str) -> List[Area]:
    return _parse(text, AREA_FIELD_COUNT, _area, "area")


def parse_tags(text: str) -> List[Tag]:
    return _parse(text, TAG_FIELD_COUNT, _tag, "tag")
