"""
Parameter models for Things operations.

Arguments arrive as decoded JSON objects; each catalog operation, and each
item of a batch, is validated with one of these models before anything is
sent to Things.
"""
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidParameter

P = TypeVar("P", bound=BaseModel)


class Params(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class NoParams(Params):
    pass


class IdParams(Params):
    id: str = Field(min_length=1, description="The item identifier")


class CompleteParams(IdParams):
    completed: bool = Field(True, description="true to complete, false to reopen")


class QueryParams(Params):
    query: str = Field(min_length=1, description="Text matched against to-do names and notes")


class TagParams(Params):
    tag: str = Field(min_length=1, description="Tag name")


class ListNameParams(Params):
    name: str = Field(min_length=1, description="List name: Inbox, Today, Upcoming, Anytime, Someday, Logbook or a custom list")


class AddTodoParams(Params):
    name: str = Field(min_length=1, description="The title of the to-do")
    notes: Optional[str] = None
    due_date: Optional[str] = Field(None, description="Due date, e.g. '2024-12-25'")
    tags: Optional[List[str]] = None
    list_name: Optional[str] = Field(None, alias="list", description="Target list: Inbox, Today, Anytime, Someday")
    project: Optional[str] = Field(None, description="Project name to add the to-do to")
    when: Optional[str] = Field(None, description="today, tomorrow, evening, anytime, someday, or a date")


class UpdateTodoParams(IdParams):
    name: Optional[str] = None
    notes: Optional[str] = None
    due_date: Optional[str] = None
    tags: Optional[List[str]] = Field(None, description="Replaces existing tags")
    when: Optional[str] = None


class AddProjectParams(Params):
    name: str = Field(min_length=1)
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    area: Optional[str] = Field(None, description="Area name")
    when: Optional[str] = None
    due_date: Optional[str] = None


class UpdateProjectParams(IdParams):
    name: Optional[str] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    due_date: Optional[str] = None
    when: Optional[str] = None


class MoveTodoParams(IdParams):
    to_list: Optional[str] = None
    to_project: Optional[str] = None


class MoveProjectParams(IdParams):
    to_area: str = Field(min_length=1)


class QuickEntryParams(Params):
    name: Optional[str] = None
    notes: Optional[str] = None


class ProjectScopeParams(Params):
    project_id: Optional[str] = None
    project_name: Optional[str] = None


class AreaScopeParams(Params):
    area_id: Optional[str] = None
    area_name: Optional[str] = None


class BatchItemsParams(Params):
    # Items are validated one by one so a bad item fails alone.
    items: List[Dict[str, Any]]


class BatchUpdatesParams(Params):
    updates: List[Dict[str, Any]]


class BatchIdsParams(Params):
    ids: List[str]


class BatchCompleteParams(BatchIdsParams):
    completed: bool = True


class BatchMoveParams(BatchIdsParams):
    to_list: Optional[str] = None
    to_project: Optional[str] = None


class ChecklistParams(IdParams):
    items: List[str]


def parse_params(model: Type[P], data: Optional[Mapping[str, Any]]) -> P:
    """Validate ``data`` against ``model``, raising :class:`InvalidParameter`."""
    if data is not None and not isinstance(data, Mapping):
        raise InvalidParameter("arguments must be an object")
    try:
        return model.model_validate(dict(data or {}))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidParameter(problems) from e
