"""
Operation catalog.

Maps each operation name to its parameter model and handler. The RPC
transport (or the CLI) looks operations up here, hands over the decoded
argument object, and serializes whatever comes back with :func:`to_jsonable`.
"""
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Type

from pydantic import BaseModel

from things_api import params as p
from things_api.errors import InvalidParameter
from things_api.task_operations import ThingsManager

Handler = Callable[[ThingsManager, Any], Awaitable[Any]]


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    params: Type[BaseModel]
    handler: Handler
    read_only: bool = False
    destructive: bool = False


def _message(text: str, **extra) -> Dict[str, Any]:
    return {"success": True, "message": text, **extra}


async def _add_todo(m: ThingsManager, a: p.AddTodoParams):
    todo = await m.add_todo(
        name=a.name, notes=a.notes, due_date=a.due_date, tags=a.tags,
        list_name=a.list_name, project_name=a.project, when=a.when,
    )
    return _message("To-do created successfully", todo=todo.to_dict())


async def _update_todo(m: ThingsManager, a: p.UpdateTodoParams):
    await m.update_todo(a.id, name=a.name, notes=a.notes, due_date=a.due_date, tags=a.tags, when=a.when)
    return _message("To-do updated successfully")


async def _complete_todo(m: ThingsManager, a: p.CompleteParams):
    await m.complete_todo(a.id, completed=a.completed)
    return _message(f"To-do marked as {'completed' if a.completed else 'incomplete'}")


async def _cancel_todo(m: ThingsManager, a: p.IdParams):
    await m.cancel_todo(a.id)
    return _message("To-do canceled")


async def _delete_todo(m: ThingsManager, a: p.IdParams):
    await m.delete_todo(a.id)
    return _message("To-do moved to Trash")


async def _add_project(m: ThingsManager, a: p.AddProjectParams):
    project = await m.add_project(
        name=a.name, notes=a.notes, tags=a.tags, area_name=a.area, when=a.when, due_date=a.due_date
    )
    return _message("Project created successfully", project=project.to_dict())


async def _update_project(m: ThingsManager, a: p.UpdateProjectParams):
    await m.update_project(a.id, name=a.name, notes=a.notes, tags=a.tags, due_date=a.due_date, when=a.when)
    return _message("Project updated successfully")


async def _complete_project(m: ThingsManager, a: p.CompleteParams):
    await m.complete_project(a.id, completed=a.completed)
    return _message(f"Project marked as {'completed' if a.completed else 'incomplete'}")


async def _delete_project(m: ThingsManager, a: p.IdParams):
    await m.delete_project(a.id)
    return _message("Project moved to Trash")


async def _move_todo(m: ThingsManager, a: p.MoveTodoParams):
    await m.move_todo(a.id, to_list=a.to_list, to_project=a.to_project)
    return _message(f"To-do moved to {a.to_project or a.to_list}")


async def _move_project(m: ThingsManager, a: p.MoveProjectParams):
    await m.move_project(a.id, a.to_area)
    return _message(f"Project moved to area '{a.to_area}'")


async def _show_todo(m: ThingsManager, a: p.IdParams):
    await m.show_todo(a.id)
    return _message("Showing to-do in Things")


async def _show_project(m: ThingsManager, a: p.IdParams):
    await m.show_project(a.id)
    return _message("Showing project in Things")


async def _show_list(m: ThingsManager, a: p.ListNameParams):
    await m.show_list(a.name)
    return _message(f"Showing list '{a.name}' in Things")


async def _show_quick_entry(m: ThingsManager, a: p.QuickEntryParams):
    await m.show_quick_entry(name=a.name, notes=a.notes)
    return _message("Quick entry panel opened")


async def _empty_trash(m: ThingsManager, a: p.NoParams):
    await m.empty_trash()
    return _message("Trash emptied")


async def _add_checklist_items(m: ThingsManager, a: p.ChecklistParams):
    await m.add_checklist_items(a.id, a.items)
    return _message(f"Added {len(a.items)} checklist item(s)")


async def _set_checklist_items(m: ThingsManager, a: p.ChecklistParams):
    await m.set_checklist_items(a.id, a.items)
    return _message(f"Checklist replaced with {len(a.items)} item(s)")


def _list_reader(list_name: str) -> Handler:
    async def read(m: ThingsManager, a: p.NoParams):
        return await m.get_todos(list_name)
    return read


_CATALOG = [
    # Lists
    Operation("get_inbox", "Get to-dos in the Inbox.", p.NoParams, _list_reader("Inbox"), read_only=True),
    Operation("get_today", "Get to-dos scheduled for Today.", p.NoParams, _list_reader("Today"), read_only=True),
    Operation("get_upcoming", "Get upcoming to-dos.", p.NoParams, _list_reader("Upcoming"), read_only=True),
    Operation("get_anytime", "Get to-dos in Anytime.", p.NoParams, _list_reader("Anytime"), read_only=True),
    Operation("get_someday", "Get to-dos in Someday.", p.NoParams, _list_reader("Someday"), read_only=True),
    Operation("get_logbook", "Get completed to-dos from the Logbook.", p.NoParams, _list_reader("Logbook"), read_only=True),
    Operation("get_projects", "Get all projects.", p.NoParams,
              lambda m, a: m.get_projects(), read_only=True),
    # To-dos
    Operation("add_todo", "Create a new to-do.", p.AddTodoParams, _add_todo),
    Operation("update_todo", "Update an existing to-do.", p.UpdateTodoParams, _update_todo),
    Operation("complete_todo", "Mark a to-do as completed or incomplete.", p.CompleteParams, _complete_todo),
    Operation("cancel_todo", "Mark a to-do as canceled.", p.IdParams, _cancel_todo),
    Operation("delete_todo", "Delete a to-do (moves to Trash).", p.IdParams, _delete_todo, destructive=True),
    Operation("search_todos", "Search open to-dos by name or notes.", p.QueryParams,
              lambda m, a: m.search_todos(a.query), read_only=True),
    # Projects
    Operation("add_project", "Create a new project.", p.AddProjectParams, _add_project),
    Operation("update_project", "Update an existing project.", p.UpdateProjectParams, _update_project),
    Operation("complete_project", "Mark a project as completed or incomplete.", p.CompleteParams, _complete_project),
    Operation("delete_project", "Delete a project (moves to Trash).", p.IdParams, _delete_project, destructive=True),
    # Areas & tags
    Operation("get_areas", "Get all areas.", p.NoParams, lambda m, a: m.get_areas(), read_only=True),
    Operation("get_tags", "Get all tags.", p.NoParams, lambda m, a: m.get_tags(), read_only=True),
    Operation("get_todos_with_tag", "Get to-dos carrying a tag.", p.TagParams,
              lambda m, a: m.get_todos_with_tag(a.tag), read_only=True),
    # Move
    Operation("move_todo", "Move a to-do to a list or project.", p.MoveTodoParams, _move_todo),
    Operation("move_project", "Move a project to an area.", p.MoveProjectParams, _move_project),
    # UI
    Operation("show_todo", "Reveal a to-do in Things.", p.IdParams, _show_todo),
    Operation("show_project", "Reveal a project in Things.", p.IdParams, _show_project),
    Operation("show_list", "Show a list in Things.", p.ListNameParams, _show_list),
    Operation("show_quick_entry", "Open the Quick Entry panel.", p.QuickEntryParams, _show_quick_entry),
    # Utility
    Operation("empty_trash", "Permanently delete everything in the Trash.", p.NoParams, _empty_trash, destructive=True),
    Operation("get_selected_todos", "Get the to-dos selected in Things.", p.NoParams,
              lambda m, a: m.get_selected_todos(), read_only=True),
    # Scoped queries
    Operation("get_todos_in_project", "Get to-dos of a project by id or name.", p.ProjectScopeParams,
              lambda m, a: m.get_todos_in_project(project_id=a.project_id, project_name=a.project_name),
              read_only=True),
    Operation("get_todos_in_area", "Get to-dos of an area by id or name.", p.AreaScopeParams,
              lambda m, a: m.get_todos_in_area(area_id=a.area_id, area_name=a.area_name), read_only=True),
    Operation("get_projects_in_area", "Get projects of an area by id or name.", p.AreaScopeParams,
              lambda m, a: m.get_projects_in_area(area_id=a.area_id, area_name=a.area_name), read_only=True),
    # Batches
    Operation("create_todos_batch", "Create several to-dos; failures are reported per item.",
              p.BatchItemsParams, lambda m, a: m.create_todos_batch(a.items)),
    Operation("complete_todos_batch", "Complete several to-dos.", p.BatchCompleteParams,
              lambda m, a: m.complete_todos_batch(a.ids, completed=a.completed)),
    Operation("delete_todos_batch", "Delete several to-dos.", p.BatchIdsParams,
              lambda m, a: m.delete_todos_batch(a.ids), destructive=True),
    Operation("move_todos_batch", "Move several to-dos to a list or project.", p.BatchMoveParams,
              lambda m, a: m.move_todos_batch(a.ids, to_list=a.to_list, to_project=a.to_project)),
    Operation("update_todos_batch", "Update several to-dos.", p.BatchUpdatesParams,
              lambda m, a: m.update_todos_batch(a.updates)),
    # Checklists
    Operation("add_checklist_items", "Append checklist items to a to-do.", p.ChecklistParams, _add_checklist_items),
    Operation("set_checklist_items", "Replace all checklist items of a to-do.", p.ChecklistParams,
              _set_checklist_items, destructive=True),
]

OPERATIONS: Dict[str, Operation] = {op.name: op for op in _CATALOG}


def get_operation(name: str) -> Operation:
    try:
        return OPERATIONS[name]
    except KeyError:
        raise InvalidParameter(f"Unknown operation: {name}") from None


async def dispatch(manager: ThingsManager, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Any:
    """Validate ``arguments`` for operation ``name`` and run it."""
    operation = get_operation(name)
    args = p.parse_params(operation.params, arguments)
    return await operation.handler(manager, args)


def to_jsonable(result: Any) -> Any:
    """Turn handler results (models, lists of models, dicts) into JSON data."""
    if hasattr(result, "to_dict"):
        return result.to_dict()
    if isinstance(result, (list, tuple)):
        return [to_jsonable(r) for r in result]
    if isinstance(result, dict):
        return {k: to_jsonable(v) for k, v in result.items()}
    return result
