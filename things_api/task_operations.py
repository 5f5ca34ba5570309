"""Task, project and list operations against Things 3.

:class:`ThingsManager` is the entry point: each method builds a script with
:mod:`script_builder` (raising :class:`InvalidParameter` before anything is
sent), awaits it on the shared :class:`AppleScriptRunner`, and decodes the
reply with :mod:`result_parser`. No state is kept between calls apart from
the URL-scheme auth token.
"""
import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence

from . import script_builder as sb
from .apple_script_client import MISSING_OBJECT_ERROR_NUMBERS, AppleScriptRunner
from .batch_operations import run_batch
from .data_models import Area, BatchResult, Project, Status, Tag, Todo
from .errors import (
    AreaNotFound,
    InvalidParameter,
    NotFound,
    ProjectNotFound,
    ScriptError,
    TagNotFound,
    TodoNotFound,
)
from .params import AddTodoParams, UpdateTodoParams, parse_params
from .result_parser import parse_areas, parse_projects, parse_tags, parse_todos
from .url_scheme import build_checklist_url

logger = logging.getLogger(__name__)


def _mapping_id(item: Any) -> Optional[str]:
    if isinstance(item, Mapping) and isinstance(item.get("id"), str):
        return item["id"]
    return None


class ThingsManager:
    def __init__(self, runner: Optional[AppleScriptRunner] = None, auth_token: Optional[str] = None):
        self.runner = runner or AppleScriptRunner()
        self._auth_token = auth_token

    # -- auth token ---------------------------------------------------------

    def set_auth_token(self, token: Optional[str]) -> None:
        self._auth_token = token

    def has_auth_token(self) -> bool:
        return bool(self._auth_token)

    # -- execution helpers --------------------------------------------------

    async def _run(self, script: str) -> str:
        return await self.runner.run(script)

    async def _run_addressed(self, script: str, not_found: Callable[[], NotFound]) -> str:
        """Run a script that addresses one object, mapping "can't get" errors."""
        try:
            return await self._run(script)
        except ScriptError as e:
            if e.number in MISSING_OBJECT_ERROR_NUMBERS:
                raise not_found() from e
            raise

    # -- lists ---------------------------------------------------------------

    async def get_todos(self, list_name: str) -> List[Todo]:
        return parse_todos(await self._run(sb.build_list_todos_script(list_name)))

    async def get_inbox(self) -> List[Todo]:
        return await self.get_todos("Inbox")

    async def get_today(self) -> List[Todo]:
        return await self.get_todos("Today")

    async def get_upcoming(self) -> List[Todo]:
        return await self.get_todos("Upcoming")

    async def get_anytime(self) -> List[Todo]:
        return await self.get_todos("Anytime")

    async def get_someday(self) -> List[Todo]:
        return await self.get_todos("Someday")

    async def get_logbook(self) -> List[Todo]:
        return await self.get_todos("Logbook")

    async def get_projects(self) -> List[Project]:
        return parse_projects(await self._run(sb.build_projects_script()))

    async def get_areas(self) -> List[Area]:
        return parse_areas(await self._run(sb.build_areas_script()))

    async def get_tags(self) -> List[Tag]:
        return parse_tags(await self._run(sb.build_tags_script()))

    async def get_selected_todos(self) -> List[Todo]:
        return parse_todos(await self._run(sb.build_selected_todos_script()))

    async def get_todos_in_project(self, project_id: Optional[str] = None, project_name: Optional[str] = None) -> List[Todo]:
        script = sb.build_todos_in_project_script(project_id=project_id, project_name=project_name)
        output = await self._run_addressed(script, lambda: ProjectNotFound(project_id or project_name))
        return parse_todos(output)

    async def get_todos_in_area(self, area_id: Optional[str] = None, area_name: Optional[str] = None) -> List[Todo]:
        script = sb.build_todos_in_area_script(area_id=area_id, area_name=area_name)
        output = await self._run_addressed(script, lambda: AreaNotFound(area_id or area_name))
        return parse_todos(output)

    async def get_projects_in_area(self, area_id: Optional[str] = None, area_name: Optional[str] = None) -> List[Project]:
        if not area_id and not area_name:
            raise InvalidParameter("Either area_id or area_name must be specified")
        script = sb.build_projects_script(area_id=area_id, area_name=area_name)
        output = await self._run_addressed(script, lambda: AreaNotFound(area_id or area_name))
        return parse_projects(output)

    async def get_todos_with_tag(self, tag: str) -> List[Todo]:
        script = sb.build_todos_with_tag_script(tag)
        return parse_todos(await self._run_addressed(script, lambda: TagNotFound(tag)))

    async def search_todos(self, query: str) -> List[Todo]:
        """Open to-dos whose name or notes contain ``query``, ignoring case.

        Matching happens here rather than with AppleScript's ``contains``,
        which is unreliable for CJK and other non-ASCII text.
        """
        if not query:
            raise InvalidParameter("query is required")
        needle = query.casefold()
        todos = parse_todos(await self._run(sb.build_open_todos_script()))
        return [
            t for t in todos
            if needle in t.name.casefold() or (t.notes is not None and needle in t.notes.casefold())
        ]

    # -- create --------------------------------------------------------------

    async def add_todo(
        self,
        name: str,
        notes: Optional[str] = None,
        due_date: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        list_name: Optional[str] = None,
        project_name: Optional[str] = None,
        when: Optional[str] = None,
    ) -> Todo:
        script = sb.build_add_todo_script(
            name=name,
            notes=notes,
            due_date=due_date,
            tags=tags,
            list_name=list_name,
            project_name=project_name,
            when=when,
        )
        if project_name:
            found = await self._run(sb.build_project_exists_script(project_name))
            if found.strip() == "not_found":
                raise InvalidParameter(f"Project '{project_name}' not found")

        todo_id = (await self._run(script)).strip()
        logger.info("Created to-do %s", todo_id)
        return Todo(
            id=todo_id,
            name=name,
            notes=notes,
            status=Status.OPEN,
            tag_names=list(tags or []),
            due_date=due_date,
            project_name=project_name,
        )

    async def add_project(
        self,
        name: str,
        notes: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        area_name: Optional[str] = None,
        when: Optional[str] = None,
        due_date: Optional[str] = None,
    ) -> Project:
        script = sb.build_add_project_script(
            name=name, notes=notes, tags=tags, area_name=area_name, when=when, due_date=due_date
        )
        project_id = (await self._run(script)).strip()
        logger.info("Created project %s", project_id)
        return Project(
            id=project_id,
            name=name,
            notes=notes,
            status=Status.OPEN,
            tag_names=list(tags or []),
            area_name=area_name,
            todo_count=0,
        )

    # -- update / status -----------------------------------------------------

    async def update_todo(
        self,
        todo_id: str,
        name: Optional[str] = None,
        notes: Optional[str] = None,
        due_date: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        when: Optional[str] = None,
    ) -> None:
        script = sb.build_update_todo_script(todo_id, name=name, notes=notes, due_date=due_date, tags=tags, when=when)
        await self._run_addressed(script, lambda: TodoNotFound(todo_id))

    async def update_project(
        self,
        project_id: str,
        name: Optional[str] = None,
        notes: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        due_date: Optional[str] = None,
        when: Optional[str] = None,
    ) -> None:
        script = sb.build_update_project_script(
            project_id, name=name, notes=notes, tags=tags, due_date=due_date, when=when
        )
        await self._run_addressed(script, lambda: ProjectNotFound(project_id))

    async def complete_todo(self, todo_id: str, completed: bool = True) -> None:
        status = Status.COMPLETED if completed else Status.OPEN
        await self._set_todo_status(todo_id, status)

    async def cancel_todo(self, todo_id: str) -> None:
        await self._set_todo_status(todo_id, Status.CANCELED)

    async def _set_todo_status(self, todo_id: str, status: Status) -> None:
        if not todo_id:
            raise InvalidParameter("id is required")
        script = sb.build_set_status_script(sb.todo_ref(todo_id), status.value)
        await self._run_addressed(script, lambda: TodoNotFound(todo_id))

    async def complete_project(self, project_id: str, completed: bool = True) -> None:
        if not project_id:
            raise InvalidParameter("id is required")
        status = Status.COMPLETED if completed else Status.OPEN
        script = sb.build_set_status_script(sb.project_ref(project_id), status.value)
        await self._run_addressed(script, lambda: ProjectNotFound(project_id))

    # -- delete / move -------------------------------------------------------

    async def delete_todo(self, todo_id: str) -> None:
        if not todo_id:
            raise InvalidParameter("id is required")
        await self._run_addressed(sb.build_delete_script(sb.todo_ref(todo_id)), lambda: TodoNotFound(todo_id))

    async def delete_project(self, project_id: str) -> None:
        if not project_id:
            raise InvalidParameter("id is required")
        script = sb.build_delete_script(sb.project_ref(project_id))
        await self._run_addressed(script, lambda: ProjectNotFound(project_id))

    async def move_todo(self, todo_id: str, to_list: Optional[str] = None, to_project: Optional[str] = None) -> None:
        script = sb.build_move_todo_script(todo_id, to_list=to_list, to_project=to_project)
        await self._run_addressed(script, lambda: TodoNotFound(todo_id))

    async def move_project(self, project_id: str, to_area: str) -> None:
        script = sb.build_move_project_script(project_id, to_area)
        await self._run_addressed(script, lambda: ProjectNotFound(project_id))

    # -- UI ------------------------------------------------------------------

    async def show_todo(self, todo_id: str) -> None:
        if not todo_id:
            raise InvalidParameter("id is required")
        await self._run_addressed(sb.build_show_script(sb.todo_ref(todo_id)), lambda: TodoNotFound(todo_id))

    async def show_project(self, project_id: str) -> None:
        if not project_id:
            raise InvalidParameter("id is required")
        script = sb.build_show_script(sb.project_ref(project_id))
        await self._run_addressed(script, lambda: ProjectNotFound(project_id))

    async def show_list(self, name: str) -> None:
        await self._run(sb.build_show_list_script(name))

    async def show_quick_entry(self, name: Optional[str] = None, notes: Optional[str] = None) -> None:
        await self._run(sb.build_quick_entry_script(name=name, notes=notes))

    async def empty_trash(self) -> None:
        await self._run(sb.build_empty_trash_script())

    # -- batches -------------------------------------------------------------

    async def create_todos_batch(self, items: Sequence[Mapping[str, Any]]) -> BatchResult:
        """Create one to-do per item. Items take the same fields as ``add_todo``."""
        async def create(index: int, item: Mapping[str, Any]) -> str:
            args = parse_params(AddTodoParams, item)
            todo = await self.add_todo(
                name=args.name,
                notes=args.notes,
                due_date=args.due_date,
                tags=args.tags,
                list_name=args.list_name,
                project_name=args.project,
                when=args.when,
            )
            return todo.id

        return await run_batch(items, create)

    async def complete_todos_batch(self, ids: Sequence[str], completed: bool = True) -> BatchResult:
        async def complete(index: int, todo_id: str) -> str:
            await self.complete_todo(todo_id, completed=completed)
            return todo_id

        return await run_batch(ids, complete, item_id=lambda todo_id: todo_id)

    async def delete_todos_batch(self, ids: Sequence[str]) -> BatchResult:
        async def delete(index: int, todo_id: str) -> str:
            await self.delete_todo(todo_id)
            return todo_id

        return await run_batch(ids, delete, item_id=lambda todo_id: todo_id)

    async def move_todos_batch(
        self, ids: Sequence[str], to_list: Optional[str] = None, to_project: Optional[str] = None
    ) -> BatchResult:
        async def move(index: int, todo_id: str) -> str:
            await self.move_todo(todo_id, to_list=to_list, to_project=to_project)
            return todo_id

        return await run_batch(ids, move, item_id=lambda todo_id: todo_id)

    async def update_todos_batch(self, updates: Sequence[Mapping[str, Any]]) -> BatchResult:
        async def update(index: int, item: Mapping[str, Any]) -> str:
            args = parse_params(UpdateTodoParams, item)
            await self.update_todo(
                args.id,
                name=args.name,
                notes=args.notes,
                due_date=args.due_date,
                tags=args.tags,
                when=args.when,
            )
            return args.id

        return await run_batch(updates, update, item_id=_mapping_id)

    # -- checklists (URL scheme) ---------------------------------------------

    async def add_checklist_items(self, todo_id: str, items: Sequence[str]) -> None:
        """Append checklist items. Things offers no way to read them back."""
        if not items:
            raise InvalidParameter("items array cannot be empty")
        url = build_checklist_url(todo_id, items, append=True, auth_token=self._auth_token)
        await self.runner.open_url(url)

    async def set_checklist_items(self, todo_id: str, items: Sequence[str]) -> None:
        """Replace the whole checklist; an empty ``items`` clears it."""
        url = build_checklist_url(todo_id, items, append=False, auth_token=self._auth_token)
        await self.runner.open_url(url)
