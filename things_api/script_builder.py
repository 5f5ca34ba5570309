"""AppleScript generators for Things 3.

Every function here is pure: it takes already-validated Python values and
returns the complete script text. Nothing is executed. All user-supplied text
is escaped with :func:`escape_applescript_string` before it is embedded in a
quoted literal.

Reads use batch property retrieval (``name of to dos of …``) rather than a
``repeat`` over items: each property of each item is a separate Apple Event,
so for a few hundred to-dos a per-item loop is roughly 30x slower.
"""
from typing import List, Optional, Sequence

from .date_utils import date_literal
from .errors import InvalidParameter
from .list_resolver import resolve_list
from .result_parser import FIELD_SEPARATOR, RECORD_SEPARATOR
from .utils import join_tag_names, quote_applescript_string

APPLICATION_NAME = "Things3"

INDENT = "    "

# Raised from inside a fetch script when a per-item fallback still
# disagrees with the record count.
DATA_INCONSISTENCY_ERROR_NUMBER = 9001


def _tell(lines: Sequence[str]) -> str:
    script_parts = [f'tell application "{APPLICATION_NAME}"']
    script_parts.extend(INDENT + line for line in lines)
    script_parts.append('end tell')
    return "\n".join(script_parts)


def _require(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidParameter(message)
    return value


def todo_ref(todo_id: str) -> str:
    return f"to do id {quote_applescript_string(todo_id)}"


def project_ref(project_id: str) -> str:
    return f"project id {quote_applescript_string(project_id)}"


def area_ref(area_id: str) -> str:
    return f"area id {quote_applescript_string(area_id)}"


# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------

def when_statement(var_name: str, when: str) -> str:
    """Statement that schedules ``var_name`` according to ``when``.

    ``activation date`` is read-only in Things, so scheduling goes through the
    ``schedule … for …`` command, or a move into Anytime/Someday.
    """
    keyword = when.strip().lower()
    if keyword in ("today", "evening"):
        # "This Evening" has no scripting counterpart; it schedules for today.
        return f"schedule {var_name} for (current date)"
    if keyword == "tomorrow":
        return f"schedule {var_name} for ((current date) + 1 * days)"
    if keyword in ("anytime", "someday"):
        return f"move {var_name} to {resolve_list(keyword)}"
    return f"schedule {var_name} for {date_literal(when)}"


def due_date_statement(var_name: str, due_date: str) -> str:
    return f"set due date of {var_name} to {date_literal(due_date)}"


def _properties_literal(name: Optional[str], notes: Optional[str], tags: Optional[Sequence[str]]) -> str:
    properties = []
    if name is not None:
        properties.append(f"name:{quote_applescript_string(name)}")
    if notes is not None:
        properties.append(f"notes:{quote_applescript_string(notes)}")
    if tags:
        properties.append(f"tag names:{quote_applescript_string(join_tag_names(tags))}")
    return "{" + ", ".join(properties) + "}"


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

def build_add_todo_script(
    name: str,
    notes: Optional[str] = None,
    due_date: Optional[str] = None,
    tags: Optional[Sequence[str]] = None,
    list_name: Optional[str] = None,
    project_name: Optional[str] = None,
    when: Optional[str] = None,
) -> str:
    """Script that creates a to-do and returns its id.

    ``make new to do`` accepts no ``in project``/``in list`` clause for
    containers addressed by name, so placement is a separate statement after
    creation. A project wins over a list when both are given.
    """
    _require(name, "name is required")

    lines = [f"set newTodo to make new to do with properties {_properties_literal(name, notes, tags)}"]
    if project_name:
        lines.append(f"set project of newTodo to project {quote_applescript_string(project_name)}")
    elif list_name:
        lines.append(f"move newTodo to {resolve_list(list_name)}")
    if when:
        lines.append(when_statement("newTodo", when))
    if due_date:
        lines.append(due_date_statement("newTodo", due_date))
    lines.append("return id of newTodo")
    return _tell(lines)


def build_project_exists_script(project_name: str) -> str:
    return _tell([
        "try",
        f"{INDENT}set proj to first project whose name is {quote_applescript_string(project_name)}",
        f'{INDENT}return "found"',
        "on error",
        f'{INDENT}return "not_found"',
        "end try",
    ])


def build_add_project_script(
    name: str,
    notes: Optional[str] = None,
    tags: Optional[Sequence[str]] = None,
    area_name: Optional[str] = None,
    when: Optional[str] = None,
    due_date: Optional[str] = None,
) -> str:
    _require(name, "name is required")

    lines = [f"set newProject to make new project with properties {_properties_literal(name, notes, tags)}"]
    if area_name:
        lines.append(f"set area of newProject to area {quote_applescript_string(area_name)}")
    if when:
        lines.append(when_statement("newProject", when))
    if due_date:
        lines.append(due_date_statement("newProject", due_date))
    lines.append("return id of newProject")
    return _tell(lines)


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

def _update_statements(
    var_name: str,
    name: Optional[str],
    notes: Optional[str],
    tags: Optional[Sequence[str]],
    due_date: Optional[str],
    when: Optional[str],
) -> List[str]:
    updates = []
    if name is not None:
        updates.append(f"set name of {var_name} to {quote_applescript_string(name)}")
    if notes is not None:
        updates.append(f"set notes of {var_name} to {quote_applescript_string(notes)}")
    if tags is not None:
        updates.append(f"set tag names of {var_name} to {quote_applescript_string(join_tag_names(tags))}")
    if due_date is not None:
        updates.append(due_date_statement(var_name, due_date))
    if when is not None:
        updates.append(when_statement(var_name, when))
    return updates


def build_update_todo_script(
    todo_id: str,
    name: Optional[str] = None,
    notes: Optional[str] = None,
    due_date: Optional[str] = None,
    tags: Optional[Sequence[str]] = None,
    when: Optional[str] = None,
) -> str:
    """One ``set`` statement per changed field; an empty tag list clears tags."""
    _require(todo_id, "id is required")
    updates = _update_statements("targetTodo", name, notes, tags, due_date, when)
    if not updates:
        raise InvalidParameter("No updates specified")
    return _tell([f"set targetTodo to {todo_ref(todo_id)}"] + updates)


def build_update_project_script(
    project_id: str,
    name: Optional[str] = None,
    notes: Optional[str] = None,
    tags: Optional[Sequence[str]] = None,
    due_date: Optional[str] = None,
    when: Optional[str] = None,
) -> str:
    _require(project_id, "id is required")
    updates = _update_statements("targetProject", name, notes, tags, due_date, when)
    if not updates:
        raise InvalidParameter("No updates specified")
    return _tell([f"set targetProject to {project_ref(project_id)}"] + updates)


def build_set_status_script(item_ref: str, status: str) -> str:
    if status not in ("open", "completed", "canceled"):
        raise InvalidParameter(f"Unknown status: {status}")
    return _tell([f"set status of {item_ref} to {status}"])


# ---------------------------------------------------------------------------
# Delete / move / UI
# ---------------------------------------------------------------------------

def build_delete_script(item_ref: str) -> str:
    # ``delete`` instead of moving into the localized "Trash" list.
    return _tell([f"delete {item_ref}"])


def build_move_todo_script(todo_id: str, to_list: Optional[str] = None, to_project: Optional[str] = None) -> str:
    _require(todo_id, "id is required")
    if to_project:
        destination = f"project {quote_applescript_string(to_project)}"
    elif to_list:
        destination = resolve_list(to_list)
    else:
        raise InvalidParameter("Either to_list or to_project must be specified")
    return _tell([f"move {todo_ref(todo_id)} to {destination}"])


def build_move_project_script(project_id: str, to_area: str) -> str:
    _require(project_id, "id is required")
    _require(to_area, "to_area is required")
    return _tell([f"move {project_ref(project_id)} to area {quote_applescript_string(to_area)}"])


def build_show_script(item_ref: str) -> str:
    return _tell([f"show {item_ref}"])


def build_show_list_script(list_name: str) -> str:
    _require(list_name, "name is required")
    return _tell([f"show {resolve_list(list_name)}"])


def build_quick_entry_script(name: Optional[str] = None, notes: Optional[str] = None) -> str:
    command = "show quick entry panel"
    if name is not None or notes is not None:
        command += f" with properties {_properties_literal(name, notes, None)}"
    return _tell([command])


def build_empty_trash_script() -> str:
    return _tell(["empty trash"])


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def _record_line(fields: Sequence[str]) -> str:
    joined = f' & "{FIELD_SEPARATOR}" & '.join(fields)
    return f'set output to output & {joined} & "{RECORD_SEPARATOR}"'


def _optional_string_lines(target: str, column: str) -> List[str]:
    """Convert ``item i of column`` to text, with ``missing value`` as ""."""
    return [
        f'set {target} to ""',
        f"if item i of {column} is not missing value then set {target} to (item i of {column}) as string",
    ]


def _relational_column(var_name: str, relation: str, collection: str, count_var: str) -> List[str]:
    """Batch-fetch ``name of <relation> of <collection>`` with a per-item fallback.

    The batch form fails (or comes back short) when some items lack the
    relation, e.g. a to-do without a project. Only this column is then
    re-read item by item.
    """
    return [
        f"set {var_name} to {{}}",
        "try",
        f"{INDENT}set {var_name} to name of {relation} of {collection}",
        "end try",
        f"if (count of {var_name}) < {count_var} then",
        f"{INDENT}set {var_name} to {{}}",
        f"{INDENT}repeat with anItem in (get {collection})",
        f'{INDENT}{INDENT}set itemValue to ""',
        f"{INDENT}{INDENT}try",
        f"{INDENT}{INDENT}{INDENT}set itemValue to name of {relation} of anItem",
        f"{INDENT}{INDENT}end try",
        f"{INDENT}{INDENT}set end of {var_name} to itemValue",
        f"{INDENT}end repeat",
        "end if",
        f"if (count of {var_name}) is not {count_var} then",
        f'{INDENT}error "Data inconsistency: {relation} column has " & (count of {var_name}) & '
        f'" values for " & {count_var} & " items" number {DATA_INCONSISTENCY_ERROR_NUMBER}',
        "end if",
    ]


def batch_todos_script(collection: str) -> str:
    """Fetch every to-do of ``collection`` as flat text, one column per property."""
    lines = [
        f"set todoCount to count of {collection}",
        'if todoCount = 0 then return ""',
        f"set allIds to id of {collection}",
        f"set allNames to name of {collection}",
        f"set allNotes to notes of {collection}",
        f"set allStatuses to status of {collection}",
        f"set allTags to tag names of {collection}",
        f"set allDueDates to due date of {collection}",
        f"set allScheduledDates to activation date of {collection}",
        f"set allCompletionDates to completion date of {collection}",
    ]
    lines += _relational_column("allProjects", "project", collection, "todoCount")
    lines += _relational_column("allAreas", "area", collection, "todoCount")
    lines += ['set output to ""', "repeat with i from 1 to todoCount"]
    body = []
    body += _optional_string_lines("dueStr", "allDueDates")
    body += _optional_string_lines("schedStr", "allScheduledDates")
    body += _optional_string_lines("compStr", "allCompletionDates")
    body += _optional_string_lines("projStr", "allProjects")
    body += _optional_string_lines("areaStr", "allAreas")
    body.append(_record_line([
        "(item i of allIds)", "(item i of allNames)", "(item i of allNotes)",
        "(item i of allStatuses)", "(item i of allTags)",
        "dueStr", "schedStr", "compStr", "projStr", "areaStr",
    ]))
    lines += [INDENT + line for line in body]
    lines += ["end repeat", "return output"]
    return _tell(lines)


def build_list_todos_script(list_name: str) -> str:
    _require(list_name, "list name is required")
    return batch_todos_script(f"to dos of {resolve_list(list_name)}")


def build_open_todos_script() -> str:
    return batch_todos_script("(to dos whose status is open)")


def build_selected_todos_script() -> str:
    """``selected to dos`` is a plain list, not an element specifier, so it
    cannot be batch-read; the selection is small and is read item by item."""
    lines = [
        'set output to ""',
        "repeat with t in (selected to dos)",
    ]
    body = [
        "set todoId to id of t",
        "set todoName to name of t",
        "set todoNotes to notes of t",
        "set todoStatus to status of t",
        "set todoTags to tag names of t",
    ]
    for target, prop in (
        ("dueStr", "due date of t"),
        ("schedStr", "activation date of t"),
        ("compStr", "completion date of t"),
        ("projStr", "name of project of t"),
        ("areaStr", "name of area of t"),
    ):
        body += [
            f'set {target} to ""',
            "try",
            f"{INDENT}set {target} to {prop} as string",
            "end try",
        ]
    body.append(_record_line([
        "todoId", "todoName", "todoNotes", "todoStatus", "todoTags",
        "dueStr", "schedStr", "compStr", "projStr", "areaStr",
    ]))
    lines += [INDENT + line for line in body]
    lines += ["end repeat", "return output"]
    return _tell(lines)


def build_todos_in_project_script(project_id: Optional[str] = None, project_name: Optional[str] = None) -> str:
    if project_id:
        ref = project_ref(project_id)
    elif project_name:
        ref = f"project {quote_applescript_string(project_name)}"
    else:
        raise InvalidParameter("Either project_id or project_name must be specified")
    return batch_todos_script(f"to dos of {ref}")


def build_todos_in_area_script(area_id: Optional[str] = None, area_name: Optional[str] = None) -> str:
    if area_id:
        ref = area_ref(area_id)
    elif area_name:
        ref = f"area {quote_applescript_string(area_name)}"
    else:
        raise InvalidParameter("Either area_id or area_name must be specified")
    return batch_todos_script(f"to dos of {ref}")


def build_todos_with_tag_script(tag_name: str) -> str:
    _require(tag_name, "tag is required")
    return batch_todos_script(f"to dos of tag {quote_applescript_string(tag_name)}")


def build_projects_script(area_id: Optional[str] = None, area_name: Optional[str] = None) -> str:
    """Batch-fetch projects, all of them or those of one area.

    The to-do count has no batch form and is counted per project.
    """
    if area_id:
        collection = f"projects of {area_ref(area_id)}"
    elif area_name:
        collection = f"projects of area {quote_applescript_string(area_name)}"
    else:
        collection = "projects"

    lines = [
        f"set projectCount to count of {collection}",
        'if projectCount = 0 then return ""',
        f"set allIds to id of {collection}",
        f"set allNames to name of {collection}",
        f"set allNotes to notes of {collection}",
        f"set allStatuses to status of {collection}",
        f"set allTags to tag names of {collection}",
    ]
    lines += _relational_column("allAreas", "area", collection, "projectCount")
    lines += [
        "set allCounts to {}",
        f"repeat with p in (get {collection})",
        f"{INDENT}set end of allCounts to (count of to dos of p)",
        "end repeat",
        'set output to ""',
        "repeat with i from 1 to projectCount",
    ]
    body = _optional_string_lines("areaStr", "allAreas")
    body.append(_record_line([
        "(item i of allIds)", "(item i of allNames)", "(item i of allNotes)",
        "(item i of allStatuses)", "(item i of allTags)", "areaStr", "(item i of allCounts)",
    ]))
    lines += [INDENT + line for line in body]
    lines += ["end repeat", "return output"]
    return _tell(lines)


def build_areas_script() -> str:
    return _tell([
        "set areaCount to count of areas",
        'if areaCount = 0 then return ""',
        "set allIds to id of areas",
        "set allNames to name of areas",
        "set allTags to tag names of areas",
        'set output to ""',
        "repeat with i from 1 to areaCount",
        INDENT + _record_line(["(item i of allIds)", "(item i of allNames)", "(item i of allTags)"]),
        "end repeat",
        "return output",
    ])


def build_tags_script() -> str:
    return _tell([
        "set tagCount to count of tags",
        'if tagCount = 0 then return ""',
        "set allIds to id of tags",
        "set allNames to name of tags",
        'set output to ""',
        "repeat with i from 1 to tagCount",
        INDENT + _record_line(["(item i of allIds)", "(item i of allNames)"]),
        "end repeat",
        "return output",
    ])
