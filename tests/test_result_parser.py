from things_api.data_models import Status
from things_api.result_parser import (
    format_records,
    parse_areas,
    parse_projects,
    parse_tags,
    parse_todos,
    split_list,
    split_records,
)

TODO_ROW = ["t1", "Buy milk", "", "open", "home, errands", "2024-12-25", None, None, "Groceries", ""]


def test_empty_output():
    assert split_records("") == []
    assert parse_todos("") == []
    assert parse_projects("") == []


def test_todo_fields():
    [todo] = parse_todos(format_records([TODO_ROW]))
    assert todo.id == "t1"
    assert todo.name == "Buy milk"
    assert todo.notes is None
    assert todo.status is Status.OPEN
    assert todo.tag_names == ["home", "errands"]
    assert todo.due_date == "2024-12-25"
    assert todo.scheduled_date is None
    assert todo.completion_date is None
    assert todo.project_name == "Groceries"
    assert todo.area_name is None


def test_records_keep_order():
    second = ["t2", "Walk dog", "twice", "completed", "", "", "", "Monday, 1 January 2024", "", "Home"]
    todos = parse_todos(format_records([TODO_ROW, second]))
    assert [t.id for t in todos] == ["t1", "t2"]
    assert todos[1].status is Status.COMPLETED
    assert todos[1].tag_names == []
    assert todos[1].area_name == "Home"


def test_short_record_is_dropped():
    text = "broken|||record###" + format_records([TODO_ROW])
    assert [t.id for t in parse_todos(text)] == ["t1"]


def test_unknown_status_is_dropped():
    bad = list(TODO_ROW)
    bad[3] = "someday-ish"
    assert parse_todos(format_records([bad])) == []


def test_projects():
    rows = [
        ["p1", "Launch", "notes", "open", "work", "Work", "4"],
        ["p2", "Garden", "", "canceled", "", "", "oops"],
    ]
    launch, garden = parse_projects(format_records(rows))
    assert launch.area_name == "Work"
    assert launch.todo_count == 4
    assert garden.status is Status.CANCELED
    assert garden.notes is None
    assert garden.todo_count == 0


def test_areas_and_tags():
    [area] = parse_areas(format_records([["a1", "Home", "family"]]))
    assert area.tag_names == ["family"]
    tags = parse_tags(format_records([["g1", "urgent"], ["g2", "Errand"]]))
    assert [t.name for t in tags] == ["urgent", "Errand"]


def test_split_list():
    assert split_list("") == []
    assert split_list("a, b c") == ["a", "b c"]
