import asyncio

import pytest

from commands.catalog import OPERATIONS, dispatch, get_operation, to_jsonable
from things_api.data_models import Tag
from things_api.errors import InvalidParameter
from things_api.params import AddTodoParams, parse_params

CORE_OPERATIONS = {
    "get_inbox", "get_today", "get_upcoming", "get_anytime", "get_someday", "get_logbook", "get_projects",
    "add_todo", "update_todo", "complete_todo", "delete_todo", "search_todos",
    "add_project", "update_project", "delete_project",
    "get_areas", "get_tags",
    "move_todo", "move_project",
    "show_todo", "show_project", "show_list", "show_quick_entry",
    "empty_trash", "get_selected_todos",
    "get_todos_in_project", "get_todos_in_area", "get_projects_in_area",
    "create_todos_batch", "complete_todos_batch", "delete_todos_batch", "move_todos_batch", "update_todos_batch",
    "add_checklist_items", "set_checklist_items",
}


def test_catalog_names():
    assert CORE_OPERATIONS <= set(OPERATIONS)
    assert {"cancel_todo", "complete_project", "get_todos_with_tag"} <= set(OPERATIONS)


def test_reads_are_marked_read_only():
    for name, op in OPERATIONS.items():
        if name.startswith("get_") or name == "search_todos":
            assert op.read_only, name
        else:
            assert not op.read_only, name


def test_unknown_operation():
    with pytest.raises(InvalidParameter, match="Unknown operation: nope"):
        get_operation("nope")


def test_add_todo_accepts_list_alias(manager, recorder):
    recorder.responses = ["T1"]
    result = asyncio.run(dispatch(manager, "add_todo", {"name": "Call mom", "list": "Today"}))
    assert result["success"] is True
    assert result["todo"]["id"] == "T1"
    assert 'list id "TMTodayListSource"' in recorder.scripts[0]


def test_missing_required_argument(manager, recorder):
    with pytest.raises(InvalidParameter, match="name"):
        asyncio.run(dispatch(manager, "add_todo", {}))
    assert recorder.scripts == []


def test_wrong_argument_type(manager, recorder):
    with pytest.raises(InvalidParameter, match="tags"):
        asyncio.run(dispatch(manager, "add_todo", {"name": "x", "tags": "urgent"}))


def test_complete_todo_defaults_to_completed(manager, recorder):
    result = asyncio.run(dispatch(manager, "complete_todo", {"id": "t1"}))
    assert result["message"] == "To-do marked as completed"
    assert "to completed" in recorder.scripts[0]


def test_batch_result_is_serializable(manager, recorder):
    result = asyncio.run(dispatch(manager, "delete_todos_batch", {"ids": ["a"]}))
    assert to_jsonable(result)["succeeded"] == 1


def test_read_without_arguments(manager, recorder):
    recorder.responses = ["g1|||urgent###"]
    result = asyncio.run(dispatch(manager, "get_tags"))
    assert to_jsonable(result) == [{"id": "g1", "name": "urgent"}]


def test_to_jsonable_nested():
    assert to_jsonable({"tags": [Tag(id="1", name="a")], "n": 2}) == {"tags": [{"id": "1", "name": "a"}], "n": 2}


def test_parse_params_rejects_non_objects():
    with pytest.raises(InvalidParameter, match="arguments must be an object"):
        parse_params(AddTodoParams, ["Buy milk"])


def test_parse_params_accepts_field_name_and_alias():
    assert parse_params(AddTodoParams, {"name": "x", "list": "Today"}).list_name == "Today"
    assert parse_params(AddTodoParams, {"name": "x", "list_name": "Today"}).list_name == "Today"
