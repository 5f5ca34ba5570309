import pytest

from things_api.list_resolver import BUILT_IN_LIST_IDS, built_in_list_id, resolve_list


@pytest.mark.parametrize("name, list_id", [
    ("Inbox", "TMInboxListSource"),
    ("today", "TMTodayListSource"),
    ("UPCOMING", "TMCalendarListSource"),
    ("Anytime", "TMNextListSource"),
    (" Someday ", "TMSomedayListSource"),
    ("Logbook", "TMLogbookListSource"),
])
def test_built_in_lists_resolve_by_id(name, list_id):
    assert built_in_list_id(name) == list_id
    assert resolve_list(name) == f'list id "{list_id}"'


def test_every_built_in_list_is_covered():
    assert set(BUILT_IN_LIST_IDS) == {"inbox", "today", "upcoming", "anytime", "someday", "logbook"}


def test_custom_list_resolves_by_name():
    assert built_in_list_id("Errands") is None
    assert resolve_list("Errands") == 'list "Errands"'


def test_custom_list_name_is_escaped():
    assert resolve_list('My "Big" List') == 'list "My \\"Big\\" List"'
