"""Tests for QueryState: the page re-anchors on any query change."""

import pytest

from recordkeeper.records.record_models import QueryParams, QueryState


@pytest.mark.parametrize(
    "changes",
    [
        {"search_text": "ana"},
        {"status_filter": "Pending"},
        {"sort_field": "registration_date"},
        {"sort_order": "desc"},
        {"page_size": 20},
    ],
)
def test_any_query_change_resets_page(changes):
    state = QueryState(page_size=10, page=4)
    updated = state.update(**changes)
    assert updated.page == 1
    for key, value in changes.items():
        actual = updated.page_size if key == "page_size" else getattr(updated.params, key)
        assert actual == value


def test_unchanged_values_keep_page():
    state = QueryState(params=QueryParams(search_text="ana"), page_size=10, page=3)
    assert state.update(search_text="ana", page_size=10).page == 3


def test_go_to_changes_only_page():
    state = QueryState(params=QueryParams(search_text="ana"), page_size=5)
    moved = state.go_to(3)
    assert moved.page == 3
    assert moved.params == state.params
    assert moved.page_size == 5
    assert state.go_to(-2).page == 1


def test_toggle_sort_flips_active_field():
    state = QueryState(page=2)
    toggled = state.toggle_sort("full_name")
    assert toggled.params.sort_order == "desc"
    assert toggled.page == 1
    assert toggled.toggle_sort("full_name").params.sort_order == "asc"


def test_toggle_sort_new_field_starts_ascending():
    state = QueryState(params=QueryParams(sort_order="desc"))
    toggled = state.toggle_sort("registration_date")
    assert toggled.params.sort_field == "registration_date"
    assert toggled.params.sort_order == "asc"


def test_update_rejects_unknown_fields_and_bad_page_size():
    state = QueryState()
    with pytest.raises(ValueError, match="Unknown query fields"):
        state.update(colour="blue")
    with pytest.raises(ValueError, match="page_size"):
        state.update(page_size=0)


def test_update_validates_sort_field():
    with pytest.raises(ValueError):
        QueryState().update(sort_field="notes")
