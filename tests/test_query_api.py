"""Tests for the records query API (filter + stable sort)."""

from recordkeeper.api.query_api import filter_records, query_records, sort_records
from recordkeeper.records.record_models import QueryParams


def _names(records):
    return [r.full_name for r in records]


def test_sort_by_name_ascending(record_factory):
    """Test the two-record scenario sorted by name ascending."""
    records = [
        record_factory("Bob", "Pending", "2024-02-01"),
        record_factory("Ana", "Authorized", "2024-01-01"),
    ]
    result = query_records(records, QueryParams(sort_field="full_name", sort_order="asc"))
    assert _names(result) == ["Ana", "Bob"]


def test_status_filter_keeps_only_matching(record_factory):
    """Test that the status filter selects exactly one status."""
    records = [
        record_factory("Bob", "Pending", "2024-02-01"),
        record_factory("Ana", "Authorized", "2024-01-01"),
    ]
    result = query_records(records, QueryParams(status_filter="Authorized"))
    assert _names(result) == ["Ana"]


def test_empty_search_returns_permutation(sample_records):
    """Test that an empty search with 'all' drops and duplicates nothing."""
    result = query_records(sample_records, QueryParams())
    assert len(result) == len(sample_records)
    assert sorted(r.id for r in result) == sorted(r.id for r in sample_records)


def test_name_sort_is_case_insensitive(sample_records):
    """Test that 'fernanda Souza' sorts between 'Carlos' and 'Marcos'."""
    result = query_records(sample_records, QueryParams(sort_field="full_name"))
    assert _names(result) == [
        "Beatriz Santos",
        "Carlos Eduardo",
        "fernanda Souza",
        "Marcos Vinicius",
        "Ricardo Oliveira",
    ]


def test_date_sort_descending(sample_records):
    result = query_records(sample_records, QueryParams(sort_field="registration_date", sort_order="desc"))
    assert [r.registration_date for r in result] == [
        "2024-03-20",
        "2024-03-12",
        "2024-03-05",
        "2024-02-10",
        "2024-01-15",
    ]


def test_search_is_trimmed_and_case_insensitive(sample_records):
    result = query_records(sample_records, QueryParams(search_text="  RICARDO  "))
    assert _names(result) == ["Ricardo Oliveira"]


def test_search_matches_any_field(sample_records):
    """Test OR matching across name, tax id, registration code and contact."""
    assert _names(query_records(sample_records, QueryParams(search_text="345.678"))) == ["Carlos Eduardo"]
    assert _names(query_records(sample_records, QueryParams(search_text="202400004"))) == ["Beatriz Santos"]
    assert _names(query_records(sample_records, QueryParams(search_text="EMPRESA.COM"))) == ["Beatriz Santos"]


def test_search_does_not_match_notes(record_factory):
    records = [record_factory("Ana", notes="secret keyword")]
    assert query_records(records, QueryParams(search_text="keyword")) == []


def test_search_and_status_combine_with_and(sample_records):
    params = QueryParams(search_text="email.com", status_filter="Authorized")
    assert _names(query_records(sample_records, params)) == ["Ricardo Oliveira"]


def test_no_matches_returns_empty_list(sample_records):
    assert query_records(sample_records, QueryParams(search_text="zzz-no-match")) == []
    assert query_records(sample_records, QueryParams(status_filter="Blocked")) == []


def test_empty_input_returns_empty_list():
    assert query_records([], QueryParams()) == []


def test_unknown_status_can_be_filtered(record_factory):
    records = [record_factory("Ana", "Legacy"), record_factory("Bob", "Pending")]
    assert _names(query_records(records, QueryParams(status_filter="Legacy"))) == ["Ana"]


def test_sort_is_stable_for_equal_keys_in_both_orders(record_factory):
    """Test that ties keep input order for asc and desc."""
    records = [
        record_factory("Same", id="first", registration_date="2024-01-01"),
        record_factory("same", id="second", registration_date="2024-01-01"),
        record_factory("Other", id="third", registration_date="2024-05-01"),
    ]
    for order in ("asc", "desc"):
        by_name = query_records(records, QueryParams(sort_field="full_name", sort_order=order))
        tied = [r.id for r in by_name if r.full_name.lower() == "same"]
        assert tied == ["first", "second"]

        by_date = query_records(records, QueryParams(sort_field="registration_date", sort_order=order))
        tied = [r.id for r in by_date if r.registration_date == "2024-01-01"]
        assert tied == ["first", "second"]


def test_unparsable_date_sorts_as_epoch(record_factory):
    records = [
        record_factory("Later", registration_date="2024-01-01"),
        record_factory("Broken", registration_date="not-a-date"),
        record_factory("Early", registration_date="1969-12-31"),
    ]
    result = query_records(records, QueryParams(sort_field="registration_date"))
    assert _names(result) == ["Early", "Broken", "Later"]


def test_query_is_idempotent(sample_records):
    params = QueryParams(search_text="e", sort_field="registration_date", sort_order="desc")
    once = query_records(sample_records, params)
    assert query_records(once, params) == once


def test_query_does_not_mutate_input(sample_records):
    before = list(sample_records)
    query_records(sample_records, QueryParams(sort_order="desc"))
    assert sample_records == before


def test_filter_keeps_input_order_and_sort_reorders(sample_records):
    params = QueryParams(search_text="a", sort_order="desc")
    filtered = filter_records(sample_records, params)
    assert [r.id for r in filtered] == [r.id for r in sample_records if r in filtered]
    assert _names(sort_records(filtered, params)) == sorted(_names(filtered), key=str.lower, reverse=True)
