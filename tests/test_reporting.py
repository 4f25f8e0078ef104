"""Tests for sorting, distribution formatting and report assembly."""

from datetime import datetime

import pytest

from facilitator_stats.aggregation import summarize_records
from facilitator_stats.config import StatsConfig
from facilitator_stats.models import NOT_SET, FacilitatorRecord, FilterSpec, Summary
from facilitator_stats.reporting import (
    NO_DATA,
    SortDirection,
    SortKey,
    build_report,
    build_summary_items,
    build_table_header,
    facilitator_name,
    format_distribution,
    format_distribution_list,
    format_result_percentages,
    format_top_badges,
    humanize_machine_name,
    resolve_sort,
    result_percentages,
    sort_facilitators,
)


def _ids(records):
    return [record.host_id for record in records]


@pytest.fixture
def facilitators():
    return [
        FacilitatorRecord(host_id=1, appointments=5, badges=2, cancelled=1,
                          latest=datetime(2025, 1, 10)),
        FacilitatorRecord(host_id=2, appointments=3, badges=2, cancelled=0,
                          latest=datetime(2025, 3, 1)),
        FacilitatorRecord(host_id=0, appointments=3, badges=7, cancelled=0),
        FacilitatorRecord(host_id=10, appointments=1, badges=0, cancelled=2,
                          latest=datetime(2025, 2, 1)),
    ]


NAMES = {1: "bob", 2: "Alice", 10: "carol"}


def name_of(host_id):
    return facilitator_name(host_id, NAMES)


# Distribution formatting

def test_humanize_machine_name():
    """Test separators, whitespace and capitalization."""
    assert humanize_machine_name("no_show") == "No Show"
    assert humanize_machine_name("follow-up  call") == "Follow Up Call"
    assert humanize_machine_name("intro") == "Intro"
    assert humanize_machine_name("") == "Not set"
    assert humanize_machine_name(None) == "Not set"


def test_format_distribution_orders_by_count():
    """Test descending counts with stable ties."""
    counts = {"b": 2, "a": 2, "c": 5}
    assert format_distribution(counts) == "5 C, 2 B, 2 A"


def test_format_distribution_labels():
    """Test label lookup, humanized fallback and the unset bucket."""
    counts = {"intro": 3, NOT_SET: 1, "walk_in": 2}
    labels = {"intro": "Introduction", "_none": "Should not be used"}
    assert format_distribution(counts, labels) == "3 Introduction, 2 Walk In, 1 Not set"


def test_format_distribution_no_data():
    """Test empty and all-zero input."""
    assert format_distribution({}) == NO_DATA
    assert format_distribution(None) == NO_DATA
    assert format_distribution({"intro": 0}) == NO_DATA


def test_format_distribution_list():
    """Test both list item shapes."""
    counts = {"completed": 1, "canceled": 4}
    assert format_distribution_list(counts) == ["Canceled (4)", "Completed (1)"]
    assert format_distribution_list(counts, {"completed": "Done"}, include_value=True) == [
        "4 Canceled",
        "1 Done",
    ]
    assert format_distribution_list({}) == [NO_DATA]


def test_result_percentages_exclude_not_set():
    """Test the unset bucket is left out of the list and the base."""
    counts = {"A": 3, "B": 1, NOT_SET: 6}
    assert result_percentages(counts) == [("A", 75.0, 3), ("B", 25.0, 1)]
    assert format_result_percentages(counts) == ["75.0% (3) A", "25.0% (1) B"]


def test_result_percentages_rounding():
    """Test one-decimal rounding."""
    counts = {"passed": 2, "failed": 1}
    assert format_result_percentages(counts, {"passed": "Passed"}) == [
        "66.7% (2) Passed",
        "33.3% (1) Failed",
    ]


def test_result_percentages_only_not_set():
    """Test no recorded results gives the no-data marker."""
    assert format_result_percentages({NOT_SET: 4}) == [NO_DATA]
    assert format_result_percentages({}) == [NO_DATA]


def test_format_top_badges():
    """Test top badges with labels and the generic fallback."""
    counts = {10: 1, 11: 4, 12: 2, 13: 3}
    labels = {11: "Woodshop"}
    assert format_top_badges(counts, labels) == ["4 Woodshop", "3 Badge 13", "2 Badge 12"]
    assert len(format_top_badges(counts, labels, limit=None)) == 4
    assert format_top_badges({}) == [NO_DATA]


# Sorting

def test_resolve_sort_defaults():
    """Test unknown or missing parameters fall back to appointments desc."""
    assert resolve_sort(None, None) == (SortKey.APPOINTMENTS, SortDirection.DESC)
    assert resolve_sort("bogus", "sideways") == (SortKey.APPOINTMENTS, SortDirection.DESC)
    assert resolve_sort("latest", "ASC") == (SortKey.LATEST, SortDirection.ASC)
    assert resolve_sort(None, None, "name", "asc") == (SortKey.NAME, SortDirection.ASC)


def test_facilitator_name():
    """Test unassigned, resolved and generic names."""
    assert facilitator_name(0, NAMES) == "Unassigned"
    assert facilitator_name(2, NAMES) == "Alice"
    assert facilitator_name(99, NAMES) == "User 99"


def test_sort_by_appointments(facilitators):
    """Test the default sort with host id as the final tie-break."""
    ordered = sort_facilitators(facilitators, name_of, SortKey.APPOINTMENTS, SortDirection.DESC)
    assert _ids(ordered) == [1, 0, 2, 10]

    ordered = sort_facilitators(facilitators, name_of, SortKey.APPOINTMENTS, SortDirection.ASC)
    assert _ids(ordered) == [10, 0, 2, 1]


def test_sort_by_name_is_case_insensitive(facilitators):
    """Test names compare case-insensitively, Unassigned included."""
    ordered = sort_facilitators(facilitators, name_of, SortKey.NAME, SortDirection.ASC)
    assert _ids(ordered) == [2, 1, 10, 0]


def test_sort_tie_break_is_not_reversed(facilitators):
    """Test ties fall back to fewer appointments first in both directions."""
    desc = sort_facilitators(facilitators, name_of, SortKey.BADGES, SortDirection.DESC)
    asc = sort_facilitators(facilitators, name_of, SortKey.BADGES, SortDirection.ASC)

    # Hosts 1 and 2 tie on badges; host 2 has fewer appointments.
    assert _ids(desc) == [0, 2, 1, 10]
    assert _ids(asc) == [10, 2, 1, 0]


def test_sort_by_latest_missing_is_oldest(facilitators):
    """Test a missing latest date sorts as the oldest value."""
    desc = sort_facilitators(facilitators, name_of, SortKey.LATEST, SortDirection.DESC)
    assert _ids(desc) == [2, 10, 1, 0]

    asc = sort_facilitators(facilitators, name_of, SortKey.LATEST, SortDirection.ASC)
    assert _ids(asc) == [0, 1, 10, 2]


def test_sort_identical_stats_uses_host_id_string():
    """Test identical facilitators still get a total order."""
    records = [FacilitatorRecord(host_id=host_id, appointments=1) for host_id in (9, 10, 2)]
    for key in SortKey:
        for direction in SortDirection:
            ordered = sort_facilitators(records, lambda host_id: "Same", key, direction)
            assert _ids(ordered) == [10, 2, 9]


def test_sort_direction_reverses_primary_order(facilitators):
    """Test reversing direction reverses distinct primary values exactly."""
    for key in (SortKey.CANCELLED, SortKey.APPOINTMENT_DAY_COUNT, SortKey.BADGE_SESSIONS):
        desc = sort_facilitators(facilitators, name_of, key, SortDirection.DESC)
        asc = sort_facilitators(facilitators, name_of, key, SortDirection.ASC)
        values_desc = [getattr(r, key.value) for r in desc]
        values_asc = [getattr(r, key.value) for r in asc]
        assert values_desc == sorted(values_desc, reverse=True)
        assert values_asc == list(reversed(values_desc))


# Report assembly

def test_build_summary_items(scenario_records, catalog):
    """Test the summary lines."""
    summary = summarize_records(scenario_records, FilterSpec(include_cancelled=True))
    items = build_summary_items(
        summary,
        catalog.resolve_labels("purpose"),
        catalog.resolve_labels("result"),
        catalog.resolve_labels("status"),
    )
    assert items == [
        "Appointments: 3",
        "Badge sessions: 2",
        "Badges selected: 3",
        "Cancelled appointments: 1",
        "Purpose mix: 2 Introduction, 1 Follow-up",
        f"Result mix (set): {NO_DATA}",
        "Status mix: 2 completed, 1 canceled",
    ]


def test_build_table_header_links():
    """Test sort links flip the active column and keep filters."""
    base_query = {"start": "2025-01-01", "end": "", "purpose": "intro", "include_cancelled": 1}
    header = build_table_header(base_query, SortKey.APPOINTMENTS, SortDirection.DESC)
    cells = {cell.key: cell for cell in header}

    assert [cell.key for cell in header][:2] == ["name", "appointments"]
    assert cells["appointments"].title == "Appointments ▼"
    assert cells["appointments"].query["order"] == "asc"
    assert cells["name"].title == "Facilitator"
    assert cells["name"].query == {**base_query, "sort": "name", "order": "asc"}
    assert cells["latest"].sortable is True
    assert cells["purpose"].sortable is False
    assert cells["purpose"].href is None
    assert cells["badges"].href == (
        "?start=2025-01-01&end=&purpose=intro&include_cancelled=1&sort=badges&order=asc"
    )

    header = build_table_header(base_query, SortKey.APPOINTMENTS, SortDirection.ASC)
    cells = {cell.key: cell for cell in header}
    assert cells["appointments"].title == "Appointments ▲"
    assert cells["appointments"].query["order"] == "desc"


def test_build_report(scenario_records, catalog):
    """Test the assembled report for the end-to-end scenario."""
    filters = FilterSpec(include_cancelled=True)
    summary = summarize_records(scenario_records, filters)

    report = build_report(summary, filters, catalog, sort="name", order="asc")

    assert report.sort is SortKey.NAME
    assert report.order is SortDirection.ASC
    assert [row.name for row in report.rows] == ["Ada", "Grace H."]
    assert report.empty_message is None

    ada = report.rows[0]
    assert ada.appointments == 2
    assert ada.badges == 2
    assert ada.cancelled == 1
    assert ada.appointment_day_count == 2
    assert ada.purpose == ["Introduction (2)"]
    assert ada.status == ["1 completed", "1 canceled"]
    assert ada.result == [NO_DATA]
    assert ada.top_badges == ["1 Laser cutter", "1 Woodshop"]
    assert ada.latest == "2025-01-07 14:30"

    payload = report.to_payload()
    assert payload["filters"]["include_cancelled"] == 1
    assert payload["rows"][1]["name"] == "Grace H."
    assert payload["summary"]["total_appointments"] == 3


def test_build_report_empty(catalog):
    """Test an empty summary still produces a usable report."""
    report = build_report(Summary.empty(), FilterSpec(), catalog)
    assert report.rows == []
    assert report.empty_message == "No appointments found for the selected filters."
    assert report.summary_items[0] == "Appointments: 0"
    assert len(report.header) == 11


def test_build_report_top_badges_limit(catalog, scenario_records):
    """Test the configured badge limit."""
    filters = FilterSpec()
    summary = summarize_records(scenario_records, filters)
    report = build_report(summary, filters, catalog, config=StatsConfig(top_badges_limit=1))
    ada = next(row for row in report.rows if row.host_id == 1)
    assert ada.top_badges == ["1 Laser cutter"]
