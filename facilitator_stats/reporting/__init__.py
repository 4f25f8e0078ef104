"""Reporting helpers: sorting, distribution formatting and report assembly."""

from facilitator_stats.reporting.distribution import (
    NO_DATA,
    NOT_SET_LABEL,
    format_distribution,
    format_distribution_list,
    format_result_percentages,
    format_top_badges,
    humanize_machine_name,
    result_percentages,
)
from facilitator_stats.reporting.report import (
    DEFINITIONS,
    FacilitatorRow,
    HeaderCell,
    StatsReport,
    build_report,
    build_summary_items,
    build_table_header,
    build_table_rows,
)
from facilitator_stats.reporting.sorting import (
    SortDirection,
    SortKey,
    facilitator_name,
    resolve_sort,
    sort_facilitators,
)

__all__ = [
    "NO_DATA",
    "NOT_SET_LABEL",
    "format_distribution",
    "format_distribution_list",
    "format_result_percentages",
    "format_top_badges",
    "humanize_machine_name",
    "result_percentages",
    "DEFINITIONS",
    "FacilitatorRow",
    "HeaderCell",
    "StatsReport",
    "build_report",
    "build_summary_items",
    "build_table_header",
    "build_table_rows",
    "SortDirection",
    "SortKey",
    "facilitator_name",
    "resolve_sort",
    "sort_facilitators",
]
