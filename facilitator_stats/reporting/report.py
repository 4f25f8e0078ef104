"""Assemble the facilitator statistics report.

The report is a plain presentation model: summary lines, the table header
with sort links and one row per facilitator. Renderers (Rich console,
JSON over HTTP) only decide how to draw it.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping
from urllib.parse import urlencode

from facilitator_stats.config import StatsConfig
from facilitator_stats.labels import LabelResolver
from facilitator_stats.models.filters import FilterSpec
from facilitator_stats.models.summary import FacilitatorRecord, Summary
from facilitator_stats.reporting.distribution import (
    NO_DATA,
    format_distribution,
    format_distribution_list,
    format_result_percentages,
    format_top_badges,
)
from facilitator_stats.reporting.sorting import (
    SortDirection,
    SortKey,
    facilitator_name,
    resolve_sort,
    sort_facilitators,
)

EMPTY_MESSAGE = "No appointments found for the selected filters."

LATEST_FORMAT = "%Y-%m-%d %H:%M"

DEFINITIONS = [
    "Badge sessions: Appointments where at least one badge was selected.",
    "Badges selected: Total number of badge selections across those appointments "
    "(one appointment can add several).",
    "Active days: Distinct calendar days with at least one appointment inside the "
    "current filters.",
    "Result mix (set): Percentages ignore appointments without a recorded result; "
    "counts are shown in parentheses.",
    "Cancelled: Appointments whose status is canceled.",
]

COLUMNS = {
    "name": "Facilitator",
    "appointments": "Appointments",
    "badge_sessions": "Badge sessions",
    "badges": "Badges selected",
    "appointment_day_count": "Active days",
    "cancelled": "Cancelled",
    "purpose": "Purpose mix",
    "result": "Result mix",
    "status": "Status mix",
    "top_badges": "Top badges",
    "latest": "Latest appointment",
}

SORT_INDICATORS = {SortDirection.ASC: " ▲", SortDirection.DESC: " ▼"}


@dataclass
class HeaderCell:
    """A table column heading, with a sort link for sortable columns."""

    key: str
    label: str
    sortable: bool = False
    indicator: str = ""
    query: dict[str, Any] | None = None

    @property
    def title(self) -> str:
        return f"{self.label}{self.indicator}"

    @property
    def href(self) -> str | None:
        if self.query is None:
            return None
        return "?" + urlencode(self.query)


@dataclass
class FacilitatorRow:
    """Formatted table row for one facilitator."""

    host_id: int
    name: str
    appointments: int
    badge_sessions: int
    badges: int
    appointment_day_count: int
    cancelled: int
    purpose: list[str]
    result: list[str]
    status: list[str]
    top_badges: list[str]
    latest: str


@dataclass
class StatsReport:
    """Everything needed to display the statistics page."""

    filters: dict[str, Any]
    sort: SortKey
    order: SortDirection
    summary: Summary
    summary_items: list[str] = field(default_factory=list)
    definitions: list[str] = field(default_factory=lambda: list(DEFINITIONS))
    header: list[HeaderCell] = field(default_factory=list)
    rows: list[FacilitatorRow] = field(default_factory=list)

    @property
    def empty_message(self) -> str | None:
        return None if self.rows else EMPTY_MESSAGE

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "filters": self.filters,
            "sort": self.sort.value,
            "order": self.order.value,
            "summary_items": self.summary_items,
            "definitions": self.definitions,
            "header": [
                {
                    "key": cell.key,
                    "title": cell.title,
                    "sortable": cell.sortable,
                    "href": cell.href,
                }
                for cell in self.header
            ],
            "rows": [asdict(row) for row in self.rows],
            "empty": self.empty_message,
            "summary": self.summary.to_payload(),
        }


def format_latest(latest: datetime | None) -> str:
    """Format the most recent appointment, or the no-data marker."""
    if latest is None:
        return NO_DATA
    return latest.strftime(LATEST_FORMAT)


def build_summary_items(
    summary: Summary,
    purpose_labels: Mapping[str, str] | None = None,
    result_labels: Mapping[str, str] | None = None,
    status_labels: Mapping[str, str] | None = None,
) -> list[str]:
    """Global totals and mixes shown above the table."""
    items = [
        f"Appointments: {summary.total_appointments}",
        f"Badge sessions: {summary.total_badge_appointments}",
        f"Badges selected: {summary.total_badges}",
        f"Cancelled appointments: {summary.cancelled_total}",
    ]
    if summary.purpose_totals:
        items.append(f"Purpose mix: {format_distribution(summary.purpose_totals, purpose_labels)}")
    if summary.result_totals:
        result_mix = ", ".join(format_result_percentages(summary.result_totals, result_labels))
        items.append(f"Result mix (set): {result_mix}")
    if summary.status_totals:
        items.append(f"Status mix: {format_distribution(summary.status_totals, status_labels)}")
    return items


def build_sort_query(
    base_query: Mapping[str, Any],
    column: SortKey,
    current_sort: SortKey,
    current_order: SortDirection,
) -> dict[str, Any]:
    """Query for a column's sort link, preserving the active filters.

    Clicking the active ascending column switches to descending; any other
    click starts ascending.
    """
    if column is current_sort and current_order is SortDirection.ASC:
        new_order = SortDirection.DESC
    else:
        new_order = SortDirection.ASC
    query = dict(base_query)
    query["sort"] = column.value
    query["order"] = new_order.value
    return query


def build_table_header(
    base_query: Mapping[str, Any],
    sort_key: SortKey,
    direction: SortDirection,
) -> list[HeaderCell]:
    """Column headings with sort links for the sortable columns."""
    sortable = {key.value: key for key in SortKey}
    header = []
    for key, label in COLUMNS.items():
        column = sortable.get(key)
        if column is None:
            header.append(HeaderCell(key=key, label=label))
            continue
        header.append(
            HeaderCell(
                key=key,
                label=label,
                sortable=True,
                indicator=SORT_INDICATORS[direction] if column is sort_key else "",
                query=build_sort_query(base_query, column, sort_key, direction),
            )
        )
    return header


def build_table_rows(
    facilitators: Iterable[FacilitatorRecord],
    user_labels: Mapping[int, str],
    badge_labels: Mapping[int, str],
    purpose_labels: Mapping[str, str] | None = None,
    result_labels: Mapping[str, str] | None = None,
    status_labels: Mapping[str, str] | None = None,
    top_badges_limit: int | None = 3,
) -> list[FacilitatorRow]:
    """Format facilitator records as table rows, keeping their order."""
    rows = []
    for record in facilitators:
        rows.append(
            FacilitatorRow(
                host_id=record.host_id,
                name=facilitator_name(record.host_id, user_labels),
                appointments=record.appointments,
                badge_sessions=record.badge_sessions,
                badges=record.badges,
                appointment_day_count=record.appointment_day_count,
                cancelled=record.cancelled,
                purpose=format_distribution_list(record.purpose_counts, purpose_labels),
                result=format_result_percentages(record.result_counts, result_labels),
                status=format_distribution_list(
                    record.status_counts, status_labels, include_value=True
                ),
                top_badges=format_top_badges(
                    record.badges_breakdown, badge_labels, limit=top_badges_limit
                ),
                latest=format_latest(record.latest),
            )
        )
    return rows


def build_report(
    summary: Summary,
    filters: FilterSpec,
    resolver: LabelResolver,
    sort: str | None = None,
    order: str | None = None,
    config: StatsConfig | None = None,
) -> StatsReport:
    """Build the full report for a summary.

    Args:
        summary: Aggregated statistics.
        filters: Filters the summary was built with (echoed into sort links).
        resolver: Label lookups for categories, facilitators and badges.
        sort: Requested sort column (validated, defaults to appointments).
        order: Requested direction (validated, defaults to desc).
        config: Optional configuration for report defaults.
    """
    if config is None:
        config = StatsConfig()

    sort_key, direction = resolve_sort(sort, order, config.default_sort, config.default_order)

    purpose_labels = resolver.resolve_labels("purpose")
    result_labels = resolver.resolve_labels("result")
    status_labels = resolver.resolve_labels("status")
    user_labels = {
        host_id: resolver.resolve_user_label(host_id) for host_id in summary.facilitators
    }
    badge_labels = {
        badge_id: resolver.resolve_badge_label(badge_id)
        for badge_id in sorted(summary.badge_ids)
    }

    ordered = sort_facilitators(
        summary.facilitators.values(),
        lambda host_id: facilitator_name(host_id, user_labels),
        sort_key,
        direction,
    )
    filters_query = filters.to_query()

    return StatsReport(
        filters=filters_query,
        sort=sort_key,
        order=direction,
        summary=summary,
        summary_items=build_summary_items(summary, purpose_labels, result_labels, status_labels),
        header=build_table_header(filters_query, sort_key, direction),
        rows=build_table_rows(
            ordered,
            user_labels,
            badge_labels,
            purpose_labels,
            result_labels,
            status_labels,
            top_badges_limit=config.top_badges_limit,
        ),
    )
