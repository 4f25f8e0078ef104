"""Aggregate appointment records into per-facilitator statistics."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable

from facilitator_stats.config import StatsConfig
from facilitator_stats.exceptions import RecordSourceError
from facilitator_stats.models.appointment import CANCELLED_STATUS, AppointmentRecord
from facilitator_stats.models.category import CategoryKey
from facilitator_stats.models.filters import FilterSpec
from facilitator_stats.models.summary import FacilitatorRecord, Summary
from facilitator_stats.sources.base import APPOINTMENT_TYPE, RecordSource

logger = logging.getLogger(__name__)


@dataclass
class _FacilitatorTally:
    """Mutable counters for one facilitator while a summary is built."""

    host_id: int
    appointments: int = 0
    badge_sessions: int = 0
    badges: int = 0
    purpose_counts: dict[CategoryKey, int] = field(default_factory=lambda: defaultdict(int))
    result_counts: dict[CategoryKey, int] = field(default_factory=lambda: defaultdict(int))
    status_counts: dict[CategoryKey, int] = field(default_factory=lambda: defaultdict(int))
    badges_breakdown: dict[int, int] = field(default_factory=lambda: defaultdict(int))
    cancelled: int = 0
    latest: datetime | None = None
    days: set[date] = field(default_factory=set)

    def finalize(self) -> FacilitatorRecord:
        """Freeze the counters; the day set collapses into a count."""
        return FacilitatorRecord(
            host_id=self.host_id,
            appointments=self.appointments,
            badge_sessions=self.badge_sessions,
            badges=self.badges,
            purpose_counts=dict(self.purpose_counts),
            result_counts=dict(self.result_counts),
            status_counts=dict(self.status_counts),
            badges_breakdown=dict(self.badges_breakdown),
            cancelled=self.cancelled,
            latest=self.latest,
            appointment_day_count=len(self.days),
        )


def summarize_records(
    records: Iterable[AppointmentRecord],
    filters: FilterSpec | None = None,
    apply_date_filter: bool = True,
) -> Summary:
    """Fold appointment records into a Summary in a single pass.

    Args:
        records: Appointment records to aggregate.
        filters: Filter specification (defaults to no filters, cancelled excluded).
        apply_date_filter: Apply the date range here. Pass False only when the
            records were already filtered by date at the source.

    Returns:
        Summary with global totals and per-facilitator records.
    """
    if filters is None:
        filters = FilterSpec()
    check_dates = apply_date_filter and filters.has_date_bounds

    total_appointments = 0
    total_badge_appointments = 0
    total_badges = 0
    cancelled_total = 0
    purpose_totals: dict[CategoryKey, int] = defaultdict(int)
    result_totals: dict[CategoryKey, int] = defaultdict(int)
    status_totals: dict[CategoryKey, int] = defaultdict(int)
    badge_ids: set[int] = set()
    tallies: dict[int, _FacilitatorTally] = {}

    for record in records:
        if check_dates and not filters.contains(record.occurs_at):
            continue
        if not filters.matches_purpose(record.purpose):
            continue
        if not filters.include_cancelled and record.is_cancelled:
            continue

        tally = tallies.get(record.host_id)
        if tally is None:
            tally = tallies[record.host_id] = _FacilitatorTally(host_id=record.host_id)

        total_appointments += 1
        tally.appointments += 1

        purpose_totals[record.purpose] += 1
        tally.purpose_counts[record.purpose] += 1

        result_totals[record.result] += 1
        tally.result_counts[record.result] += 1

        status_totals[record.status] += 1
        tally.status_counts[record.status] += 1
        if record.status == CANCELLED_STATUS:
            cancelled_total += 1
            tally.cancelled += 1

        if record.badge_ids:
            total_badge_appointments += 1
            tally.badge_sessions += 1
        total_badges += len(record.badge_ids)
        tally.badges += len(record.badge_ids)
        for badge_id in record.badge_ids:
            badge_ids.add(badge_id)
            tally.badges_breakdown[badge_id] += 1

        if record.occurs_at is not None:
            tally.days.add(record.day_key)
            # Strictly greater: the first appointment seen at the latest moment wins.
            if tally.latest is None or record.occurs_at > tally.latest:
                tally.latest = record.occurs_at

    return Summary(
        total_appointments=total_appointments,
        total_badge_appointments=total_badge_appointments,
        total_badges=total_badges,
        cancelled_total=cancelled_total,
        purpose_totals=dict(purpose_totals),
        result_totals=dict(result_totals),
        status_totals=dict(status_totals),
        badge_ids=frozenset(badge_ids),
        facilitators={host_id: tally.finalize() for host_id, tally in tallies.items()},
    )


class AppointmentStats:
    """Builds appointment summaries from a record source."""

    def __init__(self, source: RecordSource, config: StatsConfig | None = None):
        """
        Initialize the aggregator.

        Args:
            source: Record source to query (dependency injection)
            config: Optional configuration (defaults to StatsConfig())
        """
        self.source = source
        self.config = config or StatsConfig()

    def summarize(self, filters: FilterSpec | None = None) -> Summary:
        """Build aggregated statistics for the appointments matching filters.

        Filters are pushed into the source query where it can honour them.
        If the source cannot filter by date, the date range is applied in
        memory. A failing source yields an empty summary.
        """
        if filters is None:
            filters = FilterSpec()

        try:
            native_dates = self.source.supports_date_filter
            if filters.has_date_bounds and not native_dates:
                logger.warning(
                    "Timeline filters requested but appointment date field not found; "
                    "applying filters in-memory."
                )

            ids = self.source.query(
                content_type=APPOINTMENT_TYPE,
                published=True,
                start=filters.start if native_dates else None,
                end=filters.end if native_dates else None,
                purpose=filters.purpose,
                exclude_status=None if filters.include_cancelled else CANCELLED_STATUS,
            )
            if not ids:
                return Summary.empty()
            records = self.source.load_many(ids)
        except RecordSourceError as e:
            logger.error(f"Appointment stats query failed: {e}")
            return Summary.empty()

        return summarize_records(records, filters, apply_date_filter=not native_dates)
