"""In-memory record source."""

import logging
from datetime import datetime
from typing import Hashable, Iterable, List, Sequence

from facilitator_stats.dates import within_bounds
from facilitator_stats.exceptions import RecordSourceError
from facilitator_stats.models.appointment import AppointmentRecord
from facilitator_stats.models.category import CategoryKey
from facilitator_stats.sources.base import APPOINTMENT_TYPE

logger = logging.getLogger(__name__)


class InMemoryRecordSource:
    """Record source over a list of already-mapped appointments.

    Date filtering follows the same policy as the aggregator: an
    appointment without a date is never excluded by a date bound.
    """

    def __init__(
        self,
        records: Iterable[AppointmentRecord],
        supports_date_filter: bool = True,
        unpublished_ids: Iterable[Hashable] = (),
    ):
        """
        Initialize source.

        Args:
            records: Appointment records, in storage order.
            supports_date_filter: Whether query() honours start/end.
            unpublished_ids: Ids of records hidden from published queries.
        """
        self._records = {record.id: record for record in records}
        self._unpublished = set(unpublished_ids)
        self.supports_date_filter = supports_date_filter

    def query(
        self,
        content_type: str = APPOINTMENT_TYPE,
        published: bool = True,
        start: datetime | None = None,
        end: datetime | None = None,
        purpose: CategoryKey | None = None,
        exclude_status: str | None = None,
    ) -> List[Hashable]:
        """Return ids of matching records in storage order."""
        if content_type != APPOINTMENT_TYPE:
            return []

        if not self.supports_date_filter:
            # Bounds are ignored; the caller filters in memory.
            start = end = None

        ids = []
        for record_id, record in self._records.items():
            if published and record_id in self._unpublished:
                continue
            if not within_bounds(record.occurs_at, start, end):
                continue
            if purpose is not None and record.purpose != purpose:
                continue
            if exclude_status is not None and record.status == exclude_status:
                continue
            ids.append(record_id)
        return ids

    def load_many(self, ids: Sequence[Hashable]) -> List[AppointmentRecord]:
        """Load records by id, in the order given."""
        try:
            return [self._records[record_id] for record_id in ids]
        except KeyError as e:
            raise RecordSourceError(f"Unknown appointment id: {e.args[0]}") from e
