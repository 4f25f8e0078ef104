"""Deterministic ordering of facilitator rows."""

from enum import Enum
from functools import cmp_to_key
from typing import Callable, Iterable, Mapping

from facilitator_stats.labels import UNASSIGNED_LABEL
from facilitator_stats.models.appointment import UNASSIGNED_HOST_ID
from facilitator_stats.models.summary import FacilitatorRecord


class SortKey(str, Enum):
    """Sortable facilitator columns."""

    NAME = "name"
    APPOINTMENTS = "appointments"
    BADGE_SESSIONS = "badge_sessions"
    BADGES = "badges"
    APPOINTMENT_DAY_COUNT = "appointment_day_count"
    CANCELLED = "cancelled"
    LATEST = "latest"


class SortDirection(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"

    @property
    def multiplier(self) -> int:
        return 1 if self is SortDirection.ASC else -1


DEFAULT_SORT_KEY = SortKey.APPOINTMENTS
DEFAULT_SORT_DIRECTION = SortDirection.DESC

_NUMERIC_KEYS = (
    SortKey.APPOINTMENTS,
    SortKey.BADGE_SESSIONS,
    SortKey.BADGES,
    SortKey.APPOINTMENT_DAY_COUNT,
    SortKey.CANCELLED,
)


def resolve_sort(
    sort: str | None,
    order: str | None,
    default_sort: SortKey | str = DEFAULT_SORT_KEY,
    default_order: SortDirection | str = DEFAULT_SORT_DIRECTION,
) -> tuple[SortKey, SortDirection]:
    """Validate requested sort parameters.

    Unknown or missing keys fall back to the defaults (appointments,
    descending). Order matching is case-insensitive.
    """
    try:
        fallback_key = SortKey(default_sort)
    except ValueError:
        fallback_key = DEFAULT_SORT_KEY
    try:
        fallback_direction = SortDirection(str(default_order).lower())
    except ValueError:
        fallback_direction = DEFAULT_SORT_DIRECTION

    try:
        sort_key = SortKey(sort) if sort is not None else fallback_key
    except ValueError:
        sort_key = fallback_key

    try:
        direction = SortDirection(order.lower()) if order is not None else fallback_direction
    except ValueError:
        direction = DEFAULT_SORT_DIRECTION

    return sort_key, direction


def facilitator_name(host_id: int, user_labels: Mapping[int, str]) -> str:
    """Display name for a facilitator row."""
    if host_id == UNASSIGNED_HOST_ID:
        return UNASSIGNED_LABEL
    return user_labels.get(host_id, f"User {host_id}")


def _compare(a, b) -> int:
    return (a > b) - (a < b)


def _compare_latest(a: FacilitatorRecord, b: FacilitatorRecord) -> int:
    # A missing latest date sorts as the oldest possible value.
    if a.latest is None or b.latest is None:
        return _compare(a.latest is not None, b.latest is not None)
    return _compare(a.latest, b.latest)


def sort_facilitators(
    facilitators: Iterable[FacilitatorRecord],
    name_of: Callable[[int], str],
    sort_key: SortKey = DEFAULT_SORT_KEY,
    direction: SortDirection = DEFAULT_SORT_DIRECTION,
) -> list[FacilitatorRecord]:
    """Order facilitators by a column.

    The direction only applies to the requested column. Ties then fall
    back to fewer appointments first, then to the host id compared as a
    string, so every input has a single well-defined order.

    Args:
        facilitators: Facilitator records to order.
        name_of: Resolves a host id to its display name.
        sort_key: Column to sort by.
        direction: Ascending or descending.

    Returns:
        New list in display order.
    """
    names: dict[int, str] = {}

    def name_key(record: FacilitatorRecord) -> str:
        if record.host_id not in names:
            names[record.host_id] = name_of(record.host_id).lower()
        return names[record.host_id]

    def primary(a: FacilitatorRecord, b: FacilitatorRecord) -> int:
        if sort_key is SortKey.NAME:
            return _compare(name_key(a), name_key(b))
        if sort_key is SortKey.LATEST:
            return _compare_latest(a, b)
        if sort_key in _NUMERIC_KEYS:
            return _compare(getattr(a, sort_key.value), getattr(b, sort_key.value))
        return 0

    def comparator(a: FacilitatorRecord, b: FacilitatorRecord) -> int:
        comparison = direction.multiplier * primary(a, b)
        if comparison == 0 and sort_key is not SortKey.APPOINTMENTS:
            comparison = _compare(a.appointments, b.appointments)
        if comparison == 0:
            comparison = _compare(str(a.host_id), str(b.host_id))
        return comparison

    return sorted(facilitators, key=cmp_to_key(comparator))
