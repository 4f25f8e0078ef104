"""Appointment record model with Pydantic v2 validation."""

import logging
from datetime import date, datetime
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, field_validator

from facilitator_stats.dates import parse_day, parse_timestamp
from facilitator_stats.models.category import CategoryKey, normalize_category

logger = logging.getLogger(__name__)

CANCELLED_STATUS = "canceled"

# Facilitator id used when an appointment has no host.
UNASSIGNED_HOST_ID = 0


def _target_id(value: Any) -> Any:
    """Unwrap {"target_id": n} reference items."""
    if isinstance(value, Mapping):
        return value.get("target_id")
    return value


def _coerce_id(value: Any) -> int | None:
    value = _target_id(value)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric reference id: {value!r}")
        return None


class AppointmentRecord(BaseModel):
    """A single appointment as seen by the aggregator.

    Optional fields are explicit: a missing category is NOT_SET, a missing
    host is facilitator 0 ("Unassigned") and a missing date is None.
    """

    id: Union[int, str]
    purpose: CategoryKey = normalize_category(None)
    result: CategoryKey = normalize_category(None)
    status: CategoryKey = normalize_category(None)
    host_id: int = UNASSIGNED_HOST_ID
    badge_ids: list[int] = []
    occurs_at: Optional[datetime] = None

    class Config:
        """Pydantic config."""

        frozen = True

    @field_validator("purpose", "result", "status", mode="before")
    @classmethod
    def normalize_categories(cls, v):
        """Map missing and blank codes to the NOT_SET bucket."""
        return normalize_category(v)

    @field_validator("host_id", mode="before")
    @classmethod
    def default_host(cls, v):
        """Resolve the host reference, falling back to unassigned."""
        host_id = _coerce_id(v)
        return UNASSIGNED_HOST_ID if host_id is None else host_id

    @field_validator("badge_ids", mode="before")
    @classmethod
    def collect_badges(cls, v):
        """Keep badge references in order, duplicates included."""
        if v is None:
            return []
        if isinstance(v, (str, int, Mapping)):
            v = [v]
        badge_ids = []
        for item in v:
            badge_id = _coerce_id(item)
            if badge_id:
                badge_ids.append(badge_id)
        return badge_ids

    @property
    def is_cancelled(self) -> bool:
        """True if the appointment status is canceled."""
        return self.status == CANCELLED_STATUS

    @property
    def day_key(self) -> date | None:
        """Calendar day of the appointment, if it has a date."""
        if self.occurs_at is None:
            return None
        return self.occurs_at.date()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "AppointmentRecord":
        """Map a stored appointment row onto the record contract.

        Supported keys:
            - id: record identifier
            - purpose, result, status: category codes
            - host or host_id: facilitator reference (int or {"target_id": n})
            - badges or badge_ids: list of badge references
            - timerange: precise start (YYYY-MM-DDTHH:MM:SS), preferred
            - date: date-only value (YYYY-MM-DD)
        """
        host = raw.get("host", raw.get("host_id"))
        badges = raw.get("badges", raw.get("badge_ids"))

        occurs_at = parse_timestamp(raw.get("timerange"))
        if occurs_at is None:
            occurs_at = parse_day(raw.get("date"))

        return cls(
            id=raw.get("id", ""),
            purpose=raw.get("purpose"),
            result=raw.get("result"),
            status=raw.get("status"),
            host_id=host,
            badge_ids=badges,
            occurs_at=occurs_at,
        )
