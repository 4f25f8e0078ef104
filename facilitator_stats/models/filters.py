"""Filter specification for appointment statistics."""

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, field_validator, model_validator

from facilitator_stats.dates import DAY_FORMAT, end_of_day, format_day, start_of_day, within_bounds
from facilitator_stats.models.category import (
    CategoryKey,
    category_code,
    parse_category_code,
)

logger = logging.getLogger(__name__)

ALL_PURPOSES = "all"

_FALSE_FLAGS = ("", "0", "false", "off", "no")


class FilterSpec(BaseModel):
    """Which appointments a summary covers.

    Both date bounds are inclusive. A start after the end drops the end
    bound, so a reported range never ends before it starts.
    """

    start: Optional[datetime] = None
    end: Optional[datetime] = None
    purpose: Optional[CategoryKey] = None
    include_cancelled: bool = False

    class Config:
        """Pydantic config."""

        frozen = True

    @model_validator(mode="after")
    def drop_inverted_end(self):
        """Ignore the end bound when it falls before the start bound."""
        if self.start is not None and self.end is not None and self.start > self.end:
            # Frozen model: bypass the assignment guard while validating.
            object.__setattr__(self, "end", None)
        return self

    @field_validator("purpose", mode="before")
    @classmethod
    def normalize_purpose(cls, v):
        """Treat "all" and blank purposes as no filter."""
        if v is None:
            return None
        if isinstance(v, str):
            if v.strip() in ("", ALL_PURPOSES):
                return None
            return parse_category_code(v)
        return v

    @property
    def has_date_bounds(self) -> bool:
        """True if either date bound is set."""
        return self.start is not None or self.end is not None

    def contains(self, moment: datetime | None) -> bool:
        """Date-range check; appointments without a date always pass."""
        return within_bounds(moment, self.start, self.end)

    def matches_purpose(self, purpose: CategoryKey) -> bool:
        """True if no purpose filter is set or the purpose equals it."""
        return self.purpose is None or purpose == self.purpose

    def to_query(self) -> dict[str, str | int]:
        """Echo the active filters as query parameters."""
        return {
            "start": format_day(self.start),
            "end": format_day(self.end),
            "purpose": ALL_PURPOSES if self.purpose is None else category_code(self.purpose),
            "include_cancelled": 1 if self.include_cancelled else 0,
        }


def parse_filter_day(value: str | None, *, end: bool = False) -> datetime | None:
    """Parse a YYYY-MM-DD filter bound.

    Args:
        value: Raw input from a request or the command line.
        end: If True, the bound closes at 23:59:59 instead of 00:00:00.

    Returns:
        The bound, or None when the value is missing or invalid.
    """
    if value is None or not str(value).strip():
        return None
    try:
        day = datetime.strptime(str(value).strip(), DAY_FORMAT).date()
    except ValueError:
        logger.warning(f"Invalid date filter provided: {value}")
        return None
    return end_of_day(day) if end else start_of_day(day)


def parse_flag(value: object) -> bool:
    """Interpret a checkbox-style query flag."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in _FALSE_FLAGS


def build_filters(params: Mapping[str, Any]) -> FilterSpec:
    """Build a FilterSpec from request or CLI parameters.

    Recognized keys: start, end, purpose, include_cancelled.
    """
    return FilterSpec(
        start=parse_filter_day(params.get("start")),
        end=parse_filter_day(params.get("end"), end=True),
        purpose=params.get("purpose"),
        include_cancelled=parse_flag(params.get("include_cancelled")),
    )
