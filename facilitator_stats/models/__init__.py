"""Pydantic models for facilitator statistics."""

from facilitator_stats.models.appointment import (
    CANCELLED_STATUS,
    UNASSIGNED_HOST_ID,
    AppointmentRecord,
)
from facilitator_stats.models.category import (
    NOT_SET,
    NOT_SET_CODE,
    CategoryKey,
    Unset,
    category_code,
    is_unset,
    normalize_category,
    parse_category_code,
)
from facilitator_stats.models.filters import FilterSpec, build_filters
from facilitator_stats.models.summary import FacilitatorRecord, Summary

__all__ = [
    "AppointmentRecord",
    "CANCELLED_STATUS",
    "UNASSIGNED_HOST_ID",
    "CategoryKey",
    "NOT_SET",
    "NOT_SET_CODE",
    "Unset",
    "category_code",
    "is_unset",
    "normalize_category",
    "parse_category_code",
    "FilterSpec",
    "build_filters",
    "FacilitatorRecord",
    "Summary",
]
