"""Summary models produced by the aggregator."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from facilitator_stats.models.category import CategoryKey, category_code


def _distribution_payload(counts: dict[CategoryKey, int]) -> dict[str, int]:
    return {category_code(key): value for key, value in counts.items()}


class FacilitatorRecord(BaseModel):
    """Per-facilitator statistics."""

    host_id: int
    appointments: int = 0
    badge_sessions: int = 0
    badges: int = 0
    purpose_counts: dict[CategoryKey, int] = Field(default_factory=dict)
    result_counts: dict[CategoryKey, int] = Field(default_factory=dict)
    status_counts: dict[CategoryKey, int] = Field(default_factory=dict)
    badges_breakdown: dict[int, int] = Field(default_factory=dict)
    cancelled: int = 0
    latest: Optional[datetime] = None
    appointment_day_count: int = 0

    class Config:
        """Pydantic config."""

        frozen = True

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "host_id": self.host_id,
            "appointments": self.appointments,
            "badge_sessions": self.badge_sessions,
            "badges": self.badges,
            "appointment_day_count": self.appointment_day_count,
            "cancelled": self.cancelled,
            "latest": self.latest.isoformat() if self.latest else None,
            "purpose_counts": _distribution_payload(self.purpose_counts),
            "result_counts": _distribution_payload(self.result_counts),
            "status_counts": _distribution_payload(self.status_counts),
            "badges_breakdown": {
                str(badge_id): count for badge_id, count in self.badges_breakdown.items()
            },
        }


class Summary(BaseModel):
    """Global totals plus per-facilitator statistics."""

    total_appointments: int = 0
    total_badge_appointments: int = 0  # appointments with at least one badge
    total_badges: int = 0  # sum of badge selections
    cancelled_total: int = 0
    purpose_totals: dict[CategoryKey, int] = Field(default_factory=dict)
    result_totals: dict[CategoryKey, int] = Field(default_factory=dict)
    status_totals: dict[CategoryKey, int] = Field(default_factory=dict)
    badge_ids: frozenset[int] = frozenset()
    facilitators: dict[int, FacilitatorRecord] = Field(default_factory=dict)

    class Config:
        """Pydantic config."""

        frozen = True

    @classmethod
    def empty(cls) -> "Summary":
        """A well-formed summary with nothing counted."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """True if no appointment was counted."""
        return self.total_appointments == 0

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "total_appointments": self.total_appointments,
            "total_badge_appointments": self.total_badge_appointments,
            "total_badges": self.total_badges,
            "cancelled_total": self.cancelled_total,
            "purpose_totals": _distribution_payload(self.purpose_totals),
            "result_totals": _distribution_payload(self.result_totals),
            "status_totals": _distribution_payload(self.status_totals),
            "badge_ids": sorted(self.badge_ids),
            "facilitators": {
                str(host_id): record.to_payload()
                for host_id, record in self.facilitators.items()
            },
        }
