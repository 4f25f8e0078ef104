"""Base classes for appointment record sources."""

from datetime import datetime
from pathlib import Path
from typing import Dict, Hashable, List, Protocol, Sequence, Type

from facilitator_stats.exceptions import UnsupportedFormatError
from facilitator_stats.models.appointment import AppointmentRecord
from facilitator_stats.models.category import CategoryKey

APPOINTMENT_TYPE = "appointment"


class RecordSource(Protocol):
    """Protocol for appointment record sources.

    A source reports whether it can filter by date itself. When it cannot,
    the aggregator applies the date range in memory instead.
    """

    supports_date_filter: bool

    def query(
        self,
        content_type: str = APPOINTMENT_TYPE,
        published: bool = True,
        start: datetime | None = None,
        end: datetime | None = None,
        purpose: CategoryKey | None = None,
        exclude_status: str | None = None,
    ) -> List[Hashable]:
        """Return ids of matching records."""
        ...

    def load_many(self, ids: Sequence[Hashable]) -> List[AppointmentRecord]:
        """Load records by id, in the order given."""
        ...


class SourceRegistry:
    """Registry for record source classes by file extension."""

    def __init__(self):
        """Initialize registry."""
        self._sources: Dict[str, Type] = {}

    def register(self, source_cls: Type, extensions: List[str]) -> None:
        """Register a source class for file extensions."""
        for ext in extensions:
            normalized_ext = ext.lstrip(".").lower()
            self._sources[normalized_ext] = source_cls

    def get_source_class(self, path: Path) -> Type:
        """Get source class by file extension."""
        ext = path.suffix.lstrip(".").lower()
        if ext not in self._sources:
            raise UnsupportedFormatError(
                f"Unsupported file format: .{ext}. Supported formats: {', '.join(sorted(self._sources.keys()))}"
            )
        return self._sources[ext]

    def open(self, path: Path) -> RecordSource:
        """Create the source for a records file."""
        return self.get_source_class(path)(path)
