"""Appointment record sources."""

from facilitator_stats.sources.base import APPOINTMENT_TYPE, RecordSource, SourceRegistry
from facilitator_stats.sources.file_source import (
    CSVRecordSource,
    FileRecordSource,
    JSONRecordSource,
)
from facilitator_stats.sources.memory import InMemoryRecordSource

__all__ = [
    "APPOINTMENT_TYPE",
    "RecordSource",
    "SourceRegistry",
    "FileRecordSource",
    "JSONRecordSource",
    "CSVRecordSource",
    "InMemoryRecordSource",
    "setup_source_registry",
]


def setup_source_registry() -> SourceRegistry:
    """Set up source registry with all file sources."""
    registry = SourceRegistry()
    registry.register(JSONRecordSource, [".json"])
    registry.register(CSVRecordSource, [".csv"])
    return registry
