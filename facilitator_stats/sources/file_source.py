"""File-backed record sources (JSON and CSV exports)."""

import csv
import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Hashable, List, Mapping, Sequence

from pydantic import ValidationError

from facilitator_stats.exceptions import RecordSourceError
from facilitator_stats.models.appointment import AppointmentRecord
from facilitator_stats.models.category import CategoryKey
from facilitator_stats.models.filters import parse_flag
from facilitator_stats.sources.base import APPOINTMENT_TYPE
from facilitator_stats.sources.memory import InMemoryRecordSource

logger = logging.getLogger(__name__)

# Raw fields carrying the appointment date, in order of precedence.
DATE_FIELDS = ("timerange", "date")


class FileRecordSource:
    """Base class for sources that read every row from a single file.

    The file is read once, on first use. Rows are mapped onto
    AppointmentRecord in that single step; a file whose rows expose no
    date field cannot filter by date.
    """

    def __init__(self, path: Path):
        """
        Initialize source.

        Args:
            path: Path to the records file
        """
        self.path = Path(path)
        self._index: InMemoryRecordSource | None = None

    def _read_rows(self) -> list[Mapping[str, Any]]:
        """Read raw rows from the file."""
        raise NotImplementedError

    def _load(self) -> InMemoryRecordSource:
        if self._index is not None:
            return self._index

        rows = self._read_rows()

        has_date_field = any(
            field in row for row in rows for field in DATE_FIELDS
        )
        records = []
        unpublished = []
        try:
            for row in rows:
                if row.get("type", APPOINTMENT_TYPE) != APPOINTMENT_TYPE:
                    continue
                record = AppointmentRecord.from_raw(row)
                if not parse_flag(row.get("published", True)):
                    unpublished.append(record.id)
                records.append(record)
        except ValidationError as e:
            raise RecordSourceError(f"Invalid appointment row in {self.path}: {e}") from e

        logger.info(f"Loaded {len(records)} appointments from {self.path}")
        self._index = InMemoryRecordSource(
            records,
            supports_date_filter=has_date_field,
            unpublished_ids=unpublished,
        )
        return self._index

    @property
    def supports_date_filter(self) -> bool:
        """True if the file's rows carry a date field."""
        return self._load().supports_date_filter

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
        return self._load().query(
            content_type=content_type,
            published=published,
            start=start,
            end=end,
            purpose=purpose,
            exclude_status=exclude_status,
        )

    def load_many(self, ids: Sequence[Hashable]) -> List[AppointmentRecord]:
        """Load records by id, in the order given."""
        return self._load().load_many(ids)


class JSONRecordSource(FileRecordSource):
    """Source for JSON appointment exports.

    Supports two layouts:
    - Array of rows: [{row1}, {row2}, ...]
    - Object with appointments key: {appointments: [...]}
    """

    def _read_rows(self) -> list[Mapping[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except Exception as e:
            raise RecordSourceError(f"Failed to read JSON file: {e}") from e

        if isinstance(data, dict) and "appointments" in data:
            data = data["appointments"]
        if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
            raise RecordSourceError(
                "JSON format not recognized. Expected array of appointments "
                "or object with 'appointments' key."
            )
        return data


class CSVRecordSource(FileRecordSource):
    """Source for CSV appointment exports.

    Expected header: id, type, published, purpose, result, status, host,
    badges, timerange, date. Badges are separated by ';' or ','.
    """

    def _read_rows(self) -> list[Mapping[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8", newline="") as f:
                rows = list(csv.DictReader(f))
        except Exception as e:
            raise RecordSourceError(f"Failed to read CSV file: {e}") from e

        for row in rows:
            if "badges" in row:
                row["badges"] = [
                    part for part in re.split(r"[;,]", row["badges"] or "") if part.strip()
                ]
        return rows
