"""Display labels for category codes, facilitators and badges."""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, Field, ValidationError, field_validator

from facilitator_stats.config import StatsConfig
from facilitator_stats.exceptions import LabelCatalogError
from facilitator_stats.models.appointment import UNASSIGNED_HOST_ID

logger = logging.getLogger(__name__)

UNASSIGNED_LABEL = "Unassigned"

CATEGORY_FIELDS = ("purpose", "result", "status")


class LabelResolver(Protocol):
    """Protocol for label lookups used by the report."""

    def resolve_labels(self, field_name: str) -> dict[str, str]:
        """Allowed values of a category field, code -> label."""
        ...

    def resolve_user_label(self, host_id: int) -> str:
        """Display name for a facilitator."""
        ...

    def resolve_badge_label(self, badge_id: int) -> str:
        """Display name for a badge."""
        ...


def _allowed_values(value: Any) -> dict[str, str]:
    """Normalize allowed-values settings into a code -> label mapping.

    Accepts a mapping, a list of codes, or a list of {"value", "label"} items.
    """
    if value is None:
        return {}
    if isinstance(value, dict):
        return {str(code): str(label) for code, label in value.items()}
    labels = {}
    for item in value:
        if isinstance(item, dict) and "value" in item:
            labels[str(item["value"])] = str(item.get("label") or item["value"])
        elif isinstance(item, str):
            labels[item] = item
    return labels


def _id_labels(value: Any) -> dict[int, str]:
    if not value:
        return {}
    if not isinstance(value, dict):
        raise ValueError("expected an id -> label mapping")
    return {int(key): str(label) for key, label in value.items()}


class LabelCatalog(BaseModel):
    """Label catalog loaded from a JSON file.

    Layout:
        {
          "fields": {"purpose": {...}, "result": [...], "status": [...]},
          "users": {"1": "Ada"},
          "profiles": {"coordinator": {"1": "Ada L."}},
          "vocabularies": {"badges": {"10": "Laser cutter"}}
        }
    """

    fields: dict[str, dict[str, str]] = Field(default_factory=dict)
    users: dict[int, str] = Field(default_factory=dict)
    profiles: dict[str, dict[int, str]] = Field(default_factory=dict)
    vocabularies: dict[str, dict[int, str]] = Field(default_factory=dict)
    badges_vocabulary: str = "badges"
    facilitator_profile_bundle: str = "coordinator"

    @field_validator("fields", mode="before")
    @classmethod
    def normalize_fields(cls, v):
        """Accept the different allowed-values layouts per field."""
        if v is None:
            return {}
        return {name: _allowed_values(values) for name, values in v.items()}

    @field_validator("profiles", "vocabularies", mode="before")
    @classmethod
    def normalize_nested_ids(cls, v):
        """Convert nested id keys to integers."""
        if v is None:
            return {}
        return {name: _id_labels(labels) for name, labels in v.items()}

    @classmethod
    def load(cls, path: Path, config: StatsConfig | None = None) -> "LabelCatalog":
        """Load a catalog file; a missing file yields an empty catalog.

        Raises:
            LabelCatalogError: If the file exists but cannot be parsed.
        """
        if config is None:
            config = StatsConfig()
        settings = {
            "badges_vocabulary": config.badges_vocabulary,
            "facilitator_profile_bundle": config.facilitator_profile_bundle,
        }

        path = Path(path)
        if not path.exists():
            logger.info(f"Label catalog {path} not found, using generated labels")
            return cls(**settings)

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return cls(**{**data, **settings})
        except (OSError, TypeError, ValueError, ValidationError) as e:
            raise LabelCatalogError(f"Failed to load label catalog {path}: {e}") from e

    def resolve_labels(self, field_name: str) -> dict[str, str]:
        """Allowed values of a category field, code -> label."""
        return dict(self.fields.get(field_name, {}))

    def resolve_user_label(self, host_id: int) -> str:
        """Profile name, then account name, then a generic fallback."""
        if host_id == UNASSIGNED_HOST_ID:
            return UNASSIGNED_LABEL
        profile_labels = self.profiles.get(self.facilitator_profile_bundle, {})
        if host_id in profile_labels:
            return profile_labels[host_id]
        return self.users.get(host_id, f"User {host_id}")

    def resolve_badge_label(self, badge_id: int) -> str:
        """Badge term name from the configured vocabulary."""
        badge_labels = self.vocabularies.get(self.badges_vocabulary, {})
        return badge_labels.get(badge_id, f"Badge {badge_id}")
