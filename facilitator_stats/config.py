"""Configuration for facilitator statistics."""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field


class StatsConfig(BaseModel):
    """Statistics configuration with Pydantic validation."""

    # Data files
    records_path: Path = Field(default=Path("data/appointments.json"))
    labels_path: Path = Field(default=Path("data/labels.json"))

    # Logging
    log_dir: Path = Field(default=Path("logs"))
    log_filename: str = Field(default="facilitator_stats.log")

    # Label vocabularies
    badges_vocabulary: str = Field(default="badges")
    facilitator_profile_bundle: str = Field(default="coordinator")

    # Report defaults
    default_sort: str = Field(default="appointments")
    default_order: str = Field(default="desc")
    top_badges_limit: int = Field(default=3, ge=1)

    @classmethod
    def from_env(cls) -> "StatsConfig":
        """Load configuration from environment variables and .env file."""
        load_dotenv(find_dotenv(usecwd=True))

        config_dict = {}

        # Data files
        if "RECORDS_PATH" in os.environ:
            config_dict["records_path"] = Path(os.environ["RECORDS_PATH"])
        if "LABELS_PATH" in os.environ:
            config_dict["labels_path"] = Path(os.environ["LABELS_PATH"])

        # Logging
        if "LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["LOG_DIR"])
        if "LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["LOG_FILENAME"]

        # Label vocabularies
        if "BADGES_VOCABULARY" in os.environ:
            config_dict["badges_vocabulary"] = os.environ["BADGES_VOCABULARY"]
        if "FACILITATOR_PROFILE_BUNDLE" in os.environ:
            config_dict["facilitator_profile_bundle"] = os.environ[
                "FACILITATOR_PROFILE_BUNDLE"
            ]

        # Report defaults
        if "DEFAULT_SORT" in os.environ:
            config_dict["default_sort"] = os.environ["DEFAULT_SORT"]
        if "DEFAULT_ORDER" in os.environ:
            config_dict["default_order"] = os.environ["DEFAULT_ORDER"]
        if "TOP_BADGES_LIMIT" in os.environ:
            try:
                top_badges_limit = int(os.environ["TOP_BADGES_LIMIT"])
            except ValueError:
                top_badges_limit = 0  # Keep default if invalid
            if top_badges_limit >= 1:
                config_dict["top_badges_limit"] = top_badges_limit

        return cls(**config_dict)
