"""Tests for configuration."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from facilitator_stats.config import StatsConfig


def test_stats_config_defaults():
    """Test StatsConfig default values."""
    config = StatsConfig()
    assert config.records_path == Path("data/appointments.json")
    assert config.badges_vocabulary == "badges"
    assert config.facilitator_profile_bundle == "coordinator"
    assert config.default_sort == "appointments"
    assert config.default_order == "desc"
    assert config.top_badges_limit == 3


def test_stats_config_from_env_all_vars(monkeypatch):
    """Test loading config values from environment."""
    monkeypatch.setenv("RECORDS_PATH", "/srv/appointments.csv")
    monkeypatch.setenv("LABELS_PATH", "/srv/labels.json")
    monkeypatch.setenv("BADGES_VOCABULARY", "skills")
    monkeypatch.setenv("FACILITATOR_PROFILE_BUNDLE", "mentor")
    monkeypatch.setenv("DEFAULT_SORT", "name")
    monkeypatch.setenv("DEFAULT_ORDER", "asc")
    monkeypatch.setenv("TOP_BADGES_LIMIT", "5")

    config = StatsConfig.from_env()
    assert config.records_path == Path("/srv/appointments.csv")
    assert config.labels_path == Path("/srv/labels.json")
    assert config.badges_vocabulary == "skills"
    assert config.facilitator_profile_bundle == "mentor"
    assert config.default_sort == "name"
    assert config.default_order == "asc"
    assert config.top_badges_limit == 5


def test_stats_config_from_env_file(tmp_path, monkeypatch):
    """Test loading config from .env file."""
    monkeypatch.delenv("BADGES_VOCABULARY", raising=False)
    (tmp_path / ".env").write_text("BADGES_VOCABULARY=certifications\n")

    original_cwd = os.getcwd()
    try:
        os.chdir(tmp_path)
        config = StatsConfig.from_env()
        assert config.badges_vocabulary == "certifications"
    finally:
        os.chdir(original_cwd)
        os.environ.pop("BADGES_VOCABULARY", None)


def test_stats_config_invalid_top_badges_limit(monkeypatch):
    """Test handling invalid TOP_BADGES_LIMIT."""
    monkeypatch.setenv("TOP_BADGES_LIMIT", "invalid")
    config = StatsConfig.from_env()
    # Should fall back to default
    assert config.top_badges_limit == 3


@pytest.mark.parametrize("value", ["0", "-2"])
def test_stats_config_out_of_range_top_badges_limit(monkeypatch, value):
    """Test a TOP_BADGES_LIMIT below 1 keeps the default."""
    monkeypatch.setenv("TOP_BADGES_LIMIT", value)
    config = StatsConfig.from_env()
    assert config.top_badges_limit == 3


def test_stats_config_rejects_zero_limit():
    """Test top_badges_limit validation."""
    with pytest.raises(ValidationError):
        StatsConfig(top_badges_limit=0)
