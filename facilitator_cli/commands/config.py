"""Display effective configuration settings."""

import os

from rich.table import Table

from facilitator_cli.display import console
from facilitator_stats.config import StatsConfig

# Setting name -> environment variable
ENV_KEYS = {
    "records_path": "RECORDS_PATH",
    "labels_path": "LABELS_PATH",
    "log_dir": "LOG_DIR",
    "log_filename": "LOG_FILENAME",
    "badges_vocabulary": "BADGES_VOCABULARY",
    "facilitator_profile_bundle": "FACILITATOR_PROFILE_BUNDLE",
    "default_sort": "DEFAULT_SORT",
    "default_order": "DEFAULT_ORDER",
    "top_badges_limit": "TOP_BADGES_LIMIT",
}


def _get_source(env_key: str, value, default_value) -> str:
    """Determine the source of a config value."""
    if env_key in os.environ or value != default_value:
        return "env"
    return "default"


def config() -> None:
    """Display effective configuration settings and where they come from."""
    default_config = StatsConfig()
    cfg = StatsConfig.from_env()

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("SETTING", style="cyan", no_wrap=True)
    table.add_column("SOURCE", style="dim", no_wrap=True)
    table.add_column("VALUE")

    for name, env_key in ENV_KEYS.items():
        value = getattr(cfg, name)
        source = _get_source(env_key, value, getattr(default_config, name))
        table.add_row(name, source, str(value))

    console.print(table)
