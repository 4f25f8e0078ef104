"""CLI commands package."""

from facilitator_cli.commands.config import config
from facilitator_cli.commands.export import export_command
from facilitator_cli.commands.stats import stats

__all__ = [
    "config",
    "export_command",
    "stats",
]
