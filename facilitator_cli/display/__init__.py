"""Display module for rendering statistics output.

This module provides:
- console: Shared Rich console instance
- StatsRenderer: Facilitator statistics display
"""

from facilitator_cli.display.console import console
from facilitator_cli.display.stats_renderer import StatsRenderer

__all__ = ["console", "StatsRenderer"]
