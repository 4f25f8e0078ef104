"""Summarize appointments per facilitator: counts, mixes, badges and activity."""

import json
import logging
from enum import Enum
from pathlib import Path

import typer
from typing_extensions import Annotated

from facilitator_cli.context import get_context
from facilitator_cli.display import StatsRenderer, console
from facilitator_stats.exceptions import UnsupportedFormatError
from facilitator_stats.models.filters import build_filters

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Output format for the stats command."""

    TABLE = "table"
    JSON = "json"


def stats(
    start: Annotated[
        str | None,
        typer.Option("--start", "-s", help="First day to include (YYYY-MM-DD)"),
    ] = None,
    end: Annotated[
        str | None,
        typer.Option("--end", "-e", help="Last day to include (YYYY-MM-DD)"),
    ] = None,
    purpose: Annotated[
        str,
        typer.Option("--purpose", "-p", help="Purpose code to filter on, or 'all'"),
    ] = "all",
    include_cancelled: Annotated[
        bool,
        typer.Option("--include-cancelled", help="Include cancelled appointments"),
    ] = False,
    sort: Annotated[
        str | None,
        typer.Option(
            "--sort",
            help="Sort column: name, appointments, badge_sessions, badges, "
            "appointment_day_count, cancelled, latest",
        ),
    ] = None,
    order: Annotated[
        str | None,
        typer.Option("--order", help="Sort direction: asc or desc"),
    ] = None,
    records: Annotated[
        Path | None,
        typer.Option("--records", "-r", help="Appointment records file (.json or .csv)"),
    ] = None,
    labels: Annotated[
        Path | None,
        typer.Option("--labels", "-l", help="Label catalog file (.json)"),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.TABLE,
    show_definitions: Annotated[
        bool,
        typer.Option("--definitions/--no-definitions", help="Show column definitions"),
    ] = True,
) -> None:
    """Summarize appointments per facilitator: counts, mixes, badges and activity.

    Filters mirror the web report: a date range, a purpose and whether
    cancelled appointments are counted.
    """
    ctx = get_context()
    renderer = StatsRenderer()

    filters = build_filters(
        {
            "start": start,
            "end": end,
            "purpose": purpose,
            "include_cancelled": include_cancelled,
        }
    )

    try:
        report = ctx.build_report(
            filters,
            sort=sort,
            order=order,
            records_path=records,
            labels_path=labels,
        )
    except UnsupportedFormatError as e:
        logger.error(str(e))
        renderer.render_error(str(e))
        raise typer.Exit(1)

    if output_format is OutputFormat.JSON:
        console.print_json(json.dumps(report.to_payload(), ensure_ascii=False))
        return

    renderer.render_report(report, show_definitions=show_definitions)
