"""Export the facilitator statistics report as JSON."""

import json
import logging
from pathlib import Path

import typer
from typing_extensions import Annotated

from facilitator_cli.context import get_context
from facilitator_stats.exceptions import UnsupportedFormatError
from facilitator_stats.models.filters import build_filters

logger = logging.getLogger(__name__)


def export_command(
    output: Annotated[
        Path,
        typer.Argument(help="Path of the JSON file to write"),
    ],
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
        typer.Option("--sort", help="Sort column"),
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
) -> None:
    """
    Export the facilitator statistics report as JSON.

    The file holds the same payload the web report serves: active filters,
    summary lines, sortable header, rows and the raw summary.
    """
    ctx = get_context()

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
        raise typer.Exit(1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(report.to_payload(), indent=2, ensure_ascii=False), encoding="utf-8"
    )

    print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} Exported report")
    print(f"  {output.resolve()}")
    logger.info(f"Exported {len(report.rows)} facilitator rows to {output}")
