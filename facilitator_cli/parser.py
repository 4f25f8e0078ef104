"""Typer application and command routing."""

import typer
from typing_extensions import Annotated

from facilitator_cli import setup_logging
from facilitator_cli.commands import config, export_command, stats
from facilitator_cli.context import CLIContext, set_context

app = typer.Typer(
    help="Appointment statistics per facilitator.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show informational log messages"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only show errors"),
    ] = False,
) -> None:
    """Configure logging and the shared context for every command."""
    ctx = CLIContext(verbose=verbose, quiet=quiet)
    set_context(ctx)
    setup_logging(verbose=verbose, quiet=quiet, config=ctx.config)


app.command("stats")(stats)
app.command("export")(export_command)
app.command("config")(config)
