"""CLI package for facilitator statistics."""

import logging
import sys

from facilitator_stats.config import StatsConfig

# Loggers that receive the CLI's file and console handlers.
LOGGED_PACKAGES = ("facilitator_stats", "facilitator_cli")

LOG_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def _console_level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, config: StatsConfig | None = None
) -> None:
    """Route package log records to a log file and to stderr.

    The file in config.log_dir gets everything from DEBUG up. The console
    shows warnings and errors, INFO and up with verbose, errors only with
    quiet. Calling it again replaces the handlers installed earlier.

    Args:
        verbose: Show informational messages on the console.
        quiet: Show only errors on the console.
        config: Log directory and file name (defaults to StatsConfig.from_env()).
    """
    if config is None:
        config = StatsConfig.from_env()

    config.log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(config.log_dir / config.log_filename, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT))
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_CONSOLE_FORMAT))
    console_handler.setLevel(_console_level(verbose, quiet))

    for name in LOGGED_PACKAGES:
        package_logger = logging.getLogger(name)
        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)
            handler.close()
        package_logger.setLevel(logging.DEBUG)
        package_logger.addHandler(file_handler)
        package_logger.addHandler(console_handler)


def main() -> None:
    """Main entry point for the CLI."""
    from facilitator_cli.parser import app

    app()


__all__ = ["main", "setup_logging"]
