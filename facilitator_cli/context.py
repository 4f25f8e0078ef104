"""Shared CLI context with lazy-initialized dependencies."""

import logging
from pathlib import Path

from facilitator_stats.aggregation import AppointmentStats
from facilitator_stats.config import StatsConfig
from facilitator_stats.exceptions import LabelCatalogError
from facilitator_stats.labels import LabelCatalog
from facilitator_stats.models.filters import FilterSpec
from facilitator_stats.reporting import StatsReport, build_report
from facilitator_stats.sources import RecordSource, SourceRegistry, setup_source_registry

logger = logging.getLogger(__name__)


class CLIContext:
    """Shared context with lazy-initialized dependencies for CLI commands.

    Usage:
        ctx = CLIContext()
        report = ctx.build_report(FilterSpec())
    """

    def __init__(self, verbose: bool = False, quiet: bool = False):
        """Initialize CLI context.

        Args:
            verbose: If True, show informational log output
            quiet: If True, suppress non-error output
        """
        self.verbose = verbose
        self.quiet = quiet

        # Lazy-loaded dependencies
        self._config: StatsConfig | None = None
        self._source_registry: SourceRegistry | None = None

    @property
    def config(self) -> StatsConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            self._config = StatsConfig.from_env()
        return self._config

    @property
    def source_registry(self) -> SourceRegistry:
        """Get source registry with all sources registered (lazy-loaded)."""
        if self._source_registry is None:
            self._source_registry = setup_source_registry()
        return self._source_registry

    def open_source(self, records_path: Path | None = None) -> RecordSource:
        """Open the record source for a file (defaults to config.records_path).

        Raises:
            UnsupportedFormatError: If the file extension has no source.
        """
        return self.source_registry.open(records_path or self.config.records_path)

    def load_labels(self, labels_path: Path | None = None) -> LabelCatalog:
        """Load the label catalog, falling back to generated labels."""
        try:
            return LabelCatalog.load(labels_path or self.config.labels_path, self.config)
        except LabelCatalogError as e:
            logger.warning(f"{e}; falling back to generated labels")
            return LabelCatalog(
                badges_vocabulary=self.config.badges_vocabulary,
                facilitator_profile_bundle=self.config.facilitator_profile_bundle,
            )

    def build_report(
        self,
        filters: FilterSpec,
        sort: str | None = None,
        order: str | None = None,
        records_path: Path | None = None,
        labels_path: Path | None = None,
    ) -> StatsReport:
        """Summarize the record source and build the display report."""
        source = self.open_source(records_path)
        summary = AppointmentStats(source, self.config).summarize(filters)
        return build_report(
            summary,
            filters,
            self.load_labels(labels_path),
            sort=sort,
            order=order,
            config=self.config,
        )


# Global context instance (set by Typer callback)
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Get the current CLI context.

    Returns:
        The global CLI context instance

    Raises:
        RuntimeError: If context not initialized
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext) -> None:
    """Set the global CLI context.

    Args:
        ctx: The CLI context instance to set
    """
    global _ctx
    _ctx = ctx
