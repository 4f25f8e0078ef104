"""Flask surface for the facilitator statistics report."""

import logging

from flask import Flask, jsonify, request

from facilitator_stats.aggregation import AppointmentStats
from facilitator_stats.config import StatsConfig
from facilitator_stats.exceptions import LabelCatalogError, UnsupportedFormatError
from facilitator_stats.labels import LabelCatalog, LabelResolver
from facilitator_stats.models.filters import build_filters
from facilitator_stats.models.summary import Summary
from facilitator_stats.reporting import build_report
from facilitator_stats.sources import RecordSource, setup_source_registry

logger = logging.getLogger(__name__)


def create_app(
    config: StatsConfig | None = None,
    source: RecordSource | None = None,
    labels: LabelResolver | None = None,
):
    """Create the Flask app.

    Args:
        config: Configuration (defaults to StatsConfig.from_env()).
        source: Record source; opened from config.records_path per request if omitted.
        labels: Label resolver; loaded from config.labels_path per request if omitted.
    """
    if config is None:
        config = StatsConfig.from_env()

    app = Flask(__name__)
    registry = setup_source_registry()

    def load_labels() -> LabelResolver:
        if labels is not None:
            return labels
        try:
            return LabelCatalog.load(config.labels_path, config)
        except LabelCatalogError as e:
            logger.warning(f"{e}; falling back to generated labels")
            return LabelCatalog(
                badges_vocabulary=config.badges_vocabulary,
                facilitator_profile_bundle=config.facilitator_profile_bundle,
            )

    @app.route("/stats", methods=["GET"])
    def stats():
        """Statistics report for the filters and sort order in the query string."""
        filters = build_filters(request.args)

        try:
            record_source = source if source is not None else registry.open(config.records_path)
        except UnsupportedFormatError as e:
            logger.error(f"Appointment stats query failed: {e}")
            summary = Summary.empty()
        else:
            summary = AppointmentStats(record_source, config).summarize(filters)

        report = build_report(
            summary,
            filters,
            load_labels(),
            sort=request.args.get("sort"),
            order=request.args.get("order"),
            config=config,
        )
        return jsonify(report.to_payload())

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    return app
