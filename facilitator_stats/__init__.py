"""Appointment statistics per facilitator."""

from facilitator_stats.web import create_app

__all__ = ["create_app"]
