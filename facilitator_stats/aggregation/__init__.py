"""Appointment aggregation."""

from facilitator_stats.aggregation.summarizer import AppointmentStats, summarize_records

__all__ = ["AppointmentStats", "summarize_records"]
