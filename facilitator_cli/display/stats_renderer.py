"""Stats renderer for facilitator statistics display."""

from rich.markup import escape
from rich.table import Table

from facilitator_cli.display.console import console
from facilitator_stats.reporting import StatsReport


class StatsRenderer:
    """Render the facilitator statistics report.

    Displays the summary totals, the per-facilitator table in report order
    and the glossary of column definitions.
    """

    def render_report(self, report: StatsReport, show_definitions: bool = True) -> None:
        """Render full statistics display.

        Args:
            report: StatsReport built for the active filters.
            show_definitions: Whether to print the "How to read" glossary.
        """
        self._render_header(report)
        self._render_summary(report)
        self._render_table(report)

        if show_definitions:
            self._render_definitions(report)

        console.print()  # trailing newline

    def _render_header(self, report: StatsReport) -> None:
        """Render the statistics header with the active filters."""
        filters = report.filters
        parts = []
        if filters.get("start") or filters.get("end"):
            parts.append(f"{filters.get('start') or '…'} to {filters.get('end') or '…'}")
        if filters.get("purpose") not in (None, "all"):
            parts.append(f"purpose={filters['purpose']}")
        if filters.get("include_cancelled"):
            parts.append("including cancelled")
        filter_label = f" ({', '.join(parts)})" if parts else ""

        console.print()
        console.print("━" * 50)
        console.print(f"[bold]  Facilitator statistics{filter_label}[/bold]")
        console.print("━" * 50)

    def _render_summary(self, report: StatsReport) -> None:
        """Render the summary section."""
        console.print("\n[bold]Summary:[/bold]")
        for item in report.summary_items:
            console.print(f"  {item}", highlight=False)

    def _render_table(self, report: StatsReport) -> None:
        """Render the facilitator table."""
        console.print()
        if not report.rows:
            console.print(f"[dim]{report.empty_message}[/dim]")
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        for cell in report.header:
            style = "cyan" if cell.key == "name" else None
            justify = "right" if cell.key in self._numeric_columns else "left"
            table.add_column(cell.title, style=style, justify=justify)

        for row in report.rows:
            values = {
                "name": row.name,
                "appointments": str(row.appointments),
                "badge_sessions": str(row.badge_sessions),
                "badges": str(row.badges),
                "appointment_day_count": str(row.appointment_day_count),
                "cancelled": str(row.cancelled),
                "purpose": "\n".join(row.purpose),
                "result": "\n".join(row.result),
                "status": "\n".join(row.status),
                "top_badges": "\n".join(row.top_badges),
                "latest": row.latest,
            }
            table.add_row(*(escape(values[cell.key]) for cell in report.header))

        console.print(table)

    _numeric_columns = {
        "appointments",
        "badge_sessions",
        "badges",
        "appointment_day_count",
        "cancelled",
    }

    def _render_definitions(self, report: StatsReport) -> None:
        """Render the glossary of column definitions."""
        console.print("\n[bold]How to read this report:[/bold]")
        for definition in report.definitions:
            console.print(f"  [dim]{definition}[/dim]", highlight=False)

    def render_error(self, message: str) -> None:
        """Render an error message.

        Args:
            message: Error description.
        """
        console.print(f"\n[red]Error:[/red] {message}")
