"""
Rich tables for CLI output.
"""

from typing import Dict, List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box


class DisplayManager:
    """Renders conversion results, overviews and bucket status."""

    def __init__(self, console: Console = None):
        self.console = console or Console(width=100)

    def show_conversion(self, results: Dict, amount: float, asset: str) -> None:
        if not results:
            self.console.print("[yellow]No conversion data available[/yellow]")
            return

        table = Table(title=f"{amount:,.2f} {asset}", box=box.SIMPLE_HEAVY)
        table.add_column("Asset", style="bold")
        table.add_column("Equivalent")
        table.add_column("Fresh", justify="center")

        for identifier, result in results.items():
            fresh = "[red]stale[/red]" if result.stale else "[green]live[/green]"
            table.add_row(identifier, result.equiv, fresh)

        self.console.print(table)

    def show_overview(self, asset: str, mode: str, overview) -> None:
        colors = {"high": "green", "medium": "yellow", "low": "red"}
        color = colors.get(overview.confidence, "white")

        lines = [f"[bold]{overview.summary}[/bold]", ""]
        lines.extend(f"• {bullet}" for bullet in overview.bullets)
        lines.append("")
        lines.append(f"Confidence: [{color}]{overview.confidence}[/{color}]")
        if overview.chart_data:
            first, last = overview.chart_data[0], overview.chart_data[-1]
            lines.append(f"Chart: {first['date']} {first['value']:,.2f} → {last['date']} {last['value']:,.2f}")

        title = f"{asset} ({'short' if mode == 'short' else 'long'} term)"
        self.console.print(Panel("\n".join(lines), title=title, border_style=color))

    def show_refresh(self, results: Dict[str, bool]) -> None:
        table = Table(title="Data fetch", box=box.SIMPLE)
        table.add_column("Bucket", style="bold")
        table.add_column("Result")
        for bucket, ok in results.items():
            table.add_row(bucket, "[green]Success[/green]" if ok else "[red]Failed[/red]")
        self.console.print(table)

    def show_status(self, statuses: List) -> None:
        table = Table(title="Price buckets", box=box.SIMPLE)
        table.add_column("Bucket", style="bold")
        table.add_column("TTL (s)", justify="right")
        table.add_column("Age (s)", justify="right")
        table.add_column("State")
        for status in statuses:
            age = "-" if status.age_seconds is None else f"{status.age_seconds:,.0f}"
            state = "[red]stale[/red]" if status.stale else "[green]fresh[/green]"
            table.add_row(status.bucket, f"{status.ttl_seconds:,.0f}", age, state)
        self.console.print(table)
