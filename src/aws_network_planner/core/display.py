"""Base display utilities"""

from typing import Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from .cache import format_ttl


class BaseDisplay:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_cache_info(self, infos: list[dict]):
        if not infos:
            self.console.print("[yellow]Cache is empty[/]")
            return
        table = Table(title="📦 Cache", show_header=True, header_style="bold")
        table.add_column("Namespace", style="cyan")
        table.add_column("Cached At (UTC)")
        table.add_column("Age", justify="right")
        table.add_column("TTL", justify="right")
        table.add_column("Status")
        for info in infos:
            status = "[red]Expired[/]" if info["expired"] else "[green]Valid[/]"
            table.add_row(
                info["namespace"],
                info["cached_at"].strftime("%Y-%m-%d %H:%M:%S"),
                f"{info['age_seconds']:.0f}s",
                format_ttl(info["ttl_seconds"]),
                status,
            )
        self.console.print(table)

    def panel(self, title: str, fields: list[tuple[str, object]]):
        """Key/value summary panel."""
        body = "\n".join(
            f"[bold]{label}:[/] {escape(str(value))}" for label, value in fields
        )
        self.console.print(Panel(body, title=title))
