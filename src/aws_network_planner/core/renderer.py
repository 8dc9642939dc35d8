"""Machine-readable output for plans and discovery results."""

from typing import Any, Optional
from rich.console import Console
from rich.markup import escape
import json
import yaml

FORMATS = ("table", "json", "yaml")


class DisplayRenderer:
    """Renders JSON/YAML; table output is left to the display classes."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, data: Any, fmt: str = "table") -> bool:
        """Render data in the given format.

        Args:
            data: JSON-safe data (dicts, lists, scalars)
            fmt: Output format (table, json, yaml)

        Returns:
            True if rendered here, False if the caller should draw a table
        """
        if fmt not in FORMATS:
            raise ValueError(f"Invalid format: {fmt}. Use one of {', '.join(FORMATS)}")
        if fmt == "json":
            self.console.print_json(json.dumps(data, default=str))
            return True
        if fmt == "yaml":
            self.console.print(
                yaml.safe_dump(data, sort_keys=False),
                end="",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            return True
        return False

    def error(self, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/]")
