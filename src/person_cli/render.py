"""
Output rendering and formatting for the person CLI.

Provides rich-based table formatting and plain JSON output for
machine consumption.
"""

import json
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.json import JSON
from rich.table import Table


class Renderer:
    """Output renderer with support for human and machine formats."""

    def __init__(
        self, json_output: bool = False, quiet: bool = False, console: Optional[Console] = None
    ):
        """Initialize renderer."""
        self.json_output = json_output
        self.quiet = quiet
        self.console = console or Console()

    def print(self, message: str, **kwargs) -> None:
        """Print message with appropriate formatting."""
        if self.quiet and not self.json_output:
            return
        self.console.print(message, **kwargs)

    def print_json(self, data: Any) -> None:
        """Print JSON data."""
        if self.json_output:
            print(json.dumps(data, indent=2))
        else:
            self.console.print(JSON.from_data(data))

    def print_table(self, data: List[Dict[str, Any]], title: Optional[str] = None) -> None:
        """Print data as table."""
        if self.json_output:
            self.print_json(data)
            return

        if not data:
            self.print("No data to display")
            return

        table = Table(title=title)
        for key in data[0].keys():
            table.add_column(key.replace("_", " ").title())
        for row in data:
            table.add_row(*[str(v) for v in row.values()])

        self.console.print(table)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self.console.print(f"Error: {message}", style="red")

    def print_success(self, message: str) -> None:
        """Print success message."""
        if self.quiet:
            return
        self.console.print(message, style="green")
