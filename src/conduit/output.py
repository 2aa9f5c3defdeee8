"""Terminal and JSON output for the conduit CLI."""

import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.pretty import Pretty
from rich.table import Table


@dataclass
class OutputContext:
    """Writes either rich text for people or one JSON object for scripts.

    In JSON mode plain messages are suppressed and every command prints a
    single object on stdout.
    """

    console: Console
    json_mode: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        if not self.json_mode:
            self.console.print(message, style=style)

    def print_json(self, data: dict[str, Any]) -> None:
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        if self.json_mode:
            self.print_json({"error": message, **(data or {})})
        else:
            self.console.print(f"[red]Error: {message}[/red]")

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        if self.json_mode:
            self.print_json({"success": message, **(data or {})})
        else:
            self.console.print(f"[green]{message}[/green]")

    def problems(self, message: str, problems: list[str]) -> None:
        """Report a rejected form with one line per problem."""
        self.error(message, {"problems": problems})
        for problem in problems:
            self.print(f"  - {problem}", style="red")

    def page(self, summary: dict[str, Any]) -> None:
        """Render a page summary as JSON or as a key/value table titled by page."""
        if self.json_mode:
            self.print_json(summary)
            return
        table = Table(title=summary.get("page"), show_header=False)
        table.add_column("Key", style="bold")
        table.add_column("Value")
        for key, value in summary.items():
            if key == "page":
                continue
            table.add_row(key, Pretty(value) if isinstance(value, dict | list) else str(value))
        self.console.print(table)


# Set by the cli.py main callback
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Current output context, or a plain console one outside the CLI."""
    if _ctx is None:
        return OutputContext(Console())
    return _ctx


def set_output_context(ctx: OutputContext) -> None:
    global _ctx
    _ctx = ctx
