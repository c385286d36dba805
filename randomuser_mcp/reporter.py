from __future__ import annotations

from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from randomuser_mcp.domain.models import RequestPlan
from randomuser_mcp.planner import planned_total


def print_tools(specs: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """
    Render the tool catalogue as a rich table.

    One row per tool with its arguments; required arguments are marked with `*`.
    """
    console = console or Console()

    table = Table(title="Random User MCP Tools", box=box.ROUNDED)
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Description", style="green")
    table.add_column("Arguments", style="magenta")

    for spec in specs:
        schema = spec.get("inputSchema", {})
        required = set(schema.get("required", []))
        arguments = [
            f"{name}*" if name in required else name for name in schema.get("properties", {})
        ]
        table.add_row(spec["name"], spec.get("description", ""), ", ".join(arguments))

    console.print(table)


def print_plan(plan: RequestPlan, requested: int, console: Optional[Console] = None) -> None:
    """
    Render a distribution plan as a rich table.

    Zero-count entries are shown dimmed: they are planned but never requested.
    """
    console = console or Console()

    if not plan:
        console.print(
            f"[yellow]No nationality given: one upstream call for {requested} users.[/yellow]"
        )
        return

    total = planned_total(plan)
    table = Table(
        title="Distribution Plan",
        box=box.ROUNDED,
        caption=f"Requested {requested:,} │ Planned {total:,} │ Drift {total - requested:+,}",
    )
    table.add_column("#", justify="right", style="blue")
    table.add_column("Gender", style="cyan")
    table.add_column("Nationality", style="magenta")
    table.add_column("Count", justify="right", style="bold green")

    for index, entry in enumerate(plan, start=1):
        style = "dim" if entry.count == 0 else None
        table.add_row(str(index), entry.gender, entry.nationality, f"{entry.count:,}", style=style)

    console.print(table)
