"""Top-level ``plsr-task config`` command.

Shows the resolved task directory and which configuration layer set it.
"""

from __future__ import annotations

import typer
from rich.table import Table

from plsr_task.cli.helpers import console, load_task_context, print_json


def config(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Emit JSON result"),
) -> None:
    """Display the resolved configuration."""
    context = load_task_context(ctx)

    if json_output:
        payload = context.config.to_dict()
        payload["resolved_path"] = str(context.task_dir)
        print_json(payload)
        return

    table = Table(title="plsr-task configuration", show_lines=True)
    table.add_column("Option", style="cyan")
    table.add_column("Value", style="bold")
    table.add_column("Origin", style="magenta")
    table.add_column("Resolved Path")
    table.add_row("task-dir", context.config.task_dir, context.config.origin, str(context.task_dir))
    console.print(table)


__all__ = ["config"]
