"""``plsr-task cycle`` command."""

from __future__ import annotations

import typer
from rich.markup import escape

from plsr_task.cli.helpers import (
    console,
    exit_with_error,
    load_task_context,
    print_json,
    print_skipped,
)
from plsr_task.tasks.cycle import advance_cycle
from plsr_task.tasks.errors import TaskCliError


def cycle(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Emit JSON result"),
) -> None:
    """Create the next plan or review file for the most recently edited task."""
    context = load_task_context(ctx)
    try:
        result = advance_cycle(context.task_dir, context.reference_dir)
    except TaskCliError as exc:
        exit_with_error(exc, json_output)

    if json_output:
        print_json(result.to_dict())
        return

    print_skipped(result.skipped)
    console.print(f"[green]Created:[/green] {escape(context.display(result.path))}")


__all__ = ["cycle"]
