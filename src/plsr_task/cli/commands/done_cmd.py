"""``plsr-task done`` command."""

from __future__ import annotations

import typer

from plsr_task.cli.helpers import (
    console,
    exit_with_error,
    load_task_context,
    print_json,
    print_moves,
)
from plsr_task.tasks.archive import complete_tasks
from plsr_task.tasks.errors import TaskCliError


def done(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Emit JSON result"),
) -> None:
    """Archive every active task under done.<today>/."""
    context = load_task_context(ctx)
    try:
        result = complete_tasks(context.task_dir)
    except TaskCliError as exc:
        exit_with_error(exc, json_output)

    if json_output:
        print_json(result.to_dict())
        return

    if not result.tasks:
        console.print("[yellow]No active tasks to complete[/yellow]")
        return

    for moves in result.tasks:
        print_moves(moves, "Done", "blue", context)
    console.print(f"[green]Completed {len(result.tasks)} task(s)[/green]")


__all__ = ["done"]
