"""``plsr-task create`` command."""

from __future__ import annotations

import typer
from rich.markup import escape

from plsr_task.cli.helpers import (
    console,
    exit_with_error,
    load_task_context,
    print_json,
    print_moves,
)
from plsr_task.core.constants import DEFAULT_TASK_NAME
from plsr_task.tasks.cycle import create_task
from plsr_task.tasks.errors import TaskCliError


def create(
    ctx: typer.Context,
    task_name: str = typer.Argument(DEFAULT_TASK_NAME, help="Name of the task to create"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON result"),
) -> None:
    """Create a task, stashing any task in progress first."""
    context = load_task_context(ctx)
    try:
        result = create_task(context.task_dir, task_name)
    except TaskCliError as exc:
        exit_with_error(exc, json_output)

    if json_output:
        print_json(result.to_dict())
        return

    for moves in result.stashed:
        print_moves(moves, "Stashed", "yellow", context)
    console.print(f"[green]Created:[/green] {escape(context.display(result.path))}")


__all__ = ["create"]
