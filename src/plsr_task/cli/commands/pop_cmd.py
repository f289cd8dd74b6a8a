"""``plsr-task pop`` command."""

from __future__ import annotations

from typing import Optional

import typer
from rich.markup import escape

from plsr_task.cli.helpers import (
    console,
    exit_with_error,
    load_task_context,
    print_json,
    print_moves,
)
from plsr_task.cli.ui import select_stashed_task
from plsr_task.tasks.archive import SelectionProvider, pop_task
from plsr_task.tasks.errors import TaskCliError

# Swapped out in tests; the default prompts on the terminal.
selection_provider: SelectionProvider = select_stashed_task


def pop(
    ctx: typer.Context,
    task: Optional[str] = typer.Option(None, "--task", "-t", help="Name of the stashed task to restore"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON result"),
) -> None:
    """Restore a stashed task, stashing the tasks in progress first."""
    context = load_task_context(ctx)
    try:
        result = pop_task(context.task_dir, task, select=selection_provider)
    except TaskCliError as exc:
        exit_with_error(exc, json_output)

    if json_output:
        print_json(result.to_dict())
        return

    name = escape(result.task_name)
    if result.auto_selected:
        console.print(f"[cyan]Auto-selecting single stashed task: {name}[/cyan]")
    if result.stashed:
        console.print("[yellow]Stashing current tasks first...[/yellow]")
        for moves in result.stashed:
            print_moves(moves, "Stashed", "yellow", context)

    for move in result.restored:
        label = escape(f"[{move.kind}]")
        console.print(
            f"  [green]Restored:[/green] stash/{name}/{escape(move.name)} {label} -> {escape(move.name)}"
        )
    console.print(f"\n[green]Popped task: {name}[/green]")


__all__ = ["pop"]
