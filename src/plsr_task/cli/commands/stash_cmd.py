"""``plsr-task stash`` command."""

from __future__ import annotations

import typer

from plsr_task.cli.helpers import (
    console,
    exit_with_error,
    load_task_context,
    print_json,
    print_moves,
)
from plsr_task.tasks.archive import stash_tasks
from plsr_task.tasks.errors import TaskCliError


def stash(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Emit JSON result"),
) -> None:
    """Move every active task aside into the stash."""
    context = load_task_context(ctx)
    try:
        stashed = stash_tasks(context.task_dir)
    except TaskCliError as exc:
        exit_with_error(exc, json_output)

    if json_output:
        print_json({"stashed": [moves.to_dict() for moves in stashed]})
        return

    if not stashed:
        console.print("[yellow]No active tasks to stash[/yellow]")
        return

    for moves in stashed:
        print_moves(moves, "Stashed", "yellow", context)
    console.print(f"[green]Stashed {len(stashed)} task(s)[/green]")


__all__ = ["stash"]
