"""Shared state and reporting helpers for CLI commands."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from plsr_task.core.config import TaskConfig, load_config, reference_dir, resolve_task_dir
from plsr_task.tasks.archive import TaskMoves
from plsr_task.tasks.errors import (
    StashEntryNotFoundError,
    TaskAlreadyExistsError,
    TaskCliError,
)

console = Console(soft_wrap=True)


@dataclass(frozen=True)
class CliSettings:
    """Global options captured by the root callback."""

    task_dir: str | None = None
    verbose: bool = False


@dataclass(frozen=True)
class TaskContext:
    """Everything a command needs to locate the task directory."""

    project_root: Path
    config: TaskConfig
    task_dir: Path
    reference_dir: str

    def display(self, path: Path) -> str:
        """Path relative to the project root when possible."""
        try:
            return path.relative_to(self.project_root).as_posix()
        except ValueError:
            return str(path)


def load_task_context(ctx: typer.Context | None = None) -> TaskContext:
    """Load configuration once for this invocation."""
    settings = ctx.obj if ctx is not None and isinstance(ctx.obj, CliSettings) else CliSettings()
    project_root = Path.cwd().resolve()
    try:
        config = load_config(project_root, task_dir_override=settings.task_dir)
    except TaskCliError as exc:
        exit_with_error(exc)
    return TaskContext(
        project_root=project_root,
        config=config,
        task_dir=resolve_task_dir(config, project_root),
        reference_dir=reference_dir(config, project_root),
    )


def print_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, sort_keys=True, default=str))


def print_skipped(skipped: list[str]) -> None:
    if skipped:
        console.print(
            f"[yellow]Warning:[/yellow] Skipped invalid files: {escape(', '.join(skipped))}"
        )


def print_moves(task_moves: TaskMoves, verb: str, style: str, context: TaskContext) -> None:
    target = escape(f"{context.display(task_moves.target_dir)}/")
    for move in task_moves.moves:
        label = escape(f"[{move.kind}]")
        console.print(f"  [{style}]{verb}:[/{style}] {escape(move.name)} {label} -> {target}")


def exit_with_error(exc: TaskCliError, json_output: bool = False) -> NoReturn:
    """Report a domain error and leave the command.

    An already-existing target is an idempotent no-op and exits with 0.
    """
    exit_code = 0 if isinstance(exc, TaskAlreadyExistsError) else 1

    if json_output:
        payload: dict[str, Any] = {"error": str(exc), "error_type": type(exc).__name__}
        if isinstance(exc, StashEntryNotFoundError):
            payload["available"] = exc.available
        if exc.skipped:
            payload["skipped"] = list(exc.skipped)
        print_json(payload)
        raise typer.Exit(exit_code)

    print_skipped(list(exc.skipped))

    if isinstance(exc, TaskAlreadyExistsError):
        console.print(f"[yellow]Already exists:[/yellow] {escape(str(exc.path))}")
        raise typer.Exit(exit_code)

    console.print(f"[red]Error:[/red] {escape(str(exc))}")

    if isinstance(exc, StashEntryNotFoundError):
        console.print("[cyan]Available stashed tasks:[/cyan]")
        for name in exc.available:
            console.print(f"  - {escape(name)}")

    raise typer.Exit(exit_code)


__all__ = [
    "CliSettings",
    "TaskContext",
    "console",
    "exit_with_error",
    "load_task_context",
    "print_json",
    "print_moves",
    "print_skipped",
]
