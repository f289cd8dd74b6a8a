"""
Pulsar Task Master - organize plan/review notes for AI-assisted tasks.

Usage:
    plsr-task create [TASK_NAME]
    plsr-task cycle
    plsr-task stash
    plsr-task pop [--task NAME]
    plsr-task done
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import Optional

import typer

from plsr_task.cli.commands import register_commands
from plsr_task.cli.helpers import CliSettings, console
from plsr_task.core.logging_setup import configure_logging

try:
    __version__ = version("plsr-task")
except PackageNotFoundError:
    __version__ = "0.0.0"

app = typer.Typer(
    name="plsr-task",
    help="Pulsar Task Master - manage plan/review task files for AI-assisted work",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"plsr-task {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    task_dir: Optional[str] = typer.Option(
        None,
        "--task-dir",
        help="Task directory, overriding package.json/pyproject.toml/.plsr-task.yaml",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Capture global options for the sub-commands."""
    configure_logging(verbose)
    ctx.obj = CliSettings(task_dir=task_dir, verbose=verbose)


register_commands(app)


def main():
    app()


if __name__ == "__main__":
    main()
