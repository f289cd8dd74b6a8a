"""Reusable UI helpers for plsr-task CLI interactions."""

from __future__ import annotations

from typing import Sequence

import readchar
import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.UP or key == readchar.key.CTRL_P:
        return "up"
    if key == readchar.key.DOWN or key == readchar.key.CTRL_N:
        return "down"

    if key == readchar.key.ENTER:
        return "enter"

    if key == readchar.key.ESC or key == "\x1b":
        return "escape"

    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


def _resolve_console(console: Console | None) -> Console:
    return console or Console()


def select_with_arrows(
    options: Sequence[str],
    prompt_text: str = "Select an option",
    console: Console | None = None,
) -> str:
    """
    Interactive single choice using arrow keys with Rich Live display.
    """
    console = _resolve_console(console)
    choices = list(options)
    if not choices:
        raise typer.BadParameter("Nothing to select.")
    selected_index = 0

    def create_selection_panel():
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        for i, choice in enumerate(choices):
            pointer = "▶" if i == selected_index else " "
            table.add_row(pointer, f"[cyan]{choice}[/cyan]")

        table.add_row("", "")
        table.add_row("", "[dim]Use ↑/↓ to navigate, Enter to select, Esc to cancel[/dim]")

        return Panel(
            table,
            title=f"[bold]{prompt_text}[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )

    console.print()

    with Live(create_selection_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
                if key == "up":
                    selected_index = (selected_index - 1) % len(choices)
                elif key == "down":
                    selected_index = (selected_index + 1) % len(choices)
                elif key == "enter":
                    return choices[selected_index]
                elif key == "escape":
                    console.print("\n[yellow]Selection cancelled[/yellow]")
                    raise typer.Exit(1)

                live.update(create_selection_panel(), refresh=True)

            except KeyboardInterrupt:
                console.print("\n[yellow]Selection cancelled[/yellow]")
                raise typer.Exit(1)


def select_stashed_task(task_names: Sequence[str]) -> str:
    """Selection provider used by ``pop`` when several tasks are stashed."""
    return select_with_arrows(task_names, prompt_text="Select task to pop")


__all__ = [
    "get_key",
    "select_stashed_task",
    "select_with_arrows",
]
