"""CLI command modules for plsr-task."""

from __future__ import annotations

import typer

from .config_cmd import config
from .create_cmd import create
from .cycle_cmd import cycle
from .done_cmd import done
from .pop_cmd import pop
from .stash_cmd import stash


def register_commands(app: typer.Typer) -> None:
    """Attach every command to the root Typer app."""
    app.command()(create)
    app.command()(cycle)
    app.command()(stash)
    app.command()(pop)
    app.command()(done)
    app.command()(config)


__all__ = ["register_commands"]
