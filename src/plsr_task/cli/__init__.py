"""CLI helpers exposed for other modules."""

from .ui import select_stashed_task, select_with_arrows

__all__ = ["select_stashed_task", "select_with_arrows"]
