"""Error taxonomy for task directory operations.

Every domain operation raises a subclass of :class:`TaskCliError` before it
writes anything. Commands catch these at their boundary and report them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class TaskCliError(RuntimeError):
    """Raised when operations cannot be completed safely."""

    #: Malformed plan/review files passed over before the error was raised.
    skipped: Sequence[str] = ()


class TaskNotFoundError(TaskCliError):
    """Task directory, stash entry, or task file does not exist."""


class StashEntryNotFoundError(TaskNotFoundError):
    """The requested task name is not present in the stash."""

    def __init__(self, task_name: str, available: Sequence[str]):
        self.task_name = task_name
        self.available = list(available)
        super().__init__(f'Task "{task_name}" not found in stash')


class TaskAlreadyExistsError(TaskCliError):
    """Target file already exists. Treated as an idempotent no-op."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Already exists: {path}")


class InvalidCycleStateError(TaskCliError):
    """The plan/review cycle numbering of a task is inconsistent."""


class InvalidTaskNameError(TaskCliError):
    """A task name is empty or cannot be encoded into a task filename."""


class NoEligibleFilesError(TaskCliError):
    """Plan/review files exist but none of them follow the naming grammar."""

    def __init__(self, skipped: Sequence[str]):
        self.skipped = list(skipped)
        super().__init__(
            "No valid task files found. All plan/review files were skipped due to invalid naming."
        )


__all__ = [
    "TaskCliError",
    "TaskNotFoundError",
    "StashEntryNotFoundError",
    "TaskAlreadyExistsError",
    "InvalidCycleStateError",
    "InvalidTaskNameError",
    "NoEligibleFilesError",
]
