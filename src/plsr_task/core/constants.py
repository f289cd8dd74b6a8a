"""Shared path constants for the task directory layout."""

from __future__ import annotations

import re

DEFAULT_TASK_DIR = "tasks"
STASH_DIR = "stash"
DONE_DIR_PREFIX = "done."
DEFAULT_TASK_NAME = "task"

# done.<YYYY-MM-DD>
DONE_DIR_PATTERN = re.compile(r"^done\.[0-9]{4}-[0-9]{2}-[0-9]{2}\Z")

__all__ = [
    "DEFAULT_TASK_DIR",
    "DEFAULT_TASK_NAME",
    "DONE_DIR_PATTERN",
    "DONE_DIR_PREFIX",
    "STASH_DIR",
]
