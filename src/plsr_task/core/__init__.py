"""Core utilities and configuration exports."""

from .constants import (
    DEFAULT_TASK_DIR,
    DEFAULT_TASK_NAME,
    DONE_DIR_PREFIX,
    STASH_DIR,
)

__all__ = [
    "DEFAULT_TASK_DIR",
    "DEFAULT_TASK_NAME",
    "DONE_DIR_PREFIX",
    "STASH_DIR",
]
