"""Directory scanning helpers for the active task directory.

Nothing here is cached: every call lists the directory again so the
filesystem stays the single source of truth.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from plsr_task.core.constants import DONE_DIR_PATTERN, STASH_DIR

from .naming import (
    TaskFile,
    decode_cycle,
    decode_task_name,
    decode_type,
    is_task_file_candidate,
)

logger = logging.getLogger(__name__)


def list_entries(directory: Path) -> list[str]:
    """Return entry names in ``directory`` sorted by name, or [] if it is missing."""
    if not directory.is_dir():
        return []
    return sorted(entry.name for entry in directory.iterdir())


def list_task_files(directory: Path) -> list[TaskFile]:
    """List plan/review markdown files. Unparseable cycles are reported as 0."""
    files: list[TaskFile] = []
    for name in list_entries(directory):
        if not is_task_file_candidate(name):
            continue
        task_type = decode_type(name)
        files.append(
            TaskFile(
                type=task_type,
                task_name=decode_task_name(name),
                cycle=decode_cycle(name) or 0,
            )
        )
    return files


def list_active_task_names(directory: Path) -> list[str]:
    """Distinct task names in the active directory, in first-seen order."""
    names: list[str] = []
    for task_file in list_task_files(directory):
        if not task_file.task_name:
            continue
        if task_file.task_name not in names:
            names.append(task_file.task_name)
    return names


def _is_archive_dir(directory: Path, entry: str) -> bool:
    return bool(DONE_DIR_PATTERN.match(entry)) and (directory / entry).is_dir()


def _belongs_to(entry: str, task_name: str) -> bool:
    return entry == task_name or entry.startswith(f"{task_name}.")


def list_related_entries(directory: Path, task_name: str) -> list[str]:
    """Return every entry that belongs to ``task_name``.

    That is the task's own plan/review files plus auxiliary artifacts named
    ``<task_name>`` or ``<task_name>.*`` (files or directories). The stash and
    dated archive directories are never included, nor are artifacts of a
    longer active task name such as ``<task_name>.v2``.
    """
    longer_names = [
        name
        for name in list_active_task_names(directory)
        if name.startswith(f"{task_name}.")
    ]
    related: list[str] = []
    for entry in list_entries(directory):
        if entry == STASH_DIR or _is_archive_dir(directory, entry):
            continue

        if is_task_file_candidate(entry):
            if decode_task_name(entry) == task_name:
                related.append(entry)
            continue

        if not _belongs_to(entry, task_name):
            continue
        if any(_belongs_to(entry, name) for name in longer_names):
            continue
        related.append(entry)

    logger.debug("Related entries for %s: %s", task_name, related)
    return related


def latest_by_modification_time(directory: Path, file_names: Iterable[str]) -> str | None:
    """Return the most recently modified name; ties go to the later one."""
    latest: str | None = None
    latest_time = -1
    for name in file_names:
        mtime = (directory / name).stat().st_mtime_ns
        if mtime >= latest_time:
            latest, latest_time = name, mtime
    return latest


def stash_root(directory: Path) -> Path:
    return directory / STASH_DIR


def list_stashed_task_names(directory: Path) -> list[str]:
    """Task names with a slot under ``stash/``."""
    root = stash_root(directory)
    return [name for name in list_entries(root) if (root / name).is_dir()]


__all__ = [
    "latest_by_modification_time",
    "list_active_task_names",
    "list_entries",
    "list_related_entries",
    "list_stashed_task_names",
    "list_task_files",
    "stash_root",
]
