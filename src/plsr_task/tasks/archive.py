"""Move tasks between the active directory, the stash, and dated archives.

Entries are moved one at a time. The loops are not transactional: an
interrupted command leaves whatever was already moved in its new place.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence

from plsr_task.core.constants import DONE_DIR_PREFIX

from .errors import StashEntryNotFoundError, TaskCliError, TaskNotFoundError
from .index import (
    list_active_task_names,
    list_entries,
    list_related_entries,
    list_stashed_task_names,
    stash_root,
)

logger = logging.getLogger(__name__)

SelectionProvider = Callable[[Sequence[str]], str]


@dataclass(frozen=True)
class MoveRecord:
    """One entry relocated from ``source`` to ``destination``."""

    name: str
    source: Path
    destination: Path
    is_dir: bool

    @property
    def kind(self) -> str:
        return "dir" if self.is_dir else "file"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "source": str(self.source),
            "destination": str(self.destination),
            "kind": self.kind,
        }


@dataclass(frozen=True)
class TaskMoves:
    """All entries of one task moved into ``target_dir``."""

    task_name: str
    target_dir: Path
    moves: list[MoveRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "task_name": self.task_name,
            "target_dir": str(self.target_dir),
            "moves": [move.to_dict() for move in self.moves],
        }


@dataclass(frozen=True)
class PopResult:
    task_name: str
    auto_selected: bool
    stashed: list[TaskMoves]
    restored: list[MoveRecord]

    def to_dict(self) -> dict[str, Any]:
        return {
            "task_name": self.task_name,
            "auto_selected": self.auto_selected,
            "stashed": [moves.to_dict() for moves in self.stashed],
            "restored": [move.to_dict() for move in self.restored],
        }


@dataclass(frozen=True)
class DoneResult:
    archive_dir: Path
    tasks: list[TaskMoves]

    def to_dict(self) -> dict[str, Any]:
        return {
            "archive_dir": str(self.archive_dir),
            "tasks": [moves.to_dict() for moves in self.tasks],
        }


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def move_entry(source: Path, destination: Path) -> MoveRecord:
    """Move a file or directory, replacing whatever sits at ``destination``."""
    if not source.exists() and not source.is_symlink():
        raise TaskNotFoundError(f"Cannot move missing entry: {source}")

    is_dir = source.is_dir() and not source.is_symlink()
    destination.parent.mkdir(parents=True, exist_ok=True)
    if destination.exists() or destination.is_symlink():
        _remove(destination)
    shutil.move(str(source), str(destination))
    logger.debug("Moved %s -> %s", source, destination)
    return MoveRecord(name=source.name, source=source, destination=destination, is_dir=is_dir)


def _move_related(directory: Path, task_name: str, target_dir: Path) -> TaskMoves:
    target_dir.mkdir(parents=True, exist_ok=True)
    moves = [
        move_entry(directory / entry, target_dir / entry)
        for entry in list_related_entries(directory, task_name)
    ]
    return TaskMoves(task_name=task_name, target_dir=target_dir, moves=moves)


def stash_tasks(
    directory: Path,
    task_names: Iterable[str] | None = None,
    exclude: str | None = None,
) -> list[TaskMoves]:
    """Move every related entry of each task into ``stash/<task_name>/``.

    ``task_names`` defaults to all active tasks. ``exclude`` is skipped so a
    task about to be popped keeps its existing stash slot intact.
    """
    if not directory.is_dir():
        raise TaskNotFoundError(f"Task directory not found: {directory}")

    names =list_active_task_names(directory) if task_names is None else list(task_names)
    names = [name for name in names if name and name != exclude]
    if not names:
        return []

    root = stash_root(directory)
    results = []
    for name in names:
        results.append(_move_related(directory, name, root / name))
        logger.info("Stashed task %s", name)
    return results


def _choose_stashed(
    stashed: Sequence[str],
    task_name: str | None,
    select: SelectionProvider | None,
) -> tuple[str, bool]:
    if task_name:
        return task_name, False
    if len(stashed) == 1:
        return stashed[0], True
    if select is None:
        raise TaskCliError(
            "Multiple stashed tasks; specify one of: " + ", ".join(stashed)
        )
    return select(stashed), False


def pop_task(
    directory: Path,
    task_name: str | None = None,
    select: SelectionProvider | None = None,
) -> PopResult:
    """Restore ``task_name`` from the stash, stashing every other active task first.

    When ``task_name`` is omitted a single stashed task is picked
    automatically; with several, ``select`` is asked to choose one.

    Raises:
        TaskNotFoundError: nothing is stashed, or the chosen slot is empty.
        StashEntryNotFoundError: the chosen name has no stash slot.
    """
    stashed = list_stashed_task_names(directory)
    if not stashed:
        raise TaskNotFoundError("No stashed tasks")

    chosen, auto_selected = _choose_stashed(stashed, task_name, select)
    if chosen not in stashed:
        raise StashEntryNotFoundError(chosen, stashed)

    slot = stash_root(directory) / chosen
    entries = list_entries(slot)
    if not entries:
        raise TaskNotFoundError(f"No entries found in stash/{chosen}/")

    others = stash_tasks(directory, exclude=chosen)

    restored = [move_entry(slot / entry, directory / entry) for entry in entries]
    slot.rmdir()
    logger.info("Popped task %s", chosen)
    return PopResult(
        task_name=chosen,
        auto_selected=auto_selected,
        stashed=others,
        restored=restored,
    )


def archive_dir_for(directory: Path, today: date | None = None) -> Path:
    day = today or date.today()
    return directory / f"{DONE_DIR_PREFIX}{day.isoformat()}"


def complete_tasks(directory: Path, today: date | None = None) -> DoneResult:
    """Move every active task into ``done.<date>/<task_name>/``.

    With no active tasks nothing is created and the result lists no tasks.
    """
    if not directory.is_dir():
        raise TaskNotFoundError(f"Task directory not found: {directory}")

    archive_dir = archive_dir_for(directory, today)
    names = list_active_task_names(directory)
    tasks = [_move_related(directory, name, archive_dir / name) for name in names]
    if tasks:
        logger.info("Completed %d task(s) into %s", len(tasks), archive_dir.name)
    return DoneResult(archive_dir=archive_dir, tasks=tasks)


__all__ = [
    "DoneResult",
    "MoveRecord",
    "PopResult",
    "SelectionProvider",
    "TaskMoves",
    "archive_dir_for",
    "complete_tasks",
    "move_entry",
    "pop_task",
    "stash_tasks",
]
