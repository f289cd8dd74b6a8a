"""Filename codec for plan/review task files.

Task files follow ``<type>.<task_name>.<cycle>.md``. The task name may itself
contain dots; it is everything between the type segment and the last two
segments.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum


class TaskType(StrEnum):
    """Kind of task document."""

    PLAN = "plan"
    REVIEW = "review"


TASK_FILE_SUFFIX = ".md"
TASK_FILE_PATTERN = re.compile(r"^(plan|review)\.(.+)\.([1-9][0-9]*)\.md\Z")

_CYCLE_SEGMENT = re.compile(r"^[0-9]+\Z")


@dataclass(frozen=True)
class TaskFile:
    """A plan or review document identified by its filename."""

    type: TaskType
    task_name: str
    cycle: int

    @property
    def file_name(self) -> str:
        return encode(self.type, self.task_name, self.cycle)


def encode(type: TaskType | str, task_name: str, cycle: int) -> str:
    """Build the canonical filename for a task document."""
    return f"{TaskType(type)}.{task_name}.{cycle}{TASK_FILE_SUFFIX}"


def decode_cycle(file_name: str) -> int | None:
    """Extract the cycle number, e.g. ``plan.demo.1.md`` -> ``1``.

    Returns None when the second-to-last segment is not a decimal integer.
    """
    parts = file_name.split(".")
    if len(parts) < 3:
        return None
    segment = parts[-2]
    if not _CYCLE_SEGMENT.match(segment):
        return None
    return int(segment)


def decode_task_name(file_name: str) -> str:
    """Extract the task name, e.g. ``plan.demo.v2.1.md`` -> ``demo.v2``.

    Returns an empty string when the filename has too few segments.
    """
    parts = file_name.split(".")
    if len(parts) < 4:
        return ""
    return ".".join(parts[1:-2])


def decode_type(file_name: str) -> TaskType | None:
    for task_type in TaskType:
        if file_name.startswith(f"{task_type}."):
            return task_type
    return None


def is_task_file_candidate(file_name: str) -> bool:
    """Loose check: looks like a plan/review markdown file."""
    return file_name.endswith(TASK_FILE_SUFFIX) and decode_type(file_name) is not None


def parse_task_file(file_name: str) -> TaskFile | None:
    """Strictly parse a task filename, returning None when it is malformed."""
    match = TASK_FILE_PATTERN.match(file_name)
    if not match:
        return None
    task_type, task_name, cycle = match.groups()
    return TaskFile(type=TaskType(task_type), task_name=task_name, cycle=int(cycle))


__all__ = [
    "TASK_FILE_PATTERN",
    "TaskFile",
    "TaskType",
    "decode_cycle",
    "decode_task_name",
    "decode_type",
    "encode",
    "is_task_file_candidate",
    "parse_task_file",
]
