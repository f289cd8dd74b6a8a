"""Plan/review cycle engine.

A task advances plan 1 -> review 1 -> plan 2 -> review 2 -> ... The state of
a task is derived from the highest plan and review cycle numbers present in
the task directory; the most recently modified task file decides which task
is advanced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from plsr_task.core.constants import DEFAULT_TASK_NAME, DONE_DIR_PATTERN, STASH_DIR

from .archive import TaskMoves, stash_tasks
from .errors import (
    InvalidCycleStateError,
    InvalidTaskNameError,
    NoEligibleFilesError,
    TaskAlreadyExistsError,
    TaskCliError,
    TaskNotFoundError,
)
from .index import latest_by_modification_time, list_entries, list_stashed_task_names
from .naming import (
    TASK_FILE_SUFFIX,
    TaskFile,
    TaskType,
    decode_task_name,
    encode,
    is_task_file_candidate,
    parse_task_file,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CycleTarget:
    """The task chosen for advancement and the files it was chosen from."""

    task_name: str
    latest_file: str
    files: list[TaskFile]
    skipped: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CycleState:
    """Cycle numbering of one task and the document that comes next."""

    task_name: str
    max_plan: int
    max_review: int
    plans: dict[int, str]
    reviews: dict[int, str]

    @property
    def next_type(self) -> TaskType:
        return TaskType.PLAN if self.max_plan == self.max_review else TaskType.REVIEW

    @property
    def next_cycle(self) -> int:
        if self.next_type is TaskType.PLAN:
            return self.max_plan + 1
        return self.max_plan

    @property
    def current_cycle(self) -> int:
        return max(self.max_plan, self.max_review, 1)

    @property
    def next_file_name(self) -> str:
        return encode(self.next_type, self.task_name, self.next_cycle)


@dataclass(frozen=True)
class CycleResult:
    state: CycleState
    path: Path
    skipped: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "task_name": self.state.task_name,
            "type": str(self.state.next_type),
            "cycle": self.state.next_cycle,
            "path": str(self.path),
            "skipped": list(self.skipped),
        }


def select_cycle_target(directory: Path) -> CycleTarget:
    """Pick the task whose file was edited most recently.

    Raises:
        TaskNotFoundError: the directory is missing or holds no task files.
        NoEligibleFilesError: every plan/review file is malformed.
        InvalidTaskNameError: the latest file yields an empty task name.
    """
    if not directory.is_dir():
        raise TaskNotFoundError(f"Task directory not found: {directory}")

    markdown = [name for name in list_entries(directory) if name.endswith(TASK_FILE_SUFFIX)]
    eligible: list[str] = []
    skipped: list[str] = []
    for name in markdown:
        if parse_task_file(name) is not None:
            eligible.append(name)
        elif is_task_file_candidate(name):
            skipped.append(name)

    if skipped:
        logger.debug("Skipped invalid task files: %s", ", ".join(skipped))

    if not eligible:
        if skipped:
            raise NoEligibleFilesError(skipped)
        raise TaskNotFoundError(f"No task files found in {directory}")

    latest = latest_by_modification_time(directory, eligible)
    task_name = decode_task_name(latest) if latest else ""
    if not task_name.strip():
        error = InvalidTaskNameError(f'Invalid task file name "{latest}". Task name is empty.')
        error.skipped = skipped
        raise error

    files = [
        parsed
        for parsed in (parse_task_file(name) for name in eligible)
        if parsed is not None and parsed.task_name == task_name
    ]
    logger.debug("Latest task file %s selects task %s", latest, task_name)
    return CycleTarget(task_name=task_name, latest_file=latest, files=files, skipped=skipped)


def compute_cycle_state(task_name: str, files: Iterable[TaskFile]) -> CycleState:
    """Derive the cycle state of ``task_name`` from its task files.

    Raises:
        InvalidCycleStateError: reviews exist without plans, or a review is
            ahead of the latest plan.
    """
    plans: dict[int, str] = {}
    reviews: dict[int, str] = {}
    for task_file in files:
        if task_file.task_name != task_name or task_file.cycle < 1:
            continue
        bucket = plans if task_file.type is TaskType.PLAN else reviews
        bucket.setdefault(task_file.cycle, task_file.file_name)

    if not plans and reviews:
        raise InvalidCycleStateError(
            f'No plan files found for task "{task_name}", but review files exist. '
            "This is an invalid state."
        )

    max_plan = max(plans, default=1)
    max_review = max(reviews, default=0)

    if max_review > max_plan:
        raise InvalidCycleStateError(
            f'Cycle order violation for task "{task_name}". '
            f"Review cycle ({max_review}) is ahead of plan cycle ({max_plan})."
        )

    return CycleState(
        task_name=task_name,
        max_plan=max_plan,
        max_review=max_review,
        plans=plans,
        reviews=reviews,
    )


def render_cycle_body(state: CycleState, reference_dir: str = "tasks") -> str:
    """Render the markdown body for the next document of ``state``."""
    is_plan = state.next_type is TaskType.PLAN
    heading = "Plan" if is_plan else "Review"
    prefix = reference_dir.rstrip("/")

    lines = [f"# {heading} cycle {state.next_cycle}", ""]
    if is_plan:
        lines.append(
            f"Improve the program based on the review of cycle {state.current_cycle} "
            "and record what was done in this file."
        )
    else:
        lines.append(
            f"Review the work done in cycle {state.current_cycle} "
            "and record your findings in this file."
        )
    lines.append("")
    lines.append(f"## {'Reviews' if is_plan else 'Work'} so far")

    for cycle in range(1, state.max_plan + 1):
        plan_file = state.plans.get(cycle)
        review_file = state.reviews.get(cycle)
        if plan_file:
            lines.append(f"### Cycle {cycle} plan")
            lines.append(f"{prefix}/{plan_file}" if prefix else plan_file)
        if review_file:
            lines.append(f"### Cycle {cycle} review")
            lines.append(f"{prefix}/{review_file}" if prefix else review_file)

    lines.extend(
        [
            "",
            f"## Cycle {state.next_cycle} {heading.lower()}",
            "",
            "Write here.",
            "",
        ]
    )
    return "\n".join(lines)


def advance_cycle(directory: Path, reference_dir: str = "tasks") -> CycleResult:
    """Write the next plan or review file for the most recently edited task.

    Raises:
        TaskAlreadyExistsError: the next file is already present; it is left
            untouched.
    """
    target = select_cycle_target(directory)
    try:
        state = compute_cycle_state(target.task_name, target.files)
        path = directory / state.next_file_name
        if path.exists():
            raise TaskAlreadyExistsError(path)
    except TaskCliError as exc:
        exc.skipped = target.skipped
        raise

    path.write_text(render_cycle_body(state, reference_dir), encoding="utf-8")
    logger.info("Created %s", path)
    return CycleResult(state=state, path=path, skipped=target.skipped)


PLAN_TEMPLATE = """# {task_name}

## Purpose
Describe the purpose of this task here.

## Instructions
Describe the concrete instructions here.

## Results
Record the results here.
"""


def validate_task_name(task_name: str) -> str:
    """Return ``task_name`` unchanged, or raise InvalidTaskNameError."""
    name = task_name
    if not name.strip():
        raise InvalidTaskNameError("Task name cannot be empty.")
    if name != name.strip():
        raise InvalidTaskNameError(f'Task name "{name}" must not start or end with whitespace.')
    if "/" in name or "\\" in name:
        raise InvalidTaskNameError(f'Task name "{name}" must not contain path separators.')
    if name in {".", "..", STASH_DIR} or DONE_DIR_PATTERN.match(name):
        raise InvalidTaskNameError(f'Task name "{name}" is reserved.')
    parsed = parse_task_file(encode(TaskType.PLAN, name, 1))
    if parsed is None or parsed.task_name != name:
        raise InvalidTaskNameError(f'Task name "{name}" cannot be encoded into a task filename.')
    return name


@dataclass(frozen=True)
class CreateResult:
    task_name: str
    path: Path
    stashed: list[TaskMoves] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "task_name": self.task_name,
            "path": str(self.path),
            "stashed": [moves.to_dict() for moves in self.stashed],
        }


def create_task(directory: Path, task_name: str = DEFAULT_TASK_NAME) -> CreateResult:
    """Stash every active task and start ``task_name`` at plan cycle 1.

    Nothing is moved when ``plan.<task_name>.1.md`` already exists.
    """
    name = validate_task_name(task_name)
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / encode(TaskType.PLAN, name, 1)
    if path.exists():
        raise TaskAlreadyExistsError(path)

    if name in list_stashed_task_names(directory):
        logger.warning("Task %s also has a stash slot; popping it later merges both", name)

    stashed = stash_tasks(directory)
    path.write_text(PLAN_TEMPLATE.format(task_name=name), encoding="utf-8")
    logger.info("Created %s", path)
    return CreateResult(task_name=name, path=path, stashed=stashed)


__all__ = [
    "PLAN_TEMPLATE",
    "CreateResult",
    "CycleResult",
    "CycleState",
    "CycleTarget",
    "advance_cycle",
    "compute_cycle_state",
    "create_task",
    "render_cycle_body",
    "select_cycle_target",
    "validate_task_name",
]
