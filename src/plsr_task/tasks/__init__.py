"""Task directory domain: filename codec, index, cycle engine, and archive mover."""

from .archive import (
    DoneResult,
    MoveRecord,
    PopResult,
    SelectionProvider,
    TaskMoves,
    complete_tasks,
    move_entry,
    pop_task,
    stash_tasks,
)
from .cycle import (
    CreateResult,
    CycleResult,
    CycleState,
    advance_cycle,
    compute_cycle_state,
    create_task,
    render_cycle_body,
    select_cycle_target,
)
from .errors import (
    InvalidCycleStateError,
    InvalidTaskNameError,
    NoEligibleFilesError,
    StashEntryNotFoundError,
    TaskAlreadyExistsError,
    TaskCliError,
    TaskNotFoundError,
)
from .naming import TaskFile, TaskType, decode_cycle, decode_task_name, encode

__all__ = [
    "CreateResult",
    "CycleResult",
    "CycleState",
    "DoneResult",
    "InvalidCycleStateError",
    "InvalidTaskNameError",
    "MoveRecord",
    "NoEligibleFilesError",
    "PopResult",
    "SelectionProvider",
    "StashEntryNotFoundError",
    "TaskAlreadyExistsError",
    "TaskCliError",
    "TaskFile",
    "TaskMoves",
    "TaskNotFoundError",
    "TaskType",
    "advance_cycle",
    "complete_tasks",
    "compute_cycle_state",
    "create_task",
    "decode_cycle",
    "decode_task_name",
    "encode",
    "move_entry",
    "pop_task",
    "render_cycle_body",
    "select_cycle_target",
    "stash_tasks",
]
