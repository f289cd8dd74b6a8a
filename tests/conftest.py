from __future__ import annotations

import os
from itertools import count
from pathlib import Path
from typing import Callable

import pytest

from plsr_task.core.config import ENV_TASK_DIR

# Base mtime (ns) for files written through ``write_file``; each call is 1s newer.
_BASE_MTIME_NS = 1_700_000_000 * 1_000_000_000


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ENV_TASK_DIR, raising=False)


@pytest.fixture()
def task_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "tasks"
    directory.mkdir()
    return directory


@pytest.fixture()
def write_file() -> Callable[..., Path]:
    """Write a file with a strictly increasing modification time."""
    ticks = count()

    def _write(directory: Path, name: str, content: str = "") -> Path:
        path = directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content or f"{name}\n", encoding="utf-8")
        stamp = _BASE_MTIME_NS + next(ticks) * 1_000_000_000
        os.utime(path, ns=(stamp, stamp))
        return path

    return _write


def snapshot(directory: Path) -> dict[str, str]:
    """Relative path -> content for every file below ``directory``."""
    return {
        path.relative_to(directory).as_posix(): path.read_text(encoding="utf-8")
        for path in sorted(directory.rglob("*"))
        if path.is_file()
    }


@pytest.fixture()
def tree() -> Callable[[Path], dict[str, str]]:
    return snapshot
