"""Layered project configuration for plsr-task.

The only option is ``task-dir``. Layers are applied in order, later ones
winning:

1. built-in default (``tasks``)
2. ``package.json`` -> ``"plsr-task"`` section
3. ``pyproject.toml`` -> ``[tool.plsr-task]`` table
4. ``.plsr-task.yaml`` at the project root
5. ``PLSR_TASK_DIR`` environment variable
6. ``--task-dir`` command-line option
"""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from ruamel.yaml import YAML

from plsr_task.tasks.errors import TaskCliError

from .constants import DEFAULT_TASK_DIR

SECTION_NAME = "plsr-task"
TASK_DIR_KEY = "task-dir"
YAML_CONFIG_FILENAME = ".plsr-task.yaml"
ENV_TASK_DIR = "PLSR_TASK_DIR"

ORIGIN_DEFAULT = "default"
ORIGIN_ENV = "env"
ORIGIN_CLI = "cli"


class ConfigError(TaskCliError):
    """Raised when a configuration file cannot be parsed."""


@dataclass(frozen=True, slots=True)
class TaskConfig:
    """Resolved plsr-task configuration."""

    task_dir: str = DEFAULT_TASK_DIR
    origin: str = ORIGIN_DEFAULT

    def to_dict(self) -> dict[str, str]:
        return {TASK_DIR_KEY: self.task_dir, "origin": self.origin}


def _section_task_dir(section: Any) -> str | None:
    if not isinstance(section, Mapping):
        return None
    value = section.get(TASK_DIR_KEY)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _read_package_json(path: Path) -> str | None:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(payload, dict):
        return None
    return _section_task_dir(payload.get(SECTION_NAME))


def _read_pyproject(path: Path) -> str | None:
    try:
        with path.open("rb") as fh:
            payload = tomllib.load(fh)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    tool = payload.get("tool")
    if not isinstance(tool, Mapping):
        return None
    return _section_task_dir(tool.get(SECTION_NAME))


def _read_yaml(path: Path) -> str | None:
    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    except Exception as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    # Accept both a flat file and one nested under the section name.
    if isinstance(payload, Mapping) and SECTION_NAME in payload:
        return _section_task_dir(payload[SECTION_NAME])
    return _section_task_dir(payload)


_FILE_LAYERS = (
    ("package.json", _read_package_json),
    ("pyproject.toml", _read_pyproject),
    (YAML_CONFIG_FILENAME, _read_yaml),
)


def load_config(
    project_root: Path,
    environ: Mapping[str, str] | None = None,
    task_dir_override: str | None = None,
) -> TaskConfig:
    """Resolve configuration for ``project_root`` through every layer."""
    config = TaskConfig()

    for filename, reader in _FILE_LAYERS:
        path = project_root / filename
        if not path.is_file():
            continue
        task_dir = reader(path)
        if task_dir:
            config = replace(config, task_dir=task_dir, origin=filename)

    env = os.environ if environ is None else environ
    env_value = (env.get(ENV_TASK_DIR) or "").strip()
    if env_value:
        config = replace(config, task_dir=env_value, origin=ORIGIN_ENV)

    if task_dir_override and task_dir_override.strip():
        config = replace(config, task_dir=task_dir_override.strip(), origin=ORIGIN_CLI)

    return config


def resolve_task_dir(config: TaskConfig, project_root: Path) -> Path:
    """Absolute path of the configured task directory."""
    return (project_root / config.task_dir).resolve()


def reference_dir(config: TaskConfig, project_root: Path) -> str:
    """Task directory as written in generated file references."""
    task_dir = resolve_task_dir(config, project_root)
    try:
        return task_dir.relative_to(project_root.resolve()).as_posix()
    except ValueError:
        return task_dir.as_posix()


__all__ = [
    "ConfigError",
    "ENV_TASK_DIR",
    "TaskConfig",
    "load_config",
    "reference_dir",
    "resolve_task_dir",
]
