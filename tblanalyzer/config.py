"""Task configuration loading and validation.

Config file (YAML):

    output_dir: outputs
    workers: 8            # optional
    table_name: stem      # optional: stem | basename
    tasks:
      - name: warehouse
        dirs: [/data/a, /data/b]
        recursive: true   # optional, default false

Priority for ``workers`` (highest to lowest):
1. --workers on the command line
2. TBLANALYZER_WORKERS environment variable
3. The config file
4. min(8, cpu count)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from tblanalyzer.exceptions import ConfigInvalidError
from tblanalyzer.indexer.core import TABLE_NAME_RULES
from tblanalyzer.models import Task
from tblanalyzer.utils.constants import ENV_WORKERS, MAX_DEFAULT_WORKERS


def default_workers() -> int:
    return min(MAX_DEFAULT_WORKERS, os.cpu_count() or 4)


@dataclass(frozen=True)
class AnalyzerConfig:
    """Validated run configuration."""

    output_dir: Path
    tasks: tuple[Task, ...]
    workers: int
    table_name: str = "stem"

    def select(self, names: list[str] | tuple[str, ...]) -> tuple[Task, ...]:
        """Return the named tasks in configured order; all tasks if none named.

        Raises:
            ConfigInvalidError: If a name matches no configured task.
        """
        if not names:
            return self.tasks
        known = {task.name for task in self.tasks}
        unknown = sorted(set(names) - known)
        if unknown:
            raise ConfigInvalidError(
                f"Unknown task(s): {', '.join(unknown)} (configured: {', '.join(sorted(known))})"
            )
        wanted = set(names)
        return tuple(task for task in self.tasks if task.name in wanted)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigInvalidError(message)


def _parse_workers(value: Any, source: str) -> int:
    if isinstance(value, bool):
        raise ConfigInvalidError(f"{source}: workers must be an integer >= 1, got {value!r}")
    try:
        workers = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigInvalidError(f"{source}: workers must be an integer >= 1, got {value!r}") from e
    _require(workers >= 1, f"{source}: workers must be an integer >= 1, got {value!r}")
    return workers


def _parse_task(raw: Any, position: int) -> Task:
    where = f"tasks[{position}]"
    _require(isinstance(raw, dict), f"{where}: expected a mapping, got {type(raw).__name__}")

    name = raw.get("name")
    _require(isinstance(name, str) and name.strip() != "", f"{where}.name: must be a non-empty string")
    name = name.strip()
    # The name becomes a directory under output_dir
    _require(
        name not in (".", "..") and "/" not in name and "\\" not in name,
        f"{where}.name: {name!r} must be a single path component",
    )

    dirs = raw.get("dirs")
    if isinstance(dirs, str):
        dirs = [dirs]
    _require(isinstance(dirs, list) and len(dirs) > 0, f"{where}.dirs: must be a non-empty list")
    for i, directory in enumerate(dirs):
        _require(
            isinstance(directory, str) and directory.strip() != "",
            f"{where}.dirs[{i}]: must be a non-empty string",
        )

    recursive = raw.get("recursive", False)
    _require(isinstance(recursive, bool), f"{where}.recursive: must be true or false")

    unknown = sorted(set(raw) - {"name", "dirs", "recursive"})
    _require(not unknown, f"{where}: unknown key(s): {', '.join(unknown)}")

    return Task(name=name, directories=tuple(d.strip() for d in dirs), recursive=recursive)


def parse_config(data: Any, source: str = "<config>") -> AnalyzerConfig:
    """Validate a loaded config mapping.

    Args:
        data: Result of ``yaml.safe_load``
        source: Label used in error messages

    Raises:
        ConfigInvalidError: On the first invalid field.
    """
    _require(isinstance(data, dict), f"{source}: expected a mapping at the top level")

    output_dir = data.get("output_dir")
    _require(
        isinstance(output_dir, str) and output_dir.strip() != "",
        f"{source}: output_dir must be a non-empty string",
    )

    raw_tasks = data.get("tasks")
    _require(isinstance(raw_tasks, list) and len(raw_tasks) > 0, f"{source}: tasks must be a non-empty list")
    tasks = tuple(_parse_task(raw, i) for i, raw in enumerate(raw_tasks))

    seen: set[str] = set()
    for task in tasks:
        _require(task.name not in seen, f"{source}: duplicate task name {task.name!r}")
        seen.add(task.name)

    table_name = data.get("table_name", "stem")
    _require(
        table_name in TABLE_NAME_RULES,
        f"{source}: table_name must be one of {', '.join(TABLE_NAME_RULES)}, got {table_name!r}",
    )

    if os.environ.get(ENV_WORKERS):
        workers = _parse_workers(os.environ[ENV_WORKERS], ENV_WORKERS)
    elif "workers" in data:
        workers = _parse_workers(data["workers"], source)
    else:
        workers = default_workers()

    return AnalyzerConfig(
        output_dir=Path(output_dir.strip()),
        tasks=tasks,
        workers=workers,
        table_name=table_name,
    )


def load_config(path: str | Path) -> AnalyzerConfig:
    """Load and validate a YAML config file.

    Raises:
        ConfigInvalidError: If the file is missing, unreadable, not valid
            YAML or fails validation.
    """
    config_path = Path(path)
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigInvalidError(f"Config file not found: {config_path}") from e
    except OSError as e:
        raise ConfigInvalidError(f"Cannot read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigInvalidError(f"Invalid YAML in {config_path}: {e}") from e

    return parse_config(data, source=str(config_path))
