# config.py
from __future__ import annotations

import re
import runpy
import tempfile
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional

from .model import Task

DEFAULT_TASKFILE = "taskrun_tasks.py"


@dataclass(frozen=True)
class ProjectConfig:
    """
    Everything a run needs besides the tasks themselves.

    Paths are relative to `root`; `root` defaults to the taskfile's directory.
    """
    root: Optional[Path] = None
    env_file: str = ".env"
    env_template: str = ".env.example"
    logfile: Optional[str] = None      # LOGFILE variable takes precedence
    default_task: str = "all"

    # help footer
    package: Optional[str] = None
    package_url: Optional[str] = None
    author: Optional[str] = None
    org: Optional[str] = None
    usage_hint: Optional[str] = None

    @property
    def root_dir(self) -> Path:
        return (self.root or Path(".")).resolve()

    @property
    def env_path(self) -> Path:
        return self.root_dir / self.env_file

    @property
    def template_path(self) -> Path:
        return self.root_dir / self.env_template

    def default_logfile(self) -> str:
        if self.logfile:
            return self.logfile
        slug = re.sub(r"[^A-Za-z0-9_.-]+", "-", self.package or self.root_dir.name).strip("-")
        return str(Path(tempfile.gettempdir()) / f"{slug or 'taskrun'}.log")


@dataclass
class Taskfile:
    path: Path
    tasks: List[Task]
    variables: Dict[str, str] = field(default_factory=dict)
    project: ProjectConfig = field(default_factory=ProjectConfig)


# ----------------------------------------------------------------------
# Taskfile loading (local python file)
# ----------------------------------------------------------------------

def load_taskfile(path: str | Path) -> Taskfile:
    """
    Load tasks from a python file.

    The file must define either:
      - tasks() -> List[Task]
      - TASKS = [Task, ...]

    Optional:
      - VARIABLES = {"NAME": "default", ...}
      - PROJECT = ProjectConfig(...)
    """
    tf_path = Path(path).expanduser().resolve()
    if not tf_path.exists():
        raise FileNotFoundError(f"Taskfile not found: {tf_path}")
    if tf_path.suffix != ".py":
        raise ValueError(f"Taskfile must be a .py file, got: {tf_path.name}")

    globals_dict = runpy.run_path(str(tf_path), run_name=f"taskrun_taskfile_{tf_path.stem}")

    tasks = None
    if "tasks" in globals_dict and callable(globals_dict["tasks"]):
        tasks = globals_dict["tasks"]()
    elif "TASKS" in globals_dict:
        tasks = globals_dict["TASKS"]

    if not isinstance(tasks, list) or not all(isinstance(t, Task) for t in tasks):
        raise TypeError(
            "Taskfile must return/define a List[Task]. "
            "Define tasks() -> List[Task] or TASKS = [Task, ...]."
        )

    variables = globals_dict.get("VARIABLES", {}) or {}
    if not isinstance(variables, dict):
        raise TypeError("VARIABLES must be a dict of name -> default value")

    project = globals_dict.get("PROJECT") or ProjectConfig()
    if not isinstance(project, ProjectConfig):
        raise TypeError("PROJECT must be a taskrun.config.ProjectConfig")
    if project.root is None:
        project = replace(project, root=tf_path.parent)
    elif not project.root.is_absolute():
        project = replace(project, root=tf_path.parent / project.root)

    return Taskfile(
        path=tf_path,
        tasks=tasks,
        variables={str(k): str(v) for k, v in variables.items()},
        project=project,
    )


def find_taskfiles(directory: str | Path = ".") -> List[Path]:
    """Candidate taskfiles: taskrun_tasks.py first, then any other *_tasks.py."""
    current_dir = Path(directory)
    found: List[Path] = []

    default = current_dir / DEFAULT_TASKFILE
    if default.exists():
        found.append(default)

    for path in sorted(current_dir.glob("*_tasks.py")):
        if path != default:
            found.append(path)

    return found
