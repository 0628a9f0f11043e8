# src/taskrun/dsl.py
from __future__ import annotations

from typing import Iterable, List, Optional, Union

from .model import Action, Task


# ---------------------------------------------------------------------
# Command helper
# ---------------------------------------------------------------------

def sh(*commands: str) -> str:
    """Chain commands so the first failing one stops the rest."""
    parts = [c.strip() for c in commands if c and c.strip()]
    if not parts:
        raise ValueError("sh() needs at least one command")
    return " && ".join(parts)


# ---------------------------------------------------------------------
# Functional Task helper
# ---------------------------------------------------------------------

def task(
    name: str,
    action: Action = None,
    *,
    needs: Optional[Iterable[str]] = None,
    description: str | None = None,
    tee: bool = False,
    cwd: str | None = None,
) -> Task:
    if not name or not name.strip():
        raise ValueError("task() needs a name")
    needs_final = tuple(needs or ())
    if action is None and not needs_final:
        raise ValueError(f"task({name!r}) must have an action or needs")
    return Task(
        name=name,
        action=action,
        needs=needs_final,
        description=description,
        tee=tee,
        cwd=cwd,
    )


# ---------------------------------------------------------------------
# Builder API
# ---------------------------------------------------------------------

class TaskBuilder:
    def __init__(self, name: str):
        self.name = name
        self._action: Action = None
        self._needs: list[str] = []
        self._description: str | None = None
        self._tee = False
        self._cwd: str | None = None

    def depends_on(self, *task_names: str):
        self._needs.extend(task_names)
        return self

    def describe(self, text: str):
        self._description = text
        return self

    def runs(self, action: Action):
        self._action = action
        return self

    def tee(self, enabled: bool = True):
        self._tee = enabled
        return self

    def in_dir(self, cwd: str):
        self._cwd = cwd
        return self

    def build(self) -> Task:
        return task(
            self.name,
            self._action,
            needs=self._needs,
            description=self._description,
            tee=self._tee,
            cwd=self._cwd,
        )


def build(name: str) -> TaskBuilder:
    """Convenience: build('restart').depends_on('down', 'up').build()"""
    return TaskBuilder(name)


# ---------------------------------------------------------------------
# Task list helper
# ---------------------------------------------------------------------

def taskset(*items: Union[Task, Iterable[Task]]) -> List[Task]:
    """
    Flatten tasks and groups of tasks (as returned by the presets) into one
    list, keeping declaration order:

        def tasks():
            return taskset(
                docker.compose_tasks(),
                task("all", needs=["env", "up"]),
            )
    """
    out: List[Task] = []
    for item in items:
        if isinstance(item, Task):
            out.append(item)
        else:
            out.extend(item)
    return out
