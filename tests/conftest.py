from __future__ import annotations

from pathlib import Path
from typing import Callable, List

import pytest

from taskrun.config import ProjectConfig
from taskrun.runner import TaskContext, TaskRegistry
from taskrun.ui.console import Console
from taskrun.variables import VariableResolver


@pytest.fixture()
def console() -> Console:
    return Console(debug=False, color=False)


@pytest.fixture()
def calls() -> List[str]:
    """Records which python actions ran, in order."""
    return []


@pytest.fixture()
def recorder(calls: List[str]) -> Callable[[str], Callable[[TaskContext], int]]:
    def make(label: str, exit_code: int = 0) -> Callable[[TaskContext], int]:
        def action(ctx: TaskContext) -> int:
            calls.append(label)
            return exit_code

        action.__name__ = f"record_{label}"
        return action

    return make


@pytest.fixture()
def make_registry(tmp_path: Path, console: Console) -> Callable[..., TaskRegistry]:
    """Registry rooted in tmp_path with no process environment leaking in."""

    def make(*tasks, defaults=None, file_values=None, **config) -> TaskRegistry:
        resolver = VariableResolver(defaults=defaults, file_values=file_values, environ={})
        config.setdefault("root", tmp_path)
        config.setdefault("logfile", str(tmp_path / "taskrun.log"))
        registry = TaskRegistry(resolver=resolver, config=ProjectConfig(**config), console=console)
        for task in tasks:
            registry.register(task)
        return registry

    return make
