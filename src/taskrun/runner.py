# runner.py
from __future__ import annotations

import os
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from .catalog import Catalog, catalog
from .config import ProjectConfig, Taskfile
from .dag import execution_order
from .errors import TaskFailedError
from .model import Task
from .ui.console import Console, get_console
from .variables import VariableResolver

# one task at a time, each to completion; the first failure aborts the chain


TOOL_HINTS = {
    "docker": "Install Docker and ensure the daemon is running.",
    "pnpm": "Install pnpm (e.g., corepack enable pnpm) or fix PATH.",
    "npm": "Install Node.js (includes npm) or fix PATH.",
    "pre-commit": "Install pre-commit (e.g., pip install pre-commit).",
    "czg": "Install czg (e.g., pnpm add -g czg).",
    "composer": "Install composer or run it through the app container.",
}

COMMAND_NOT_FOUND = 127


@dataclass
class TaskContext:
    """What a python action gets to work with."""
    task: Task
    resolver: VariableResolver
    config: ProjectConfig
    console: Console


def tool_hint(command: str) -> Optional[str]:
    try:
        words = shlex.split(command)
    except ValueError:
        words = command.split()
    if not words:
        return None
    tool = os.path.basename(words[0])
    return TOOL_HINTS.get(tool, f"Install {tool} or fix PATH.")


def _action_label(action) -> str:
    label = getattr(action, "label", None) or getattr(action, "__name__", None)
    return f"<python: {label or type(action).__name__}>"


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def _run_command(
    command: str,
    *,
    cwd: Path,
    env: Mapping[str, str],
    console: Console,
    logfile: str | None = None,
) -> int:
    """
    Run `command` through the shell and return its exit status.

    Without a logfile the child inherits the terminal (interactive tasks such
    as `logs -f` or `ssh` need it). With one, combined stdout/stderr is
    streamed to the console and appended to the log.
    """
    if logfile is None:
        proc = subprocess.run(command, shell=True, cwd=str(cwd), env=dict(env))
        return proc.returncode

    log_path = Path(logfile)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as log, subprocess.Popen(
        command,
        shell=True,
        cwd=str(cwd),
        env=dict(env),
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        encoding="utf-8",
        errors="replace",
    ) as proc:
        assert proc.stdout is not None
        for line in proc.stdout:
            console.print_output(line)
            log.write(line)
        return proc.wait()


class TaskRegistry:
    """
    Static set of tasks plus the configuration they run against.

    Tasks are registered once at startup. Every run works on its own resolver
    (the registry's, with that run's overrides layered on top).
    """

    def __init__(
        self,
        resolver: VariableResolver | None = None,
        config: ProjectConfig | None = None,
        console: Console | None = None,
    ):
        self._tasks: Dict[str, Task] = {}
        self.resolver = resolver or VariableResolver()
        self.config = config or ProjectConfig()
        self.console = console or get_console()

    @classmethod
    def from_taskfile(
        cls,
        taskfile: Taskfile,
        *,
        overrides: Optional[Mapping[str, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
        console: Console | None = None,
    ) -> "TaskRegistry":
        resolver = VariableResolver.from_sources(
            defaults=taskfile.variables,
            env_file=taskfile.project.env_path,
            overrides=overrides,
            environ=os.environ if environ is None else environ,
        )
        registry = cls(resolver=resolver, config=taskfile.project, console=console)
        for task in taskfile.tasks:
            registry.register(task)
        return registry

    # ---- registration ----

    def register(self, task: Task) -> Task:
        if task.name in self._tasks:
            raise ValueError(f"Duplicate task name: {task.name}")
        self._tasks[task.name] = task
        return task

    def __contains__(self, name: str) -> bool:
        return name in self._tasks

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks.values())

    def catalog(self) -> Catalog:
        return catalog(self._tasks.values())

    def logfile(self, resolver: VariableResolver | None = None) -> str:
        value = (resolver or self.resolver).get("LOGFILE")
        return value or self.config.default_logfile()

    # ---- running ----

    def plan(self, *names: str) -> List[str]:
        return execution_order(self._tasks, names)

    def run(
        self,
        name: str,
        overrides: Optional[Mapping[str, str]] = None,
        *,
        dry_run: bool = False,
    ) -> Dict[str, str]:
        return self.run_many([name], overrides, dry_run=dry_run)

    def run_many(
        self,
        names: Iterable[str],
        overrides: Optional[Mapping[str, str]] = None,
        *,
        dry_run: bool = False,
    ) -> Dict[str, str]:
        """
        Run the tasks in `names` with their dependencies.

        Returns {task: status} in execution order. The plan is computed
        first, so unknown tasks and cycles fail before anything runs.
        """
        order = self.plan(*names)
        resolver = self.resolver.with_overrides(overrides)
        self.console.print_debug(f"plan: {' -> '.join(order)}")

        env: Dict[str, str] | None = None
        results: Dict[str, str] = {}
        for name in order:
            task = self._tasks[name]
            if isinstance(task.action, str) and env is None and not dry_run:
                env = os.environ.copy()
                env.update(resolver.exported(
                    on_error=lambda e: self.console.print_debug(f"not exported: {e}")
                ))
            results[name] = self._execute(task, resolver, env or {}, dry_run)
        return results

    def _execute(
        self,
        task: Task,
        resolver: VariableResolver,
        env: Mapping[str, str],
        dry_run: bool,
    ) -> str:
        if task.action is None:
            return "dry-run" if dry_run else "ok"

        if callable(task.action):
            if dry_run:
                self.console.print_dry_run(task.name, _action_label(task.action))
                return "dry-run"
            self.console.print_task_start(task.name)
            ctx = TaskContext(
                task=task,
                resolver=resolver,
                config=self.config,
                console=self.console,
            )
            code = task.action(ctx) or 0
            if code != 0:
                raise TaskFailedError(task=task.name, exit_code=code)
            return "ok"

        command = resolver.interpolate(task.action, task=task.name)
        if dry_run:
            self.console.print_dry_run(task.name, command)
            return "dry-run"

        cwd = (self.config.root_dir / (task.cwd or ".")).resolve()
        if not cwd.exists():
            raise FileNotFoundError(f"[{task.name}] cwd not found: {cwd}")

        self.console.print_task_start(task.name, command)
        code = _run_command(
            command,
            cwd=cwd,
            env=env,
            console=self.console,
            logfile=self.logfile(resolver) if task.tee else None,
        )
        if code != 0:
            raise TaskFailedError(
                task=task.name,
                exit_code=code,
                command=command,
                hint=tool_hint(command) if code == COMMAND_NOT_FOUND else None,
            )
        return "ok"
