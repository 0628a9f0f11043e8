# errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


class TaskrunError(Exception):
    """Base class for every error that terminates a taskrun invocation."""

    title = "Task run failed"
    suggestion: Optional[str] = None


@dataclass
class UnresolvedVariableError(TaskrunError):
    """A referenced variable has no override, file entry, environment value or default."""
    name: str
    task: str | None = None

    title = "Unresolved variable"

    def __str__(self) -> str:
        where = f" (referenced by task '{self.task}')" if self.task else ""
        return f"Variable '{self.name}' is not defined{where}"

    @property
    def suggestion(self) -> str:
        return (
            f"Declare a default for {self.name}, add it to the .env file, "
            f"or pass it on the command line:\n  taskrun run <task> {self.name}=<value>"
        )


@dataclass
class RecursiveVariableError(UnresolvedVariableError):
    chain: List[str] = field(default_factory=list)

    title = "Recursive variable"

    def __str__(self) -> str:
        return f"Variable '{self.name}' references itself: {' -> '.join(self.chain)}"

    @property
    def suggestion(self) -> str:
        return "Break the cycle by giving one of the variables a literal value."


@dataclass
class UnknownTaskError(TaskrunError):
    name: str
    known: List[str] = field(default_factory=list)
    required_by: str | None = None

    title = "Unknown task"

    def __str__(self) -> str:
        msg = f"No task named '{self.name}'"
        if self.required_by:
            msg += f" (needed by '{self.required_by}')"
        return msg

    @property
    def suggestion(self) -> str:
        if not self.known:
            return "Run `taskrun help` to list available tasks."
        return "Known tasks: " + ", ".join(sorted(self.known))


@dataclass
class CyclicDependencyError(TaskrunError):
    cycle: List[str]

    title = "Dependency cycle"

    def __str__(self) -> str:
        return "Task dependencies form a cycle: " + " -> ".join(self.cycle)


@dataclass
class TaskFailedError(TaskrunError):
    """An action exited non-zero; the rest of the chain is aborted."""
    task: str
    exit_code: int
    command: str | None = None
    hint: str | None = None

    title = "Task failed"

    def __str__(self) -> str:
        msg = f"Task '{self.task}' failed (exit={self.exit_code})"
        if self.command:
            msg += f": {self.command}"
        return msg

    @property
    def suggestion(self) -> Optional[str]:
        return self.hint
