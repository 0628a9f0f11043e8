# model.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, NamedTuple, Optional, Tuple, Union

if TYPE_CHECKING:
    from .runner import TaskContext


class VariableSource(str, Enum):
    """Where a variable value came from, highest precedence first."""
    OVERRIDE = "override"
    FILE = "file"
    ENVIRONMENT = "environment"
    DEFAULT = "default"


@dataclass(frozen=True)
class Variable:
    name: str
    value: str
    source: VariableSource


Action = Union[str, Callable[["TaskContext"], Optional[int]], None]


@dataclass(frozen=True)
class Task:
    """
    A named unit of automation.

    `action` is a shell command (interpolated right before it runs), a
    callable receiving a TaskContext and returning an exit code, or None for
    tasks that only aggregate their `needs`.
    """
    name: str
    action: Action = None
    needs: Tuple[str, ...] = ()
    description: str | None = None

    # append combined output to the project log file
    tee: bool = False
    cwd: str | None = None

    @property
    def is_aggregate(self) -> bool:
        return self.action is None


class CatalogEntry(NamedTuple):
    name: str
    description: str


# ---------------------------------------------------------------------
# Materialize results
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Written:
    path: str


@dataclass(frozen=True)
class Skipped:
    path: str
    reason: str


@dataclass(frozen=True)
class Failed:
    path: str
    reason: str


MaterializeResult = Union[Written, Skipped, Failed]
