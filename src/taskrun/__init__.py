from .catalog import Catalog, catalog
from .config import ProjectConfig, Taskfile, load_taskfile
from .dsl import TaskBuilder, build, sh, task, taskset
from .envfile import materialize
from .errors import (
    CyclicDependencyError,
    RecursiveVariableError,
    TaskFailedError,
    TaskrunError,
    UnknownTaskError,
    UnresolvedVariableError,
)
from .model import Failed, Skipped, Task, Variable, VariableSource, Written
from .runner import TaskContext, TaskRegistry
from .variables import VariableResolver

__all__ = [
    "task", "sh", "taskset", "TaskBuilder", "build",
    "Task", "Variable", "VariableSource", "Written", "Skipped", "Failed",
    "TaskRegistry", "TaskContext", "VariableResolver", "materialize",
    "Catalog", "catalog", "ProjectConfig", "Taskfile", "load_taskfile",
    "TaskrunError", "UnresolvedVariableError", "RecursiveVariableError",
    "UnknownTaskError", "CyclicDependencyError", "TaskFailedError",
]
