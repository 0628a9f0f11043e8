# dag.py
from __future__ import annotations

from typing import Iterable, List, Mapping, Set

from .errors import CyclicDependencyError, UnknownTaskError
from .model import Task


def execution_order(tasks: Mapping[str, Task], targets: Iterable[str]) -> List[str]:
    """
    Resolve the full dependency chain of `targets`.

    Depth-first, post-order: a task's `needs` run before it, in declared
    order. Visited names are memoised across all targets, so a task reachable
    through several paths (or requested twice) appears once.

    Raises UnknownTaskError / CyclicDependencyError before anything runs.
    """
    order: List[str] = []
    done: Set[str] = set()
    # names on the current DFS path, in order (for the cycle report)
    path: List[str] = []
    on_path: Set[str] = set()

    def visit(name: str, required_by: str | None) -> None:
        if name in done:
            return
        if name in on_path:
            start = path.index(name)
            raise CyclicDependencyError(cycle=path[start:] + [name])
        task = tasks.get(name)
        if task is None:
            raise UnknownTaskError(name=name, known=list(tasks), required_by=required_by)

        path.append(name)
        on_path.add(name)
        for dep in task.needs:
            visit(dep, name)
        path.pop()
        on_path.discard(name)

        done.add(name)
        order.append(name)

    for target in targets:
        visit(target, None)

    return order
