# catalog.py
from __future__ import annotations

from typing import Iterable, Iterator, List

from .model import CatalogEntry, Task


class Catalog:
    """
    Documented tasks in registration order.

    Iterating starts over every time; the task sequence is copied on
    construction so later registrations don't leak into an existing catalog.
    """

    def __init__(self, tasks: Iterable[Task]):
        self._tasks: List[Task] = list(tasks)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return (
            CatalogEntry(t.name, t.description)
            for t in self._tasks
            if t.description
        )


def catalog(tasks: Iterable[Task]) -> Catalog:
    return Catalog(tasks)
