# step_workflows/node.py
from __future__ import annotations

from typing import Dict, List

from ..dsl import task
from ..model import Task

DEFAULTS: Dict[str, str] = {
    "NPM_RUNNER": "pnpm",
}


def pnpm_tasks() -> List[Task]:
    return [
        task(
            "update",
            "$(NPM_RUNNER) run deps:update",
            description="Check for outdated dependencies and automatically update them using pnpm",
        ),
        task("install", "$(NPM_RUNNER) install", description="Install dependencies for documentation using pnpm"),
        task("docs-up", "$(NPM_RUNNER) dev", description="Start documentation server"),
        task("docs-build", "$(NPM_RUNNER) build", description="Build documentation"),
    ]
