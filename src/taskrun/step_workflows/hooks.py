# step_workflows/hooks.py
from __future__ import annotations

from typing import Dict, List

from ..dsl import sh, task
from ..model import Task

DEFAULTS: Dict[str, str] = {
    "PRE_COMMIT": "pre-commit",
    "CZ_CONFIG": "./.github/.cz.config.js",
}


def git_tasks() -> List[Task]:
    return [
        task(
            "hooks",
            sh(
                "$(PRE_COMMIT) install",
                "$(PRE_COMMIT) install --hook-type commit-msg",
                "$(PRE_COMMIT) autoupdate",
            ),
            description="Install git hooks from pre-commit-config",
        ),
        task("commit", 'czg commit --config="$(CZ_CONFIG)"'),
    ]
