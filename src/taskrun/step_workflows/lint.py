# step_workflows/lint.py
from __future__ import annotations

from typing import Dict, List

from ..dsl import task
from ..model import Task
from .docker import docker_run

# linters run in containers with the project mounted; output is teed to the log
DEFAULTS: Dict[str, str] = {
    "YAML_LINT_RUNNER": docker_run(
        "cytopia/yamllint:latest",
        "-f colored .",
        volumes=["$$(pwd):/data"],
    ),
    "ACTION_LINT_RUNNER": docker_run(
        "rhysd/actionlint:latest",
        "-color",
        volumes=["$$(pwd):/repo"],
        workdir="/repo",
    ),
    "MARKDOWN_LINT_RUNNER": docker_run(
        "davidanson/markdownlint-cli2-rules:latest",
        volumes=["$$(pwd):/app"],
        workdir="/app",
    ),
}


def lint_tasks() -> List[Task]:
    return [
        task(
            "lint",
            needs=["lint-yaml", "lint-actions"],
            description="Runs all linting commands",
        ),
        task(
            "lint-yaml",
            "$(YAML_LINT_RUNNER)",
            description="Lints yaml files inside project",
            tee=True,
        ),
        task(
            "lint-actions",
            "$(ACTION_LINT_RUNNER)",
            description="Lint all github actions",
            tee=True,
        ),
        task(
            "lint-md",
            "$(MARKDOWN_LINT_RUNNER)",
            description="Lint markdown files",
            tee=True,
        ),
    ]
