# step_workflows/test.py
from __future__ import annotations

from typing import List

from ..dsl import task
from ..model import Task

# the PHP toolchain lives in the app container; see docker.DEFAULTS["APP_COMPOSER"]


def php_tasks() -> List[Task]:
    return [
        task(
            "infect",
            "$(APP_COMPOSER) infect",
            description="Runs mutation tests with infection/infection",
        ),
        task(
            "infect-ci",
            "$(APP_COMPOSER) infect:ci",
            description="Runs infection – mutation testing framework with github output (CI mode)",
        ),
        task("test", "$(APP_COMPOSER) test", description="Run project php-unit and pest tests"),
        task(
            "test-cc",
            "$(APP_COMPOSER) test:cc",
            description="Run project php-unit and pest tests in coverage mode and build report",
        ),
    ]
