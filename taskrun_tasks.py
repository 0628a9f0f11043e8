# taskrun_tasks.py
# Tasks for the documentation site: containers, pnpm, hooks, linting and the
# PHP test toolchain running inside the app container.
from __future__ import annotations

from taskrun.config import ProjectConfig
from taskrun.dsl import task, taskset
from taskrun.step_workflows import defaults, docker, env, hooks, lint, node, test

PROJECT = ProjectConfig(
    package="active-record",
    package_url="github.com/cycle/next-docs-active-record",
    author="Andrij Orlenko (github.com/lotyp)",
    org="cycle (github.com/cycle)",
    logfile="/tmp/next-docs-active-record.log",
    usage_hint="Setups dependencies for fresh-project, like composer install, git hooks and others...",
)

VARIABLES = {
    **defaults(),
    "COMPOSE_PROJECT_NAME": "next-docs-active-record",
}


def tasks():
    return taskset(
        # default: `taskrun` with no arguments
        task("all", needs=["env", "install", "hooks", "up"]),
        env.env_tasks(),
        docker.compose_tasks(),
        node.pnpm_tasks(),
        hooks.git_tasks(),
        lint.lint_tasks(),
        test.php_tasks(),
    )
