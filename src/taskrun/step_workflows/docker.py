# step_workflows/docker.py
from __future__ import annotations

import shlex
from typing import Dict, List

from ..dsl import task
from ..model import Task

DEFAULTS: Dict[str, str] = {
    # BuildKit for faster, cacheable image builds
    "DOCKER_BUILDKIT": "1",
    "DOCKER": "docker",
    "DOCKER_COMPOSE": "$(DOCKER) compose",
    "APP_RUNNER": "$(DOCKER_COMPOSE) run --rm --no-deps app",
    "APP_COMPOSER": "$(APP_RUNNER) composer",
}

# "-it" only when attached to a terminal; $$ leaves the substitution to the shell
TTY_FLAG = '$$(tty -s && echo "-it" || echo)'


# ---------------------------------------------------------------------
# Docker command helper
# ---------------------------------------------------------------------

def docker_run(
    image: str,
    args: str | None = None,
    *,
    volumes: List[str] | None = None,
    workdir: str | None = None,
    env: Dict[str, str] | None = None,
    tty: bool = True,
) -> str:
    """Build a `docker run --rm` command line for a throwaway container."""
    cmd = ["$(DOCKER) run --rm"]
    if tty:
        cmd.append(TTY_FLAG)

    for vol in volumes or []:
        cmd.append(f"-v {vol}")

    if workdir:
        cmd.append(f"--workdir {workdir}")

    for key, value in (env or {}).items():
        cmd.append(f"--env {key}={shlex.quote(value)}")

    cmd.append(image)
    if args:
        cmd.append(args)
    return " ".join(cmd)


# ---------------------------------------------------------------------
# Compose lifecycle tasks
# ---------------------------------------------------------------------

def compose_tasks() -> List[Task]:
    return [
        # up/down stay out of the help menu; restart documents them
        task("up", "$(DOCKER_COMPOSE) up --remove-orphans -d"),
        task("down", "$(DOCKER_COMPOSE) down --remove-orphans --volumes"),
        task("restart", needs=["down", "up"], description="Runs down and up commands"),
        task(
            "clean",
            "$(DOCKER_COMPOSE) rm --force --stop",
            description="Stops containers if required and removes from system",
        ),
        task("ps", "$(DOCKER_COMPOSE) ps", description="List running project containers"),
        task(
            "logs",
            "$(DOCKER_COMPOSE) logs -f",
            description="Show project docker logs with follow up mode enabled",
        ),
        task("pull", "$(DOCKER_COMPOSE) pull", description="Pull and update docker images in this project"),
        task("ssh", "$(APP_RUNNER) sh", description="Login inside running docker container"),
    ]
