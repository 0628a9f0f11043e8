# step_workflows/env.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from ..dsl import task
from ..envfile import materialize
from ..errors import UnresolvedVariableError
from ..model import Failed, Skipped, Task

if TYPE_CHECKING:
    from ..runner import TaskContext

# names substituted into .env.example; anything else in the template is copied as-is
EXPORT_VARS: Tuple[str, ...] = ("COMPOSE_PROJECT_NAME", "COMPOSER_AUTH")

DEFAULTS: Dict[str, str] = {
    "COMPOSER_AUTH": "",
}


@dataclass(frozen=True)
class MaterializeEnv:
    """Task action: render the env template into the env file."""
    only: Optional[Tuple[str, ...]] = EXPORT_VARS
    label: str = "materialize env file"

    def __call__(self, ctx: "TaskContext") -> int:
        force = ctx.resolver.flag("FORCE")
        output = ctx.config.env_path

        if force:
            ctx.console.print_warning(f"Force re-creating {output.name} file from example...")
        elif not output.exists():
            ctx.console.print_info(f"Creating {output.name} file from example")

        try:
            result = materialize(
                ctx.config.template_path,
                output,
                ctx.resolver,
                force=force,
                only=self.only,
            )
        except UnresolvedVariableError as e:
            if e.task is None:
                e.task = ctx.task.name
            raise

        if isinstance(result, Skipped):
            ctx.console.print_warning(result.reason)
            return 0
        if isinstance(result, Failed):
            ctx.console.print_error("Cannot create env file", result.reason)
            return 1

        ctx.console.print_info(f"Wrote {result.path}")
        return 0


def env_tasks(only: Optional[Tuple[str, ...]] = EXPORT_VARS) -> List[Task]:
    return [
        task(
            "env",
            MaterializeEnv(only=only),
            description="Generate .env file from example, use `taskrun run env FORCE=true`, to force re-create file",
        ),
    ]
