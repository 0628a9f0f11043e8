from __future__ import annotations

import pytest

from taskrun.dsl import build, sh, task, taskset
from taskrun.model import Task


def test_task_normalises_needs_to_tuple() -> None:
    t = task("restart", needs=["down", "up"], description="Runs down and up commands")
    assert t == Task(name="restart", needs=("down", "up"), description="Runs down and up commands")
    assert t.is_aggregate


def test_task_needs_an_action_or_dependencies() -> None:
    with pytest.raises(ValueError):
        task("empty")
    with pytest.raises(ValueError):
        task("  ", "true")


def test_sh_chains_commands() -> None:
    assert sh("pre-commit install", "", "pre-commit autoupdate") == "pre-commit install && pre-commit autoupdate"
    with pytest.raises(ValueError):
        sh()


def test_builder() -> None:
    t = (
        build("lint-yaml")
        .runs("$(YAML_LINT_RUNNER)")
        .describe("Lints yaml files inside project")
        .depends_on("env")
        .tee()
        .in_dir("docs")
        .build()
    )
    assert t == Task(
        name="lint-yaml",
        action="$(YAML_LINT_RUNNER)",
        needs=("env",),
        description="Lints yaml files inside project",
        tee=True,
        cwd="docs",
    )


def test_taskset_flattens_groups_in_order() -> None:
    a, b, c = task("a", "a"), task("b", "b"), task("c", "c")
    assert taskset(a, [b, c]) == [a, b, c]
