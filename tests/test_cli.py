from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from taskrun.cli import cli

TASKFILE = textwrap.dedent(
    '''
    from pathlib import Path

    from taskrun.config import ProjectConfig
    from taskrun.dsl import task

    PROJECT = ProjectConfig(
        package="docs",
        author="Docs Team",
        default_task="hello",
        logfile=str(Path(__file__).parent / "taskrun.log"),
        usage_hint="Say hello",
    )
    VARIABLES = {"GREETING": "hello", "MODE": "slow"}


    def tasks():
        return [
            task("hello", "echo $(GREETING) > hello.txt", description="Write a greeting"),
            task("fast", 'test "$(MODE)" = fast'),
            task("fail", "exit 5", description="Always fails"),
            task("after", "touch after.txt"),
            task("chain", needs=["hello", "fail", "after"]),
            task("loop", needs=["loop"]),
            task("ghost", "$(NOT_DECLARED) up"),
        ]
    '''
)


@pytest.fixture(autouse=True)
def no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture()
def taskfile(tmp_path: Path) -> Path:
    path = tmp_path / "taskrun_tasks.py"
    path.write_text(TASKFILE, encoding="utf-8")
    return path


def invoke(taskfile: Path, *args: str):
    return CliRunner().invoke(cli, ["--taskfile", str(taskfile), *args])


def test_help_lists_documented_tasks(taskfile: Path) -> None:
    result = invoke(taskfile, "help")
    assert result.exit_code == 0, result.output
    assert "Management commands for docs:" in result.output
    assert "Say hello" in result.output
    assert f"    {'taskrun run hello':<29} Write a greeting\n" in result.output
    assert "Always fails" in result.output
    assert "taskrun run fast" not in result.output
    assert f"Logs are stored in      {taskfile.parent / 'taskrun.log'}" in result.output
    assert "Docs Team" in result.output


def test_run_with_override(taskfile: Path) -> None:
    result = invoke(taskfile, "run", "hello", "GREETING=hi")
    assert result.exit_code == 0, result.output
    assert (taskfile.parent / "hello.txt").read_text().strip() == "hi"
    assert "hello: SUCCESS" in result.output


def test_override_changes_the_outcome(taskfile: Path) -> None:
    assert invoke(taskfile, "run", "fast").exit_code == 1
    assert invoke(taskfile, "run", "fast", "MODE=fast").exit_code == 0


def test_failing_task_exit_code_is_propagated(taskfile: Path) -> None:
    result = invoke(taskfile, "run", "fail")
    assert result.exit_code == 5
    assert "Task failed" in result.output
    assert "exit=5" in result.output


def test_failure_stops_the_chain(taskfile: Path) -> None:
    result = invoke(taskfile, "run", "chain")
    assert result.exit_code == 5
    assert (taskfile.parent / "hello.txt").exists()
    assert not (taskfile.parent / "after.txt").exists()


def test_unknown_task(taskfile: Path) -> None:
    result = invoke(taskfile, "run", "nope")
    assert result.exit_code == 1
    assert "Unknown task" in result.output
    assert "Known tasks:" in result.output


def test_cycle(taskfile: Path) -> None:
    result = invoke(taskfile, "run", "loop")
    assert result.exit_code == 1
    assert "loop -> loop" in result.output


def test_unresolved_variable(taskfile: Path) -> None:
    result = invoke(taskfile, "run", "ghost")
    assert result.exit_code == 1
    assert "Variable 'NOT_DECLARED' is not defined (referenced by task 'ghost')" in result.output


def test_bad_override(taskfile: Path) -> None:
    result = invoke(taskfile, "run", "hello", "=oops")
    assert result.exit_code == 2
    assert "Invalid override" in result.output


def test_no_command_runs_default_task(taskfile: Path) -> None:
    result = invoke(taskfile)
    assert result.exit_code == 0, result.output
    assert (taskfile.parent / "hello.txt").read_text().strip() == "hello"


def test_dry_run(taskfile: Path) -> None:
    result = invoke(taskfile, "run", "hello", "--dry-run")
    assert result.exit_code == 0, result.output
    assert "echo hello > hello.txt" in result.output
    assert not (taskfile.parent / "hello.txt").exists()


def test_plan(taskfile: Path) -> None:
    result = invoke(taskfile, "plan", "chain")
    assert result.exit_code == 0, result.output
    assert result.output.split() == ["1.", "hello", "2.", "fail", "3.", "after", "4.", "chain"]


def test_discovers_default_taskfile(taskfile: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (taskfile.parent / "other_tasks.py").write_text("TASKS = []\n", encoding="utf-8")
    monkeypatch.chdir(taskfile.parent)
    result = CliRunner().invoke(cli, ["plan", "hello"])
    assert result.exit_code == 0, result.output
    assert "hello" in result.output


def test_no_taskfile(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["help"])
    assert result.exit_code == 1
    assert "No taskfile found" in result.output


def test_ambiguous_taskfiles(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("site_tasks.py", "docs_tasks.py"):
        (tmp_path / name).write_text("TASKS = []\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["help"])
    assert result.exit_code == 1
    assert "Multiple taskfiles found" in result.output


def test_broken_taskfile(tmp_path: Path) -> None:
    path = tmp_path / "taskrun_tasks.py"
    path.write_text("TASKS = 'up'\n", encoding="utf-8")
    result = invoke(path, "help")
    assert result.exit_code == 1
    assert "Failed to load taskfile" in result.output
