# cli.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List

import click

from taskrun.config import DEFAULT_TASKFILE, find_taskfiles, load_taskfile
from taskrun.errors import TaskFailedError, TaskrunError
from taskrun.runner import TaskRegistry
from taskrun.ui.console import Console, get_console, set_console
from taskrun.variables import split_invocation


def discover_taskfile(taskfile_arg: str | None) -> Path:
    """
    Discover the taskfile from the --taskfile argument or the working directory.

    Raises:
        SystemExit: If no taskfile (or more than one candidate) is found
    """
    console = get_console()

    if taskfile_arg:
        taskfile_path = Path(taskfile_arg)
        if not taskfile_path.exists() and taskfile_path.suffix != ".py":
            taskfile_path = Path(str(taskfile_path) + ".py")
        if not taskfile_path.exists():
            console.print_error(
                "Taskfile not found",
                f"Could not find taskfile: {taskfile_arg}",
                suggestion="Create a taskfile or specify a different path:\n  taskrun --taskfile my_tasks.py help",
            )
            sys.exit(1)
        return taskfile_path

    candidates = find_taskfiles(".")

    if not candidates:
        console.print_error(
            "No taskfile found",
            "Could not find any taskfile.",
            details=[
                "Looked for:",
                f"  {DEFAULT_TASKFILE}",
                "  *_tasks.py",
            ],
            suggestion=f"Create a taskfile:\n  {DEFAULT_TASKFILE}\n\nOr specify one explicitly:\n  taskrun --taskfile my_tasks.py help",
        )
        sys.exit(1)

    # the default name wins over other candidates
    if candidates[0].name == DEFAULT_TASKFILE:
        return candidates[0]

    if len(candidates) > 1:
        file_list = "\n".join(f"  {f}" for f in candidates)
        console.print_error(
            "Multiple taskfiles found",
            "Found multiple taskfiles. Please specify which one to use:",
            details=[file_list],
            suggestion=f"Specify a taskfile explicitly:\n  taskrun --taskfile {candidates[0].name} help",
        )
        sys.exit(1)

    return candidates[0]


def _exit_status(code: int) -> int:
    # killed by signal N -> 128 + N, like a shell reports it
    if code < 0:
        return 128 - code
    return code if code < 256 else 1


def _load_registry(ctx: click.Context) -> TaskRegistry:
    console = get_console()
    taskfile_path = discover_taskfile(ctx.obj.get("taskfile"))
    try:
        taskfile = load_taskfile(taskfile_path)
        registry = TaskRegistry.from_taskfile(taskfile, console=console)
    except (FileNotFoundError, TypeError, ValueError) as e:
        console.print_error(
            "Failed to load taskfile",
            f"Could not load tasks from {taskfile_path}",
            details=[str(e)],
        )
        if ctx.obj.get("debug", False):
            console.print_exception(e)
        sys.exit(1)
    console.print_debug(f"loaded {len(registry.tasks)} task(s) from {taskfile_path}")
    return registry


def _run_tasks(ctx: click.Context, names: List[str], overrides: Dict[str, str], dry_run: bool) -> None:
    console = get_console()
    registry = _load_registry(ctx)
    if not names:
        names = [registry.config.default_task]

    try:
        results = registry.run_many(names, overrides, dry_run=dry_run)
        console.print_results(results)
    except TaskFailedError as e:
        console.print_error(e.title, str(e), suggestion=e.suggestion)
        sys.exit(_exit_status(e.exit_code))
    except TaskrunError as e:
        console.print_error(e.title, str(e), suggestion=e.suggestion)
        sys.exit(1)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@click.group(invoke_without_command=True)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.option(
    "--taskfile",
    default=None,
    help=f"Taskfile path (defaults to {DEFAULT_TASKFILE} if present)",
)
@click.pass_context
def cli(ctx, debug, taskfile):
    """taskrun: project automation with variables, dependencies and self-documentation.

    Without a command, runs the taskfile's default task.
    """
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["taskfile"] = taskfile

    if ctx.invoked_subcommand is None:
        _run_tasks(ctx, [], {}, dry_run=False)


@cli.command()
@click.argument("args", nargs=-1)
@click.option("--dry-run", "-n", is_flag=True, default=False, help="Print commands without running them")
@click.pass_context
def run(ctx, args, dry_run):
    """Run TASK... with KEY=VALUE overrides, e.g. `taskrun run env FORCE=true`."""
    console = get_console()
    try:
        names, overrides = split_invocation(args)
    except ValueError as e:
        console.print_error("Invalid override", str(e), suggestion="Overrides look like KEY=VALUE")
        sys.exit(2)
    _run_tasks(ctx, names, overrides, dry_run)


@cli.command()
@click.argument("names", nargs=-1)
@click.pass_context
def plan(ctx, names):
    """Print the order TASK... (and their dependencies) would run in."""
    console = get_console()
    registry = _load_registry(ctx)
    try:
        order = registry.plan(*(names or [registry.config.default_task]))
    except TaskrunError as e:
        console.print_error(e.title, str(e), suggestion=e.suggestion)
        sys.exit(1)
    console.print_plan(order)


@cli.command("help")
@click.pass_context
def help_(ctx):
    """Show the documented tasks."""
    console = get_console()
    registry = _load_registry(ctx)
    cfg = registry.config
    try:
        logfile = registry.logfile()
    except TaskrunError as e:
        console.print_error(e.title, str(e), suggestion=e.suggestion)
        sys.exit(1)
    console.print_help(
        registry.catalog(),
        usage_hint=cfg.usage_hint,
        logfile=logfile,
        package=cfg.package,
        package_url=cfg.package_url,
        author=cfg.author,
        org=cfg.org,
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
