"""Console output formatting utilities for taskrun."""

from __future__ import annotations

import os
import sys
from typing import Iterable, Optional

import click

from ..model import CatalogEntry


def color_supported() -> bool:
    """Colors only on a named terminal, and never when NO_COLOR is set."""
    if os.environ.get("NO_COLOR") is not None:
        return False
    term = os.environ.get("TERM", "")
    return bool(term) and term.lower() != "dumb"


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, color: Optional[bool] = None):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            color: Force colors on/off; autodetected from TERM when None
        """
        self.debug = debug
        self.color = color_supported() if color is None else color

    def _style(self, text: str, **styles) -> str:
        if not self.color:
            return text
        return click.style(text, **styles)

    def _out(self, message: str = "", err: bool = False) -> None:
        click.echo(message, err=err, color=self.color)

    def print_task_start(self, name: str, command: Optional[str] = None) -> None:
        """Print the task being started and the command it runs."""
        self._out(self._style(f"▶ {name}", fg="cyan", bold=True))
        if command:
            self._out(f"  {command}")

    def print_dry_run(self, name: str, command: Optional[str]) -> None:
        label = command if command else "(no command)"
        self._out(f"{self._style(name, fg='cyan')}: {label}")

    def print_output(self, line: str) -> None:
        """Echo one line of streamed child output."""
        click.echo(line, nl=False, color=self.color)

    def print_warning(self, message: str) -> None:
        self._out(self._style(message, fg="yellow"))

    def print_results(self, results: dict[str, str]) -> None:
        """Print final results summary."""
        if not results:
            return
        self._out("")
        for task, status in results.items():
            status_display = status.upper() if status != "ok" else "SUCCESS"
            color = "green" if status == "ok" else "yellow"
            self._out(f"  {task}: {self._style(status_display, fg=color)}")

    def print_plan(self, order: list[str]) -> None:
        for idx, name in enumerate(order, start=1):
            self._out(f"  {idx}. {name}")

    def print_help(
        self,
        entries: Iterable[CatalogEntry],
        *,
        program: str = "taskrun",
        usage_hint: Optional[str] = None,
        logfile: Optional[str] = None,
        package: Optional[str] = None,
        package_url: Optional[str] = None,
        author: Optional[str] = None,
        org: Optional[str] = None,
    ) -> None:
        """Print the self-documenting task menu."""
        self._out(f"Management commands for {package or 'project'}:")
        self._out("Usage:")
        if usage_hint:
            label = self._style(f"{program:<26}", fg="cyan")
            self._out(f"    {label} {usage_hint}")
        for entry in entries:
            label = self._style(f"{program} run {entry.name:<17}", fg="cyan")
            self._out(f"    {label} {entry.description}")
        self._out()

        if logfile:
            self._out(f"    📑 Logs are stored in      {logfile}")
            self._out()

        if package:
            where = f" ({package_url})" if package_url else ""
            self._out(f"    📦 Package                 {package}{where}")
        if author:
            self._out(f"    🤠 Author                  {author}")
        if org:
            self._out(self._style(f"    🏢 Org                     {org}", fg="yellow"))
        if package or author or org:
            self._out()

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        self._out(self._style(f"\nERROR: {title}", fg="red", bold=True), err=True)
        self._out(message, err=True)
        if details:
            for detail in details:
                self._out(f"  {detail}", err=True)
        if suggestion:
            self._out(f"\n{suggestion}", err=True)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
        else:
            self._out(f"Error: {exc}", err=True)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        self._out(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            self._out(f"[DEBUG] {message}", err=True)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
