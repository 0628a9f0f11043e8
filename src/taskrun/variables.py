# variables.py
from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from dotenv import dotenv_values

from .errors import RecursiveVariableError, UnresolvedVariableError
from .model import Variable, VariableSource

# ---------------------------------------------------------------------
# Resolution order (first hit wins):
#   override     KEY=VALUE given on the command line
#   file         the materialized .env file
#   environment  process environment
#   default      values declared by the taskfile / presets
#
# Values are expanded recursively, so a default like
#   DOCKER_COMPOSE = "$(DOCKER) compose"
# follows a DOCKER override.
# ---------------------------------------------------------------------

NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")

# $$  |  $(NAME)  |  ${NAME}
_REF_RE = re.compile(r"\$(?:(\$)|\(([A-Za-z_][A-Za-z0-9_]*)\)|\{([A-Za-z_][A-Za-z0-9_]*)\})")


def read_env_file(path: str | Path | None) -> Dict[str, str]:
    """Parse a KEY=VALUE file. A missing file yields no values."""
    if path is None:
        return {}
    p = Path(path)
    if not p.is_file():
        return {}
    values = dotenv_values(p, interpolate=False)
    # bare keys without "=" come back as None
    return {k: v for k, v in values.items() if v is not None}


def parse_overrides(args: Iterable[str]) -> Dict[str, str]:
    """Turn ["KEY=VALUE", ...] into a dict. Later duplicates win."""
    out: Dict[str, str] = {}
    for arg in args:
        if "=" not in arg:
            raise ValueError(f"Override must look like KEY=VALUE, got: {arg!r}")
        key, value = arg.split("=", 1)
        key = key.strip()
        if not NAME_RE.match(key):
            raise ValueError(f"Invalid variable name in override: {key!r}")
        out[key] = value
    return out


def split_invocation(args: Iterable[str]) -> Tuple[List[str], Dict[str, str]]:
    """Split CLI arguments into task names and KEY=VALUE overrides."""
    names: List[str] = []
    assignments: List[str] = []
    for arg in args:
        (assignments if "=" in arg else names).append(arg)
    return names, parse_overrides(assignments)


class VariableResolver:
    """Immutable view over the four variable layers."""

    def __init__(
        self,
        *,
        defaults: Optional[Mapping[str, str]] = None,
        file_values: Optional[Mapping[str, str]] = None,
        overrides: Optional[Mapping[str, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self._overrides = {k: str(v) for k, v in (overrides or {}).items()}
        self._file = {k: str(v) for k, v in (file_values or {}).items()}
        self._environ = dict(environ or {})
        self._defaults = {k: str(v) for k, v in (defaults or {}).items()}

    @classmethod
    def from_sources(
        cls,
        *,
        defaults: Optional[Mapping[str, str]] = None,
        env_file: str | Path | None = None,
        overrides: Optional[Mapping[str, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "VariableResolver":
        return cls(
            defaults=defaults,
            file_values=read_env_file(env_file),
            overrides=overrides,
            environ=environ,
        )

    def _layers(self):
        return (
            (VariableSource.OVERRIDE, self._overrides),
            (VariableSource.FILE, self._file),
            (VariableSource.ENVIRONMENT, self._environ),
            (VariableSource.DEFAULT, self._defaults),
        )

    def with_overrides(self, overrides: Optional[Mapping[str, str]]) -> "VariableResolver":
        merged = dict(self._overrides)
        merged.update(overrides or {})
        return VariableResolver(
            defaults=self._defaults,
            file_values=self._file,
            overrides=merged,
            environ=self._environ,
        )

    # ---- lookup ----

    def defines(self, name: str) -> bool:
        return any(name in values for _, values in self._layers())

    def lookup(self, name: str) -> Variable:
        """Raw (unexpanded) value from the highest-precedence source."""
        for source, values in self._layers():
            if name in values:
                return Variable(name=name, value=values[name], source=source)
        raise UnresolvedVariableError(name=name)

    def resolve(self, name: str) -> str:
        return self._expand(name, [])

    def get(self, name: str, default: str | None = None) -> str | None:
        if not self.defines(name):
            return default
        return self.resolve(name)

    def flag(self, name: str) -> bool:
        """
        True when NAME (or its lowercase spelling) resolves to "true".

        Both spellings are looked up layer by layer, so `force=true` on the
        command line beats `FORCE=false` from the .env file or environment.
        """
        for _, values in self._layers():
            for candidate in (name, name.lower()):
                if candidate in values:
                    return self.resolve(candidate).strip().lower() == "true"
        return False

    def names(self) -> List[str]:
        """Declared names (override, file, default), first-seen order."""
        seen: Dict[str, None] = {}
        for values in (self._defaults, self._file, self._overrides):
            for key in values:
                seen.setdefault(key, None)
        return list(seen)

    def exported(
        self,
        on_error: Callable[[UnresolvedVariableError], None] | None = None,
    ) -> Dict[str, str]:
        """Resolved values for every declared variable, for child processes."""
        out: Dict[str, str] = {}
        for name in self.names():
            try:
                out[name] = self.resolve(name)
            except UnresolvedVariableError as e:
                if on_error is not None:
                    on_error(e)
        return out

    # ---- interpolation ----

    def interpolate(self, text: str, *, task: str | None = None) -> str:
        try:
            return self._interpolate(text, [])
        except UnresolvedVariableError as e:
            if task and e.task is None:
                e.task = task
            raise

    def _expand(self, name: str, chain: List[str]) -> str:
        if name in chain:
            raise RecursiveVariableError(name=name, chain=chain + [name])
        var = self.lookup(name)
        return self._interpolate(var.value, chain + [name])

    def _interpolate(self, text: str, chain: List[str]) -> str:
        def repl(m: re.Match) -> str:
            if m.group(1):
                return "$"
            return self._expand(m.group(2) or m.group(3), chain)

        return _REF_RE.sub(repl, text)
