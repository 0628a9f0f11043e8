# envfile.py
from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Collection, Optional

from .model import Failed, MaterializeResult, Skipped, Written
from .variables import VariableResolver

# envsubst syntax: $NAME or ${NAME}
_ENVSUBST_RE = re.compile(r"\$(?:\{([A-Za-z_][A-Za-z0-9_]*)\}|([A-Za-z_][A-Za-z0-9_]*))")


def render_template(
    text: str,
    resolver: VariableResolver,
    only: Optional[Collection[str]] = None,
) -> str:
    """
    Substitute variable references in `text`.

    `only` mirrors envsubst's SHELL-FORMAT argument: when given, references to
    other names are left untouched. Every substituted name must resolve.
    """
    allowed = set(only) if only is not None else None

    def repl(m: re.Match) -> str:
        name = m.group(1) or m.group(2)
        if allowed is not None and name not in allowed:
            return m.group(0)
        return resolver.resolve(name)

    return _ENVSUBST_RE.sub(repl, text)


def _write_atomic(path: Path, content: str) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def materialize(
    template_path: str | Path,
    output_path: str | Path,
    resolver: VariableResolver,
    force: bool = False,
    only: Optional[Collection[str]] = None,
) -> MaterializeResult:
    """
    Render `template_path` into `output_path`.

    Returns Skipped when the output exists and `force` is false, Written after
    a successful atomic write, Failed when the template cannot be read or the
    output cannot be written. An unresolved reference raises
    UnresolvedVariableError before anything touches the disk.
    """
    template = Path(template_path)
    output = Path(output_path)

    if output.exists() and not force:
        return Skipped(
            path=str(output),
            reason=f"The {output.name} file already exists! Use FORCE=true to re-create.",
        )

    try:
        text = template.read_text(encoding="utf-8")
    except OSError as e:
        return Failed(path=str(output), reason=f"Cannot read template {template}: {e.strerror or e}")

    # raises UnresolvedVariableError; nothing written yet
    rendered = render_template(text, resolver, only=only)

    try:
        _write_atomic(output, rendered)
    except OSError as e:
        return Failed(path=str(output), reason=f"Cannot write {output}: {e.strerror or e}")

    return Written(path=str(output))
