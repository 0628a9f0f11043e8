"""Task presets for a containerised documentation site."""

from __future__ import annotations

from typing import Dict

from . import docker, env, hooks, lint, node, test

__all__ = ["docker", "env", "hooks", "lint", "node", "test", "defaults"]


def defaults() -> Dict[str, str]:
    """Variable defaults of every preset module, merged."""
    merged: Dict[str, str] = {}
    for module in (docker, node, lint, hooks, env):
        merged.update(module.DEFAULTS)
    return merged
