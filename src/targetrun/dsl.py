# src/targetrun/dsl.py
from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from .model import Command, Target


# ---------------------------------------------------------------------
# Command helper
# ---------------------------------------------------------------------

def sh(cmd: str, *, name: str | None = None, cwd: str | None = None, silent: bool = False) -> Command:
    """Create a shell command. A leading '@' marks it silent, as in make."""
    if cmd.startswith("@"):
        cmd = cmd[1:].lstrip()
        silent = True
    return Command(run=cmd, name=name, cwd=cwd, silent=silent)


# ---------------------------------------------------------------------
# Functional Target helper
# ---------------------------------------------------------------------

def target(
    name: str,
    *commands: Command | str,  # allow: target("x", sh(...), "cargo build")
    needs: Optional[List[str]] = None,
    cwd: str | None = None,  # default cwd applied to commands missing cwd
) -> Target:
    final: List[Command] = [sh(c) if isinstance(c, str) else c for c in commands]

    if cwd is not None:
        final = [c if c.cwd is not None else replace(c, cwd=cwd) for c in final]

    return Target(name=name, needs=tuple(needs or ()), commands=tuple(final))


# ---------------------------------------------------------------------
# Builder API
# ---------------------------------------------------------------------

class TargetBuilder:
    def __init__(self, name: str):
        self.name = name
        self._needs: list[str] = []
        self._commands: list[Command] = []

    def depends_on(self, *target_names: str):
        self._needs.extend(target_names)
        return self

    def command(self, run: str, *, name: str | None = None, cwd: str | None = None, silent: bool = False):
        self._commands.append(sh(run, name=name, cwd=cwd, silent=silent))
        return self

    def build(self) -> Target:
        return Target(name=self.name, needs=tuple(self._needs), commands=tuple(self._commands))


def build(name: str) -> TargetBuilder:
    """Convenience: build('test').command(...).build()"""
    return TargetBuilder(name)


def table(*items: Target) -> List[Target]:
    """
    Target table helper for target files. Named so a file can still define
    its own targets() function:

        from targetrun import table, target, sh

        TARGETS = table(
            target("all", needs=["build"]),
            target("build", sh("cargo build")),
        )
    """
    return list(items)
