# model.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Command:
    """A single shell command run when its target executes."""
    run: str
    name: str | None = None
    cwd: str | None = None
    # make's "@" prefix: don't echo the command line before running it
    silent: bool = False

    @property
    def label(self) -> str:
        return self.name or self.run


@dataclass(frozen=True)
class Target:
    """
    A named unit of work: prerequisites + the commands it runs itself.

    `needs` lists target names that must complete before this target's own
    commands run. A target without commands only groups its prerequisites.
    """
    name: str
    needs: Tuple[str, ...] = ()
    commands: Tuple[Command, ...] = ()

    def __post_init__(self) -> None:
        # accept lists from callers, store tuples so targets stay hashable
        object.__setattr__(self, "needs", tuple(self.needs))
        object.__setattr__(self, "commands", tuple(self.commands))
