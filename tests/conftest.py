from __future__ import annotations

from typing import List, Tuple

import pytest

from targetrun.model import Command, Target
from targetrun.ui.console import Console


class Recorder:
    """Fake command capability: records (target, command) and returns scripted statuses."""

    def __init__(self, statuses: dict[str, int] | None = None):
        self.statuses = statuses or {}
        self.calls: List[Tuple[str, str]] = []

    def __call__(self, target: Target, command: Command) -> int:
        self.calls.append((target.name, command.run))
        return self.statuses.get(command.run, 0)

    @property
    def targets(self) -> List[str]:
        seen: List[str] = []
        for name, _ in self.calls:
            if not seen or seen[-1] != name:
                seen.append(name)
        return seen


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def console():
    return Console(debug=False)


@pytest.fixture
def make_recorder():
    return Recorder
