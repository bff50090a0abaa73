# project_targets.py
# Targets for working on targetrun itself: `targetrun run --file project_targets.py check`
from __future__ import annotations
from targetrun import table, target, sh

DEFAULT = "check"


def targets():
    return table(
        target("check", needs=["lint", "format-check", "test"]),

        target(
            "lint",
            sh("ruff check src/ tests/"),
        ),

        target(
            "format-check",
            sh("ruff format --check src/ tests/"),
        ),

        target(
            "install",
            sh("@pip install -q -e .[test]"),
        ),

        target(
            "test",
            sh("pytest -q"),
            needs=["install"],
        ),

        target(
            "clean",
            sh("@rm -rf build dist .pytest_cache src/targetrun.egg-info"),
        ),
    )
