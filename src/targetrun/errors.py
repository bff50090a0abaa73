# errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


# Exit statuses for failures that don't come from a command.
EXIT_CONFIG = 2
EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126
EXIT_INTERRUPTED = 130


@dataclass
class TargetError(Exception):
    """
    Structured runner error with enough context for:
      - clean CLI output
      - picking the process exit status
      - debugging without full tracebacks
    """
    kind: str
    target: str | None
    message: str
    details: dict = field(default_factory=dict)

    exit_code = EXIT_CONFIG

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        if self.target:
            lines.append(f"target={self.target}")
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


# ----------------------------------------------------------------------
# Configuration errors (raised before any command runs)
# ----------------------------------------------------------------------

class ConfigurationError(TargetError):
    pass


class UnknownTargetError(ConfigurationError):
    def __init__(self, name: str, *, known: List[str] | None = None, needed_by: str | None = None):
        if needed_by:
            message = f"target '{needed_by}' needs missing target '{name}'"
        else:
            message = f"no such target '{name}'"
        details = {}
        if known is not None:
            details["known"] = ", ".join(known)
        super().__init__(kind="unknown_target", target=needed_by or name, message=message, details=details)
        self.name = name


class DuplicateTargetError(ConfigurationError):
    def __init__(self, names: List[str]):
        super().__init__(
            kind="duplicate_target",
            target=names[0] if len(names) == 1 else None,
            message=f"target defined more than once: {', '.join(names)}",
        )
        self.names = names


class CycleError(ConfigurationError):
    def __init__(self, cycle: List[str]):
        super().__init__(
            kind="cycle",
            target=cycle[0],
            message="prerequisite cycle: " + " -> ".join(cycle),
        )
        self.cycle = cycle


# ----------------------------------------------------------------------
# Execution / environment errors
# ----------------------------------------------------------------------

class CommandFailedError(TargetError):
    def __init__(self, target: str, cmd: str, exit_code: int, hint: str | None = None):
        details = {"cmd": cmd}
        if hint:
            details["hint"] = hint
        super().__init__(
            kind="command_failed",
            target=target,
            message=f"[{target}] command failed (exit={exit_code}): {cmd}",
            details=details,
        )
        self.cmd = cmd
        self.exit_code = exit_code
        self.hint = hint


class ToolUnavailableError(TargetError):
    def __init__(self, target: str, cmd: str, reason: str, exit_code: int = EXIT_NOT_FOUND):
        super().__init__(
            kind="tool_unavailable",
            target=target,
            message=f"[{target}] cannot execute: {reason}",
            details={"cmd": cmd},
        )
        self.cmd = cmd
        self.exit_code = exit_code
