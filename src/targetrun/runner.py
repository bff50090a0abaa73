# runner.py
from __future__ import annotations

import runpy
import signal
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List

from .dag import resolve
from .errors import (
    EXIT_NOT_EXECUTABLE,
    EXIT_NOT_FOUND,
    CommandFailedError,
    TargetError,
    ToolUnavailableError,
)
from .model import Command, Target
from .registry import DEFAULT_TARGET, Registry, build_registry
from .ui.console import Console, get_console


TOOL_HINTS = {
    "cargo": "Install the Rust toolchain (rustup) or fix PATH.",
    "pytest": "Install pytest (e.g., pip install pytest).",
    "ruff": "Install ruff (e.g., pip install ruff).",
}

# A command capability: run one command of a target, return its exit status.
Execute = Callable[[Target, Command], int]


class RunState(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    RESOLUTION_FAILED = "resolution_failed"


@dataclass
class RunResult:
    target: str
    plan: List[str]
    executed: List[str] = field(default_factory=list)
    state: RunState = RunState.IDLE
    exit_code: int = 0


def _hint_for(cmd: str) -> str | None:
    words = cmd.split()
    if not words:
        return None
    return TOOL_HINTS.get(words[0], f"Install {words[0]} or fix PATH.")


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def make_shell_executor(root: str | Path = ".") -> Execute:
    """Build the subprocess-backed capability, running commands under `root`."""
    root_p = Path(root).resolve()

    def execute(target: Target, command: Command) -> int:
        cwd = (root_p / (command.cwd or ".")).resolve()
        if not cwd.exists():
            raise ToolUnavailableError(target.name, command.run, f"cwd not found: {cwd}")

        try:
            # stdio inherited: the tool's own output goes straight to the terminal
            proc = subprocess.run(command.run, shell=True, cwd=str(cwd))
        except FileNotFoundError as e:
            raise ToolUnavailableError(target.name, command.run, str(e), EXIT_NOT_FOUND) from e
        except PermissionError as e:
            raise ToolUnavailableError(target.name, command.run, str(e), EXIT_NOT_EXECUTABLE) from e

        code = proc.returncode
        if code < 0:
            # killed by a signal; report it the way a shell would
            if -code == signal.SIGINT:
                raise KeyboardInterrupt
            code = 128 - code
        return code

    return execute


def run_command(target: Target, command: Command) -> int:
    """Run one command from the current directory."""
    return make_shell_executor(".")(target, command)


def run_plan(
    registry: Registry,
    plan: List[str],
    *,
    execute: Execute = run_command,
    dry_run: bool = False,
    console: Console | None = None,
    on_done: Callable[[str], None] | None = None,
) -> List[str]:
    """
    Run targets in plan order, one command at a time.

    - Echoes each non-silent command before running it.
    - Stops at the first non-zero status by raising CommandFailedError;
      nothing after it in the plan runs.
    - dry_run echoes every command (silent ones too) and runs nothing.

    Returns the names of targets that completed.
    """
    console = console or get_console()
    executed: List[str] = []

    for name in plan:
        t = registry[name]
        console.print_target_start(name)

        for command in t.commands:
            if dry_run:
                console.print_command(command.run)
                continue
            if not command.silent:
                console.print_command(command.run)
            console.print_debug(f"[{name}] running: {command.label}")

            code = execute(t, command)
            if code != 0:
                hint = _hint_for(command.run) if code == EXIT_NOT_FOUND else None
                raise CommandFailedError(name, command.run, code, hint=hint)

        console.print_success(name)
        executed.append(name)
        if on_done is not None:
            on_done(name)

    return executed


def run_target(
    registry: Registry,
    name: str | None = None,
    *,
    execute: Execute = run_command,
    dry_run: bool = False,
    console: Console | None = None,
) -> RunResult:
    """
    Resolve `name` (default target when None) and run the plan.

    Resolution errors propagate before any command runs. Every TargetError
    raised from here carries the run's final RunResult as `err.result`.
    """
    console = console or get_console()
    requested = name if name is not None else (registry.default or DEFAULT_TARGET)
    result = RunResult(target=requested, plan=[], state=RunState.RESOLVING)

    try:
        result.plan = resolve(registry, name)
    except TargetError as e:
        result.state = RunState.RESOLUTION_FAILED
        result.exit_code = e.exit_code
        e.result = result
        raise

    console.print_run_started(requested, result.plan, dry_run=dry_run)
    result.state = RunState.EXECUTING

    executed: List[str] = []
    try:
        run_plan(
            registry,
            result.plan,
            execute=execute,
            dry_run=dry_run,
            console=console,
            on_done=executed.append,
        )
    except TargetError as e:
        result.executed = executed
        result.state = RunState.FAILED
        result.exit_code = e.exit_code
        e.result = result
        raise

    result.executed = executed
    result.state = RunState.SUCCEEDED
    return result


# ----------------------------------------------------------------------
# Target file loading
# ----------------------------------------------------------------------

def load_targets(path: str | Path) -> Registry:
    """
    Load a target table from a python file path.

    The file must define either:
      - targets() -> List[Target]
      - TARGETS = [Target, ...]
    and may set DEFAULT = "<name>" (otherwise "all").

    Returns:
      Registry
    """
    tf_path = Path(path).expanduser().resolve()
    if not tf_path.exists():
        raise FileNotFoundError(f"Target file not found: {tf_path}")
    if tf_path.suffix != ".py":
        raise ValueError(f"Target file must be a .py file, got: {tf_path.name}")

    module_name = f"targetrun_targets_{tf_path.stem}"
    try:
        globals_dict = runpy.run_path(str(tf_path), run_name=module_name)
    except Exception as e:
        raise ValueError(f"cannot load {tf_path.name}: {type(e).__name__}: {e}") from e

    items = None
    if "targets" in globals_dict and callable(globals_dict["targets"]):
        try:
            items = globals_dict["targets"]()
        except Exception as e:
            raise ValueError(f"{tf_path.name}: targets() failed: {type(e).__name__}: {e}") from e
    elif "TARGETS" in globals_dict:
        items = globals_dict["TARGETS"]

    if not isinstance(items, list) or not all(isinstance(t, Target) for t in items):
        raise TypeError(
            "Target file must return/define a List[Target]. "
            "Define targets() -> List[Target] or TARGETS = [Target, ...]."
        )

    default = globals_dict.get("DEFAULT", DEFAULT_TARGET)
    if not isinstance(default, str):
        raise TypeError(f"DEFAULT must be a target name, got: {default!r}")

    return build_registry(items, default=default)
