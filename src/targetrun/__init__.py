from .dsl import sh, target, table, build, TargetBuilder
from .dag import resolve
from .registry import Registry, build_registry
from .runner import run_target, run_plan, run_command, load_targets, RunResult, RunState
from .model import Command, Target
from .errors import (
    TargetError,
    ConfigurationError,
    UnknownTargetError,
    DuplicateTargetError,
    CycleError,
    CommandFailedError,
    ToolUnavailableError,
)

__all__ = [
    "sh", "target", "table", "build", "TargetBuilder",
    "resolve", "Registry", "build_registry",
    "run_target", "run_plan", "run_command", "load_targets", "RunResult", "RunState",
    "Command", "Target",
    "TargetError", "ConfigurationError", "UnknownTargetError", "DuplicateTargetError",
    "CycleError", "CommandFailedError", "ToolUnavailableError",
]
