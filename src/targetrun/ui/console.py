"""Console output formatting utilities for targetrun."""

from __future__ import annotations

import sys
from typing import Iterable, Optional


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_run_started(self, target: str, plan: list[str], dry_run: bool = False) -> None:
        """Print the resolved plan before anything executes."""
        suffix = " (dry run)" if dry_run else ""
        self.print_debug(f"target={target} plan={' -> '.join(plan)}{suffix}")

    def print_target_start(self, name: str) -> None:
        """Print target start message (debug only, make stays quiet here)."""
        self.print_debug(f"entering target: {name}")

    def print_command(self, cmd: str) -> None:
        """Echo a command line before it runs."""
        # flush: the child process writes to the same stream
        print(cmd, flush=True)

    def print_success(self, name: str) -> None:
        """Print success message."""
        self.print_debug(f"target done: {name}")

    def print_failure(
        self,
        name: str,
        reason: str,
        exit_code: Optional[int] = None,
        hint: Optional[str] = None,
    ) -> None:
        """
        Print failure message.

        Args:
            name: Target name
            reason: Failure reason/error message
            exit_code: Optional exit code
            hint: Optional hint for user
        """
        print(f"\nTARGET FAILED: {name}", file=sys.stderr)
        if exit_code is not None:
            print(f"Exit code: {exit_code}", file=sys.stderr)
        if hint:
            print(f"Hint: {hint}", file=sys.stderr)
        if self.debug:
            print(f"Error details: {reason}", file=sys.stderr)
        else:
            # Show first line of error for non-debug mode
            error_line = reason.split("\n")[0] if reason else "Unknown error"
            print(f"Error: {error_line}", file=sys.stderr)

    def print_plan(self, plan: Iterable[str]) -> None:
        """Print a resolved plan, one target per line."""
        for name in plan:
            print(name)

    def print_target_line(self, name: str, needs: list[str], command_count: int, is_default: bool) -> None:
        """Print one row of the target listing."""
        marker = "*" if is_default else " "
        deps = f" <- {', '.join(needs)}" if needs else ""
        plural = "" if command_count == 1 else "s"
        print(f"{marker} {name}{deps} ({command_count} command{plural})")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
