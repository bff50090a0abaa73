# cli.py
from __future__ import annotations

import sys

import click

from targetrun import settings
from targetrun.dag import resolve
from targetrun.errors import (
    EXIT_CONFIG,
    EXIT_INTERRUPTED,
    CommandFailedError,
    ConfigurationError,
    TargetError,
)
from targetrun.registry import Registry
from targetrun.runner import load_targets, make_shell_executor, run_target
from targetrun.targets import default_registry
from targetrun.ui.console import Console, get_console, set_console


file_option = click.option(
    "--file",
    "-f",
    "targets_file",
    default=settings.TARGETS_FILE,
    envvar="TARGETRUN_FILE",
    help="Target file (defines targets() or TARGETS); built-in table if omitted",
)


def load_registry(targets_file: str | None) -> Registry:
    """
    Load the registry from a target file, or the built-in table.

    Raises:
        SystemExit: if the file cannot be loaded or its table is invalid
    """
    console = get_console()
    if not targets_file:
        return default_registry()

    try:
        registry = load_targets(targets_file)
    except ConfigurationError as e:
        console.print_error("Invalid target table", e.message, details=[f"file: {targets_file}"])
        sys.exit(EXIT_CONFIG)
    except (FileNotFoundError, ValueError, TypeError) as e:
        console.print_error(
            "Failed to load target file",
            f"Could not load targets from {targets_file}",
            details=[str(e)],
            suggestion="Define targets() -> List[Target] or TARGETS = [...] in a .py file:\n"
                       "  targetrun run --file targets.py",
        )
        sys.exit(EXIT_CONFIG)

    console.print_debug(f"Loaded {len(registry)} target(s) from {targets_file}")
    return registry


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
def cli(debug):
    """targetrun: make-style target runner."""
    console = Console(debug=debug)
    set_console(console)


@cli.command()
@click.argument("target", required=False)
@file_option
@click.option("--root", default=settings.ROOT_DIR, envvar="TARGETRUN_ROOT", show_default=True,
              help="Directory commands run from")
@click.option("--dry-run", "-n", is_flag=True, default=False, help="Print commands without running them")
def run(target, targets_file, root, dry_run):
    """Resolve TARGET (default: all) and run it with its prerequisites."""
    console = get_console()
    registry = load_registry(targets_file)

    try:
        run_target(
            registry,
            target,
            execute=make_shell_executor(root),
            dry_run=dry_run,
            console=console,
        )
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(EXIT_INTERRUPTED)
    except CommandFailedError as e:
        console.print_failure(e.target, e.message, exit_code=e.exit_code, hint=e.hint)
        sys.exit(e.exit_code)
    except ConfigurationError as e:
        console.print_error("Cannot resolve target", e.message, details=[f"{k}: {v}" for k, v in e.details.items()])
        sys.exit(e.exit_code)
    except TargetError as e:
        console.print_failure(e.target or "?", str(e), exit_code=e.exit_code)
        sys.exit(e.exit_code)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@click.argument("target", required=False)
@file_option
def plan(target, targets_file):
    """Print the execution plan for TARGET without running anything."""
    console = get_console()
    registry = load_registry(targets_file)

    try:
        order = resolve(registry, target)
    except ConfigurationError as e:
        console.print_error("Cannot resolve target", e.message, details=[f"{k}: {v}" for k, v in e.details.items()])
        sys.exit(e.exit_code)

    console.print_plan(order)


@cli.command("list")
@file_option
def list_targets(targets_file):
    """List known targets; the default is marked with '*'."""
    console = get_console()
    registry = load_registry(targets_file)

    for name, t in registry.items():
        console.print_target_line(name, list(t.needs), len(t.commands), name == registry.default)
