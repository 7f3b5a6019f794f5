"""Command-line entry point of the task runner."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from .discovery import find_taskfile
from .display import VERSION, print_help_with_tasks
from .errors import ParseError
from .executor import ExecError, TaskCancelledError, TaskFailedError, execute_task
from .resolver import ResolveError, resolve
from .runner import BashRunner
from .scaffold import create, prompt_and_create
from .style import style
from .suggest import suggest_similar


def build_parser() -> argparse.ArgumentParser:
    """Return the parser for everything before a ``--`` separator."""
    parser = argparse.ArgumentParser(
        prog="task", description="Run tasks defined in a Taskfile."
    )
    parser.add_argument("task_name", nargs="?", help="the task to run")
    parser.add_argument("-l", "--list", action="store_true", help="list all available tasks")
    parser.add_argument("--init", action="store_true", help="create a new Taskfile")
    parser.add_argument(
        "--dry-run", action="store_true", help="show the script without running it"
    )
    parser.add_argument("-f", "--file", help="use a specific Taskfile path")
    parser.add_argument(
        "-v", "--version", action="version", version=f"task {VERSION}", help="show version"
    )
    return parser


def _error(message: str) -> None:
    print(f"{style('error:', 'red', 'bold')} {message}", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line and return the process exit code.

    Arguments after ``--`` are passed to the task as ``--key=value`` parameters.
    """
    args_list = list(sys.argv[1:] if argv is None else argv)
    task_args: list[str] = []
    if "--" in args_list:
        split = args_list.index("--")
        task_args = args_list[split + 1:]
        args_list = args_list[:split]
    args = build_parser().parse_args(args_list)

    if args.init:
        return 0 if create() else 1

    if args.file is not None:
        taskfile_path = Path(args.file)
        if not taskfile_path.is_file():
            _error(f"Taskfile not found: {args.file}")
            return 1
    else:
        found = find_taskfile()
        if found is None:
            if args.task_name is not None or args.list or args.dry_run:
                _error("No Taskfile found in current or parent directories.")
                return 1
            found = prompt_and_create()
            if found is None:
                return 0
        taskfile_path = found

    try:
        registry = resolve(taskfile_path)
    except (ResolveError, ParseError) as exc:
        _error(str(exc))
        return 1

    if args.list or args.task_name is None:
        print_help_with_tasks(registry)
        return 0

    name = args.task_name
    if name not in registry:
        _error(f"unknown task '{style(name, 'yellow')}'")
        suggest_similar(name, registry.keys())
        return 1

    try:
        execute_task(name, task_args, registry, BashRunner(), args.dry_run)
    except ExecError as exc:
        _error(str(exc))
        if isinstance(exc, TaskFailedError):
            return exc.code
        if isinstance(exc, TaskCancelledError):
            return 0
        return 1
    return 0