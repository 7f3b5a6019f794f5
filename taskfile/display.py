"""Listing of available tasks and the help screen."""

from __future__ import annotations

from collections.abc import Mapping

from .resolver import ResolvedTask
from .style import style

VERSION = "0.8.0"

_OPTIONS = (
    ("--list, -l", "List all available tasks"),
    ("--init", "Create a new Taskfile"),
    ("--discover", "Discover tasks from project files"),
    ("--dry-run", "Show the script without running it"),
    ("--file, -f", "Use a specific Taskfile path"),
    ("--completions", "Generate shell completions (bash, zsh, fish)"),
    ("--update", "Update to the latest version"),
    ("--help, -h", "Show help"),
    ("--version, -v", "Show version"),
)


def format_task_name(task: ResolvedTask) -> str:
    """Return the qualified name followed by its parameters, if any."""
    params = task.task.params
    if not params:
        return task.qualified_name
    listed = ", ".join(
        p.name if p.default is None else f"{p.name}={p.default}" for p in params
    )
    return f"{task.qualified_name} [{listed}]"


def _entry(task: ResolvedTask, width: int) -> str:
    name = format_task_name(task)
    description = task.task.description or ""
    if not description:
        return f"  {style(name, 'green')}"
    padding = " " * (max(width - len(name), 0) + 2)
    return f"  {style(name, 'green')}{padding}{description}"


def render_task_list(registry: Mapping[str, ResolvedTask]) -> str:
    """Render root tasks first, then one group per top-level namespace."""
    tasks = sorted(registry.values(), key=lambda t: t.qualified_name)
    width = max((len(format_task_name(t)) for t in tasks), default=0)

    roots: list[ResolvedTask] = []
    groups: dict[str, list[ResolvedTask]] = {}
    for task in tasks:
        namespace, sep, _ = task.qualified_name.partition(":")
        if sep:
            groups.setdefault(namespace, []).append(task)
        else:
            roots.append(task)

    lines = [_entry(task, width) for task in roots]
    for namespace in sorted(groups):
        lines.append("")
        lines.append(f" {style(namespace, 'yellow', 'bold')}:")
        lines.extend(_entry(task, width) for task in groups[namespace])
    return "\n".join(lines)


def print_task_list(registry: Mapping[str, ResolvedTask]) -> None:
    """Print the task list to stdout."""
    text = render_task_list(registry)
    if text:
        print(text)


def print_help_with_tasks(registry: Mapping[str, ResolvedTask]) -> None:
    """Print usage, options and the available tasks to stdout."""
    print(f"{style('Task', 'green', 'bold')} {style(VERSION, 'dimmed')}")
    print()
    print(style("Usage:", "yellow", "bold"))
    print(f"  task {style('<name>', 'green')} {style('[-- args...]', 'dimmed')}")
    print()
    print(style("Options:", "yellow", "bold"))
    widest = max(len(flag) for flag, _ in _OPTIONS)
    for flag, description in _OPTIONS:
        padding = " " * (widest - len(flag) + 2)
        print(f"  {style(flag, 'green')}{padding}{style(description, 'dimmed')}")
    print()
    print(style("Available tasks:", "yellow", "bold"))
    print_task_list(registry)