"""Creation of a starter Taskfile."""

from __future__ import annotations

import sys
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from .discovery import TASKFILE_NAME
from .style import style

_PathArg = Union[str, "PathLike[str]"]

PROJECT_FILES = (
    "package.json",
    "Cargo.toml",
    "go.mod",
    "pyproject.toml",
    "requirements.txt",
    "Gemfile",
    "Makefile",
    "Dockerfile",
    "docker-compose.yml",
    "docker-compose.yaml",
    "compose.yml",
    "compose.yaml",
)

TEMPLATE = """\
# Starter Taskfile
#
#   task              show the tasks defined here
#   task NAME         run a task
#   task NAME --dry-run
#                     print the generated script instead of running it
#
# Statements understood at the top level:
#   include "path/to/other.Taskfile"   tasks appear as other:NAME
#   dotenv ".env"                       sourced before each task
#   export KEY="value"                  environment variable
#   alias short="long command"          shell function in each task
#
# A task header may carry parameters and dependencies:
#   task NAME [required optional="value"] depends=[a] depends_parallel=[b, c] {
#     ...bash...
#   }
# Lines starting with @description or @confirm annotate the next task.

export APP="demo"

# alias g="git"

@description Print a greeting
task hello {
  echo "$APP says hello"
}

@description Greet a person, e.g. task greet -- --who=Ada
task greet [who="there"] {
  echo "Hi $who, this is $APP"
}

@description Remove generated files
task clean {
  echo "Removing build output of $APP"
}

@description Build after cleaning
task build depends=[clean] {
  echo "Building $APP"
}

@confirm Really delete every cache?
@description Wipe all caches and build output
task reset {
  echo "Resetting $APP"
}
"""


def _has_project_files(directory: Path) -> bool:
    return any((directory / name).exists() for name in PROJECT_FILES)


def _ask(question: str) -> Optional[str]:
    print(question, end="", file=sys.stderr)
    sys.stderr.flush()
    try:
        answer = sys.stdin.readline()
    except (OSError, ValueError):
        return None
    return answer.strip().lower()


def _write_template(target: Path) -> bool:
    try:
        target.write_text(TEMPLATE, encoding="utf-8")
    except OSError as exc:
        print(f"{style('error:', 'red', 'bold')} Could not create Taskfile: {exc}", file=sys.stderr)
        return False
    print(f"{style('✓', 'green', 'bold')} Created {target}", file=sys.stderr)
    print(f"  Run {style('task', 'cyan')} to see available tasks.", file=sys.stderr)
    return True


def _directory(directory: Optional[_PathArg]) -> Path:
    return Path.cwd() if directory is None else Path(directory)


def create(directory: Optional[_PathArg] = None) -> bool:
    """Write the starter Taskfile into ``directory`` (default: the working directory).

    Returns False when a Taskfile already exists there or it cannot be written.
    """
    try:
        base = _directory(directory)
    except OSError as exc:
        print(
            f"{style('error:', 'red', 'bold')} Could not determine current directory: {exc}",
            file=sys.stderr,
        )
        return False
    target = base / TASKFILE_NAME
    if target.exists():
        print(
            f"{style('warning:', 'yellow', 'bold')} Taskfile already exists in {base}",
            file=sys.stderr,
        )
        return False
    return _write_template(target)


def prompt_and_create(directory: Optional[_PathArg] = None) -> Optional[Path]:
    """Offer to create a starter Taskfile and return its path if one was written.

    In a directory that already holds project files the answer defaults to no,
    otherwise to yes.
    """
    try:
        base = _directory(directory)
    except OSError:
        return None
    target = base / TASKFILE_NAME
    question = style("?", "cyan", "bold")

    if _has_project_files(base):
        answer = _ask(f"{question} No Taskfile found. Create a template Taskfile in {base}? [y/N] ")
        if answer not in ("y", "yes"):
            return None
    else:
        answer = _ask(f"{question} No Taskfile found. Create one in {base}? [Y/n] ")
        if answer is None or answer not in ("", "y", "yes"):
            return None

    return target if _write_template(target) else None