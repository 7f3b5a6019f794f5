"""Locating the Taskfile for the current project."""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import Optional, Union

TASKFILE_NAME = "Taskfile"


def find_taskfile(start: Optional[Union[str, "PathLike[str]"]] = None) -> Optional[Path]:
    """Search ``start`` (default: the working directory) and its parents for a Taskfile."""
    if start is None:
        try:
            start = Path.cwd()
        except OSError:
            return None
    directory = Path(start)
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / TASKFILE_NAME
        if candidate.is_file():
            return candidate
    return None