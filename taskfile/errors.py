"""Errors raised while reading and parsing Taskfiles."""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import Union

_PathArg = Union[str, "PathLike[str]"]


class ParseError(Exception):
    """Base class for Taskfile reading and parsing errors."""


class TaskfileSyntaxError(ParseError):
    """A Taskfile contains a syntax error at a given line."""

    def __init__(self, file: _PathArg, line: int, message: str) -> None:
        self.file = Path(file)
        self.line = line
        self.message = message
        super().__init__(f"{self.file}:{line}: {message}")


class TaskfileIOError(ParseError):
    """A Taskfile could not be read."""

    def __init__(self, file: _PathArg, source: OSError) -> None:
        self.file = Path(file)
        self.source = source
        super().__init__(f"{self.file}: {source}")
        self.__cause__ = source