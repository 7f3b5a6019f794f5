"""Syntax tree produced by the Taskfile parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Param:
    """A task parameter, optionally with a default value."""

    name: str
    default: Optional[str] = None

    def __str__(self) -> str:
        if self.default is None:
            return self.name
        return f'{self.name}="{self.default}"'


@dataclass
class Task:
    """A task definition with its header information and body."""

    name: str
    description: Optional[str] = None
    confirm: Optional[str] = None
    params: list[Param] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    parallel_dependencies: list[str] = field(default_factory=list)
    body: str = ""
    line: int = 0


@dataclass
class Alias:
    """A shell alias, turned into a function inside task scripts."""

    name: str
    value: str


@dataclass
class Export:
    """An environment variable exported to task scripts."""

    key: str
    value: str


@dataclass
class Include:
    """An include statement pointing at another Taskfile."""

    path: str
    line: int


@dataclass
class DotEnv:
    """A dotenv statement naming a file to source before tasks run."""

    path: str
    line: int


@dataclass
class Ast:
    """Everything declared in a single Taskfile."""

    tasks: list[Task] = field(default_factory=list)
    aliases: list[Alias] = field(default_factory=list)
    exports: list[Export] = field(default_factory=list)
    includes: list[Include] = field(default_factory=list)
    dotenv: list[DotEnv] = field(default_factory=list)