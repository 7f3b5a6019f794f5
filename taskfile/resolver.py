"""Resolution of a root Taskfile and its includes into a task registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Union

from .ast import Alias, Ast, DotEnv, Export, Task
from .errors import TaskfileIOError
from .parser import parse

_PathArg = Union[str, "PathLike[str]"]


@dataclass
class ResolvedTask:
    """A task together with the scope it runs in and the file it came from."""

    qualified_name: str
    task: Task
    aliases: list[Alias] = field(default_factory=list)
    exports: list[Export] = field(default_factory=list)
    dotenv: list[DotEnv] = field(default_factory=list)
    source_file: Path = field(default_factory=lambda: Path("Taskfile"))


class ResolveError(Exception):
    """Base class for errors found while combining Taskfiles."""


class CircularIncludeError(ResolveError):
    """A Taskfile includes itself, directly or through other files."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = list(chain)
        super().__init__(f"circular include detected: {' -> '.join(self.chain)}")


class IncludeNotFoundError(ResolveError):
    """An include statement names a file that does not exist."""

    def __init__(self, path: str, from_file: _PathArg, line: int) -> None:
        self.path = path
        self.from_file = Path(from_file)
        self.line = line
        super().__init__(
            f"include file not found: {path} (referenced from {self.from_file}:{line})"
        )


class DuplicateTaskError(ResolveError):
    """Two tasks end up with the same qualified name."""

    def __init__(self, name: str, existing_file: _PathArg, new_file: _PathArg) -> None:
        self.name = name
        self.existing_file = Path(existing_file)
        self.new_file = Path(new_file)
        super().__init__(
            f"duplicate task '{name}' (defined in {self.new_file}, "
            f"previously defined in {self.existing_file})"
        )


def resolve(taskfile_path: _PathArg) -> dict[str, ResolvedTask]:
    """Parse ``taskfile_path`` and every file it includes into a registry.

    Tasks in included files are prefixed with the include's file stem, so
    ``include "tasks/docker.Taskfile"`` yields names like ``docker:up``.
    Aliases, exports and dotenv files cascade from a file to its includes.
    Parse errors propagate as :class:`~taskfile.errors.ParseError`.
    """
    resolver = _Resolver()
    resolver.resolve_file(Path(taskfile_path), "", [], [], [])
    return resolver.registry


class _Resolver:
    def __init__(self) -> None:
        self.registry: dict[str, ResolvedTask] = {}
        self.active: set[Path] = set()
        self.processed: set[Path] = set()
        self.include_chain: list[str] = []

    def resolve_file(
        self,
        filepath: Path,
        prefix: str,
        parent_aliases: list[Alias],
        parent_exports: list[Export],
        parent_dotenv: list[DotEnv],
    ) -> None:
        try:
            canonical = filepath.resolve(strict=True)
        except OSError as exc:
            raise TaskfileIOError(filepath, exc) from exc

        if canonical in self.active:
            self.include_chain.append(str(filepath))
            raise CircularIncludeError(self.include_chain)

        # Reached again through another branch of a diamond: already registered.
        if canonical in self.processed:
            return

        self.active.add(canonical)
        self.include_chain.append(str(filepath))

        try:
            content = filepath.read_text(encoding="utf-8")
        except OSError as exc:
            raise TaskfileIOError(filepath, exc) from exc
        ast = parse(content, filepath)

        base_dir = filepath.parent
        aliases = [*parent_aliases, *ast.aliases]
        exports = [*parent_exports, *ast.exports]
        dotenv = [
            *parent_dotenv,
            *(DotEnv(path=str(base_dir / d.path), line=d.line) for d in ast.dotenv),
        ]

        self._register_tasks(ast, prefix, filepath, aliases, exports, dotenv)

        for include in ast.includes:
            include_path = base_dir / include.path
            if not include_path.exists():
                raise IncludeNotFoundError(include.path, filepath, include.line)
            namespace = include_path.stem or "unknown"
            child_prefix = f"{prefix}:{namespace}" if prefix else namespace
            self.resolve_file(include_path, child_prefix, aliases, exports, dotenv)

        self.include_chain.pop()
        self.active.discard(canonical)
        self.processed.add(canonical)

    def _register_tasks(
        self,
        ast: Ast,
        prefix: str,
        source_file: Path,
        aliases: list[Alias],
        exports: list[Export],
        dotenv: list[DotEnv],
    ) -> None:
        for task in ast.tasks:
            qualified = f"{prefix}:{task.name}" if prefix else task.name
            existing = self.registry.get(qualified)
            if existing is not None:
                raise DuplicateTaskError(qualified, existing.source_file, source_file)
            self.registry[qualified] = ResolvedTask(
                qualified_name=qualified,
                task=task,
                aliases=list(aliases),
                exports=list(exports),
                dotenv=list(dotenv),
                source_file=source_file,
            )