"""Execution of tasks, their dependencies and parameters."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from .ast import Param
from .resolver import ResolvedTask
from .runner import TaskRunner
from .script import build_script
from .style import style

_PathArg = Union[str, "PathLike[str]"]


class ExecError(Exception):
    """Base class for errors raised while running tasks."""


class TaskFailedError(ExecError):
    """A task's script exited with a non-zero code."""

    def __init__(self, name: str, code: int, file: _PathArg, line: int) -> None:
        self.name = name
        self.code = code
        self.file = Path(file)
        self.line = line
        super().__init__(
            f"task '{name}' (at {self.file}:{line}) failed with exit code {code}"
        )


class TaskSignaledError(ExecError):
    """A task's script was terminated by a signal."""

    def __init__(self, name: str, file: _PathArg, line: int) -> None:
        self.name = name
        self.file = Path(file)
        self.line = line
        super().__init__(f"task '{name}' (at {self.file}:{line}) was terminated by signal")


class BashError(ExecError):
    """The shell could not be started."""

    def __init__(self, source: OSError) -> None:
        self.source = source
        super().__init__(f"failed to execute bash: {source}")
        self.__cause__ = source


class MissingParamError(ExecError):
    """A required task parameter was not given."""

    def __init__(self, task: str, param: str) -> None:
        self.task = task
        self.param = param
        super().__init__(f"missing required parameter '--{param}' for task '{task}'")


class UnknownTaskError(ExecError):
    """No task with the given name exists."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown task: '{name}'")


class DependencyNotFoundError(ExecError):
    """A task depends on a task that does not exist."""

    def __init__(self, task: str, dep: str) -> None:
        self.task = task
        self.dep = dep
        super().__init__(f"dependency '{dep}' not found for task '{task}'")


class CircularDependencyError(ExecError):
    """Task dependencies form a cycle."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = list(chain)
        super().__init__(f"circular dependency detected: {' → '.join(self.chain)}")


class TaskCancelledError(ExecError):
    """The user declined a task's confirmation prompt."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"task '{name}' cancelled by user")


def execute_task(
    name: str,
    task_args: Sequence[str],
    registry: Mapping[str, ResolvedTask],
    runner: TaskRunner,
    dry_run: bool = False,
    confirm: Optional[Callable[[str], bool]] = None,
) -> int:
    """Run task ``name`` after its dependencies and return its exit status.

    ``task_args`` are ``--key=value`` arguments for the task's parameters.
    ``confirm`` asks the user to approve tasks marked with ``@confirm``; it
    defaults to an interactive prompt on stdin.
    """
    run = _Execution(registry, runner, dry_run, confirm or prompt_confirm)
    return run.execute(name, task_args)


class _Execution:
    def __init__(
        self,
        registry: Mapping[str, ResolvedTask],
        runner: TaskRunner,
        dry_run: bool,
        confirm: Callable[[str], bool],
    ) -> None:
        self.registry = registry
        self.runner = runner
        self.dry_run = dry_run
        self.confirm = confirm
        self.visited: set[str] = set()
        self.chain: list[str] = []

    def execute(self, name: str, task_args: Sequence[str]) -> int:
        if name in self.visited:
            self.chain.append(name)
            raise CircularDependencyError(self.chain)

        self.visited.add(name)
        self.chain.append(name)

        resolved = self.registry.get(name)
        if resolved is None:
            raise UnknownTaskError(name)

        arg_map = parse_task_args(task_args)

        for dep in resolved.task.dependencies:
            dep_name = resolve_dep_name(name, dep)
            if dep_name not in self.registry:
                raise DependencyNotFoundError(name, dep_name)
            print(f"{style('→ dep:', 'dimmed')} {style(dep_name, 'dimmed')}", file=sys.stderr)
            self.execute(dep_name, [])

        if resolved.task.parallel_dependencies:
            self._run_parallel(name, resolved.task.parallel_dependencies)

        message = resolved.task.confirm
        if message is not None and not self.dry_run and not self.confirm(message):
            raise TaskCancelledError(name)

        param_values = build_param_values(name, resolved.task.params, arg_map)

        if self.dry_run:
            print(f"{style('# dry-run:', 'dimmed')} {style(name, 'green', 'bold')}")
            print(build_script(resolved, param_values))
            status = self._run("true")
        else:
            status = self._run_single(name, resolved, param_values)

        self.chain.pop()
        self.visited.discard(name)
        return status

    def _run(self, script: str) -> int:
        try:
            return self.runner.run_script(script)
        except OSError as exc:
            raise BashError(exc) from exc

    def _run_single(
        self, name: str, resolved: ResolvedTask, param_values: Mapping[str, str]
    ) -> int:
        status = self._run(build_script(resolved, param_values))
        if status < 0:
            raise TaskSignaledError(name, resolved.source_file, resolved.task.line)
        if status != 0:
            raise TaskFailedError(name, status, resolved.source_file, resolved.task.line)
        return status

    def _run_parallel(self, parent: str, deps: Iterable[str]) -> None:
        dep_names = [resolve_dep_name(parent, dep) for dep in deps]
        for dep_name in dep_names:
            if dep_name not in self.registry:
                raise DependencyNotFoundError(parent, dep_name)

        print(
            f"{style('→ parallel:', 'dimmed')} {style(', '.join(dep_names), 'dimmed')}",
            file=sys.stderr,
        )

        scripts = [(dep, build_script(self.registry[dep], {})) for dep in dep_names]

        if self.dry_run:
            for dep_name, script in scripts:
                print(
                    f"{style('# dry-run parallel dep:', 'dimmed')} "
                    f"{style(dep_name, 'green', 'bold')} "
                    f"{style('(would run in parallel)', 'dimmed')}"
                )
                print(script)
            return

        with ThreadPoolExecutor(max_workers=len(scripts)) as pool:
            futures = [
                pool.submit(_run_parallel_dep, self.runner, dep_name, script)
                for dep_name, script in scripts
            ]
            errors = [future.result() for future in futures]

        for error in errors:
            if error is not None:
                raise error


def _run_parallel_dep(runner: TaskRunner, name: str, script: str) -> Optional[ExecError]:
    try:
        status = runner.run_script(script)
    except OSError as exc:
        return BashError(exc)
    if status != 0:
        return TaskFailedError(name, status if status > 0 else 1, "parallel", 0)
    return None


def prompt_confirm(message: str) -> bool:
    """Ask a yes/no question on stderr; only "y" or "yes" counts as yes."""
    print(f"{style('?', 'cyan', 'bold')} {message} [y/N] ", end="", file=sys.stderr)
    sys.stderr.flush()
    try:
        answer = sys.stdin.readline()
    except (OSError, ValueError):
        return False
    return answer.strip().lower() in ("y", "yes")


def parse_task_args(args: Iterable[str]) -> dict[str, str]:
    """Turn ``--key=value`` and ``--flag`` arguments into a mapping.

    Other arguments are ignored with a warning on stderr.
    """
    values: dict[str, str] = {}
    for arg in args:
        if arg.startswith("--"):
            key, _, value = arg[2:].partition("=")
            values[key] = value
        else:
            print(
                f"{style('warning:', 'yellow', 'bold')} ignoring positional argument "
                f"'{arg}' — use --key=value format",
                file=sys.stderr,
            )
    return values


def build_param_values(
    task_name: str, params: Iterable[Param], arg_map: Mapping[str, str]
) -> dict[str, str]:
    """Pick each parameter's value from the arguments or its default."""
    values: dict[str, str] = {}
    for param in params:
        if param.name in arg_map:
            values[param.name] = arg_map[param.name]
        elif param.default is not None:
            values[param.name] = param.default
        else:
            raise MissingParamError(task_name, param.name)
    return values


def resolve_dep_name(task_name: str, dep: str) -> str:
    """Qualify an unqualified dependency with the namespace of the depending task."""
    if ":" in dep:
        return dep
    namespace, sep, _ = task_name.rpartition(":")
    return f"{namespace}:{dep}" if sep else dep