from pathlib import Path

import pytest

from taskfile.ast import Param, Task
from taskfile.display import (
    format_task_name,
    print_help_with_tasks,
    print_task_list,
    render_task_list,
)
from taskfile.resolver import ResolvedTask


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    monkeypatch.delenv("CLICOLOR_FORCE", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")


def make(name, description=None, params=None):
    task = Task(name=name.rsplit(":", 1)[-1], description=description, params=params or [])
    return ResolvedTask(qualified_name=name, task=task, source_file=Path("Taskfile"))


def registry_of(*tasks):
    return {t.qualified_name: t for t in tasks}


def test_format_task_name_without_params():
    assert format_task_name(make("build")) == "build"


def test_format_task_name_with_params():
    task = make("greet", params=[Param("name", "world"), Param("env")])
    assert format_task_name(task) == "greet [name=world, env]"


def test_render_orders_roots_then_namespaces():
    reg = registry_of(
        make("test", "Run tests"),
        make("docker:up"),
        make("build", "Build the project"),
        make("deploy:staging"),
    )
    lines = render_task_list(reg).split("\n")
    names = [line.split()[0] for line in lines if line.startswith("  ")]
    assert names == ["build", "test", "deploy:staging", "docker:up"]
    assert " deploy:" in lines
    assert " docker:" in lines
    assert lines.index(" deploy:") < lines.index(" docker:")


def test_render_aligns_descriptions():
    reg = registry_of(
        make("build", "Build the project"),
        make("t", "Run tests"),
        make("docker:compose:ps", "List containers"),
    )
    lines = [line for line in render_task_list(reg).split("\n") if line.startswith("  ")]
    columns = set()
    for line in lines:
        task_name = line.split()[0]
        columns.add(line.index(task_name) + len(task_name) + len(line[line.index(task_name) + len(task_name):]) - len(line[line.index(task_name) + len(task_name):].lstrip()))
    assert len(columns) == 1


def test_render_task_without_description_has_no_padding():
    reg = registry_of(make("build"), make("longer-name", "Something"))
    lines = render_task_list(reg).split("\n")
    assert lines[0] == "  build"


def test_render_empty_registry():
    assert render_task_list({}) == ""


def test_print_task_list(capsys):
    print_task_list(registry_of(make("docker:up"), make("build", "Build the project")))
    out = capsys.readouterr().out
    assert "docker:up" in out
    assert "Build the project" in out


def test_print_help_with_tasks(capsys):
    print_help_with_tasks(registry_of(make("build", "Build the project")))
    out = capsys.readouterr().out
    assert "Usage:" in out
    assert "--list, -l" in out
    assert "Available tasks:" in out
    assert out.index("Available tasks:") < out.index("Build the project")


def test_help_options_aligned(capsys):
    print_help_with_tasks({})
    out = capsys.readouterr().out
    list_line = next(line for line in out.splitlines() if "--list, -l" in line)
    version_line = next(line for line in out.splitlines() if "--version, -v" in line)
    assert list_line.index("List all available tasks") == version_line.index("Show version")