import io
import sys

import pytest

from taskfile.cli import build_parser, main


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    def write(content, name="Taskfile"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return write


def test_parser_reads_flags():
    args = build_parser().parse_args(["greet", "--dry-run", "-f", "x.Taskfile"])
    assert args.task_name == "greet"
    assert args.dry_run is True
    assert args.file == "x.Taskfile"
    assert args.list is False


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--version"])
    assert info.value.code == 0
    assert "task 0.8.0" in capsys.readouterr().out


def test_runs_simple_task(project, capfd):
    project('task hello {\n  echo "Hello from task"\n}')
    assert main(["hello"]) == 0
    assert "Hello from task" in capfd.readouterr().out


def test_list_shows_tasks(project, capfd):
    project(
        "@description Build the project\ntask build {\n  echo \"building\"\n}\n\n"
        "@description Run tests\ntask test {\n  echo \"testing\"\n}"
    )
    assert main(["--list"]) == 0
    out = capfd.readouterr().out
    assert "build" in out
    assert "Build the project" in out
    assert "test" in out
    assert "Run tests" in out


def test_task_with_params(project, capfd):
    project('task greet [name="world"] {\n  echo "Hello, $name!"\n}')
    assert main(["greet", "--", "--name=Rust"]) == 0
    assert "Hello, Rust!" in capfd.readouterr().out


def test_task_with_default_param(project, capfd):
    project('task greet [name="world"] {\n  echo "Hello, $name!"\n}')
    assert main(["greet"]) == 0
    assert "Hello, world!" in capfd.readouterr().out


def test_missing_required_param(project, capfd):
    project('task deploy [env] {\n  echo "$env"\n}')
    assert main(["deploy"]) != 0
    assert "missing required parameter" in capfd.readouterr().err


def test_unknown_task_suggests(project, capfd):
    project('task build {\n  echo "building"\n}\n\ntask test {\n  echo "testing"\n}')
    assert main(["buil"]) != 0
    err = capfd.readouterr().err
    assert "unknown task" in err
    assert "build" in err


def test_task_with_dependencies(project, capfd):
    project(
        'task clean {\n  echo "cleaning"\n}\n\n'
        'task build depends=[clean] {\n  echo "building"\n}'
    )
    assert main(["build"]) == 0
    out = capfd.readouterr().out
    assert "cleaning" in out
    assert "building" in out


def test_exports_injected(project, capfd):
    project('export PROJECT="myapp"\n\ntask info {\n  echo "Project: $PROJECT"\n}')
    assert main(["info"]) == 0
    assert "Project: myapp" in capfd.readouterr().out


def test_aliases_as_functions(project, capfd):
    project('alias greet="echo Hello"\n\ntask hi {\n  greet World\n}')
    assert main(["hi"]) == 0
    assert "Hello World" in capfd.readouterr().out


def test_namespaced_tasks(project, capfd):
    project('include "tasks/docker.Taskfile"\n\ntask build {\n  echo "building"\n}')
    project('task up {\n  echo "docker up"\n}', "tasks/docker.Taskfile")

    assert main(["--list"]) == 0
    assert "docker:up" in capfd.readouterr().out

    assert main(["docker:up"]) == 0
    assert "docker up" in capfd.readouterr().out


def test_no_taskfile_error(tmp_path, monkeypatch, capfd):
    deep = tmp_path / "a" / "b" / "c"
    deep.mkdir(parents=True)
    monkeypatch.chdir(deep)
    assert main(["build"]) != 0
    assert "No Taskfile found" in capfd.readouterr().err


def test_task_exit_code_propagated(project):
    project("task fail {\n  exit 42\n}")
    assert main(["fail"]) == 42


def test_inherited_exports_in_namespaced_tasks(project, capfd):
    project('export PROJECT="myapp"\ninclude "tasks/deploy.Taskfile"')
    project('task staging {\n  echo "Deploying $PROJECT"\n}', "tasks/deploy.Taskfile")
    assert main(["deploy:staging"]) == 0
    assert "Deploying myapp" in capfd.readouterr().out


def test_dependency_cycle_detected(project, capfd):
    project('task a depends=[b] {\n  echo "a"\n}\n\ntask b depends=[a] {\n  echo "b"\n}')
    assert main(["a"]) != 0
    assert "circular dependency" in capfd.readouterr().err


def test_braces_in_strings_work(project, capfd):
    project('task test {\n  echo "braces { and } inside strings"\n}')
    assert main(["test"]) == 0
    assert "braces { and } inside strings" in capfd.readouterr().out


def test_dry_run_prints_script(project, capfd):
    project('task hello {\n  echo "dry body"\n}')
    assert main(["hello", "--dry-run"]) == 0
    out = capfd.readouterr().out
    assert "# dry-run:" in out
    assert "set -euo pipefail" in out
    assert out.count("dry body") == 1


def test_missing_file_flag(project, capfd):
    assert main(["--file", "nope.Taskfile", "x"]) == 1
    assert "Taskfile not found: nope.Taskfile" in capfd.readouterr().err


def test_file_flag_selects_taskfile(project, capfd):
    project('task other {\n  echo "from other"\n}', "alt.Taskfile")
    assert main(["-f", "alt.Taskfile", "other"]) == 0
    assert "from other" in capfd.readouterr().out


def test_parse_error_reported(project, capfd):
    project("bogus line\n")
    assert main(["x"]) == 1
    assert "unexpected line: bogus line" in capfd.readouterr().err


def test_cancelled_task_exits_zero(project, monkeypatch, capfd):
    project('@confirm Really?\ntask nuke {\n  echo "nuked"\n}')
    monkeypatch.setattr(sys, "stdin", io.StringIO("n\n"))
    assert main(["nuke"]) == 0
    captured = capfd.readouterr()
    assert "cancelled by user" in captured.err
    assert "nuked" not in captured.out


def test_init_creates_taskfile_once(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["--init"]) == 0
    assert (tmp_path / "Taskfile").is_file()
    assert main(["--init"]) == 1