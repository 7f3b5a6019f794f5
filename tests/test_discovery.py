from taskfile.discovery import find_taskfile


def test_finds_taskfile_in_current_dir(tmp_path):
    (tmp_path / "Taskfile").write_text("task hello { echo hi }")
    assert find_taskfile(tmp_path) == tmp_path / "Taskfile"


def test_finds_taskfile_in_parent_dir(tmp_path):
    (tmp_path / "Taskfile").write_text("task hello { echo hi }")
    child = tmp_path / "subdir"
    child.mkdir()
    assert find_taskfile(child) == tmp_path / "Taskfile"


def test_none_found_within_temp_dir(tmp_path):
    deep = tmp_path / "a" / "b" / "c"
    deep.mkdir(parents=True)
    result = find_taskfile(deep)
    assert result is None or (result.is_file() and tmp_path not in result.parents)


def test_nearest_taskfile_wins(tmp_path):
    (tmp_path / "Taskfile").write_text("")
    child = tmp_path / "inner"
    child.mkdir()
    (child / "Taskfile").write_text("")
    assert find_taskfile(child / ".") == child / "Taskfile"


def test_directory_named_taskfile_is_skipped(tmp_path):
    (tmp_path / "Taskfile").write_text("")
    child = tmp_path / "inner"
    (child / "Taskfile").mkdir(parents=True)
    assert find_taskfile(child) == tmp_path / "Taskfile"


def test_defaults_to_working_directory(tmp_path, monkeypatch):
    (tmp_path / "Taskfile").write_text("")
    monkeypatch.chdir(tmp_path)
    result = find_taskfile()
    assert result is not None
    assert result.resolve() == (tmp_path / "Taskfile").resolve()