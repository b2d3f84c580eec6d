from pathlib import Path

import pytest

from sniffcheck.config import Config
from sniffcheck.fileutils import (
    count_lines,
    find_files_with_extensions,
    find_files_with_progress,
    has_extension,
    is_excluded_path_with_config,
    is_node_modules,
    process_files_parallel,
    relative_path,
)


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_file_walking_with_extensions(project):
    (project / "test.ts").write_text("console.log('test');")
    (project / "test.js").write_text("console.log('test');")
    (project / "test.py").write_text("print('test')")
    (project / "README.md").write_text("# Test")
    files = find_files_with_extensions(project, ["ts", "js"])
    assert len(files) == 2
    assert any(f.name == "test.ts" for f in files)
    assert any(f.name == "test.js" for f in files)


def test_file_walking_skips_excluded_dirs(project):
    (project / "node_modules").mkdir()
    (project / "node_modules" / "dep.ts").write_text("x")
    (project / "src").mkdir()
    (project / "src" / "app.ts").write_text("x")
    files = find_files_with_extensions(project, ["ts"])
    assert [f.name for f in files] == ["app.ts"]


def test_find_files_with_progress_matches_plain_search(project):
    (project / "a.ts").write_text("x")
    (project / "b.tsx").write_text("x")
    quiet = find_files_with_progress(project, ["ts", "tsx"], True)
    loud = find_files_with_progress(project, ["ts", "tsx"], False)
    assert sorted(quiet) == sorted(find_files_with_extensions(project, ["ts", "tsx"]))
    assert sorted(loud) == sorted(quiet)


def test_has_extension():
    assert has_extension(Path("test.ts"), ["ts", "tsx"])
    assert has_extension(Path("test.tsx"), ["ts", "tsx"])
    assert not has_extension(Path("test.py"), ["ts", "tsx"])
    assert not has_extension(Path("test"), ["ts", "tsx"])


def test_count_lines_optimized(tmp_path):
    path = tmp_path / "test.ts"
    path.write_text("line 1\nline 2\nline 3\n")
    assert count_lines(path) == 3


def test_count_lines_without_trailing_newline(tmp_path):
    path = tmp_path / "a.ts"
    path.write_text("line 1\nline 2\nline 3")
    assert count_lines(path) == 3
    empty = tmp_path / "empty.ts"
    empty.write_text("")
    assert count_lines(empty) == 0


def test_count_lines_large_file_counts_newlines(tmp_path):
    path = tmp_path / "big.js"
    path.write_bytes(b"a\n" * 600_000 + b"tail")
    assert count_lines(path) == 600_000


def test_count_lines_missing_file(tmp_path):
    with pytest.raises(OSError):
        count_lines(tmp_path / "missing.ts")


def test_is_excluded_path_with_config():
    config = Config()
    assert is_excluded_path_with_config(Path("a/node_modules/b.js"), config)
    assert is_excluded_path_with_config("target/debug/x", config)
    assert not is_excluded_path_with_config("src/lib/x.ts", config)


def test_is_node_modules(project):
    assert is_node_modules("node_modules/react/index.js")
    assert not is_node_modules("src/index.js")


def test_process_files_parallel_keeps_order(tmp_path):
    files = []
    for i in range(20):
        path = tmp_path / f"f{i}.ts"
        path.write_text("x\n" * (i + 1))
        files.append(path)
    results = process_files_parallel(files, count_lines, "Counting", True)
    assert results == list(range(1, 21))


def test_process_files_parallel_propagates_errors(tmp_path):
    files = [tmp_path / "missing.ts"]
    with pytest.raises(OSError):
        process_files_parallel(files, count_lines, "Counting", False)


def test_get_relative_path():
    test_path = Path.cwd() / "src" / "main.rs"
    relative = relative_path(test_path)
    assert "src/main.rs" in relative or "src\\main.rs" in relative


def test_relative_path_outside_cwd(tmp_path, monkeypatch):
    inner = tmp_path / "inner"
    inner.mkdir()
    monkeypatch.chdir(inner)
    outside = tmp_path / "other" / "file.rs"
    assert relative_path(outside) == str(outside)