from pathlib import Path

import pytest

from sniffcheck.config import Config, LargeFilesConfig
from sniffcheck.scanner import FileScanner, find_js_ts_files, is_excluded_path


@pytest.fixture
def scanner(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return FileScanner.with_defaults()


def _write(root: Path, rel: str, text: str = "x") -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


def test_extension_checking(scanner):
    assert scanner.has_extension(Path("test.ts"), ["ts", "js"])
    assert not scanner.has_extension(Path("test.py"), ["ts", "js"])
    assert not scanner.has_extension(Path("Makefile"), ["ts", "js"])


def test_js_ts_file_detection(scanner):
    assert scanner.is_js_ts_file(Path("component.tsx"))
    assert scanner.is_js_ts_file(Path("utils.js"))
    assert not scanner.is_js_ts_file(Path("styles.css"))


def test_exclusion_patterns(scanner):
    assert scanner.is_excluded_path(Path("./node_modules/package/file.js"))
    assert scanner.is_excluded_path(Path("./project/node_modules/test.ts"))
    assert not scanner.is_excluded_path(Path("./src/components/Test.tsx"))


def test_excluded_file_patterns(scanner):
    assert scanner.is_excluded_file("src/app.min.js")
    assert scanner.is_excluded_file("package-lock.json")
    assert not scanner.is_excluded_file("src/app.js")
    assert scanner.is_excluded_path("src/vendor.bundle.js")


def test_glob_directory_exclusion():
    config = Config(large_files=LargeFilesConfig(excluded_dirs=["gen*"]))
    scanner = FileScanner(config)
    assert scanner.is_excluded_path("src/generated/a.ts")
    assert not scanner.is_excluded_path("src/node_modules/a.ts")


def test_find_files_applies_exclusions(scanner, tmp_path):
    _write(tmp_path, "src/a.ts")
    _write(tmp_path, "src/b.tsx")
    _write(tmp_path, "src/c.css")
    _write(tmp_path, "src/lib.min.js")
    _write(tmp_path, "node_modules/pkg/index.js")
    _write(tmp_path, "dist/out.js")
    found = scanner.find_js_ts_files(tmp_path)
    names = sorted(p.name for p in found)
    assert names == ["a.ts", "b.tsx"]


def test_with_defaults_reads_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Config(large_files=LargeFilesConfig(excluded_dirs=["legacy"])).save_to_file("sniff.toml")
    _write(tmp_path, "legacy/old.ts")
    _write(tmp_path, "node_modules/kept.ts")
    found = find_js_ts_files(tmp_path)
    assert sorted(p.name for p in found) == ["kept.ts"]
    assert is_excluded_path("legacy/old.ts")


def test_module_level_exclusion_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert is_excluded_path("a/.next/b.js")
    assert not is_excluded_path("a/pages/b.js")