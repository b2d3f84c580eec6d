"""File discovery with the configured directory and file exclusions."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from pathlib import Path

from sniffcheck.config import Config, ConfigError

JS_TS_EXTENSIONS = ("ts", "tsx", "js", "jsx")


def _matches(pattern: str, name: str) -> bool:
    if "*" in pattern:
        try:
            return re.search(pattern.replace("*", ".*"), name) is not None
        except re.error:
            return False
    return name == pattern


def _extension(path: Path) -> str | None:
    suffix = path.suffix
    return suffix[1:] if suffix else None


class FileScanner:
    """Finds source files while applying the configured exclusion rules."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config if config is not None else Config()

    @classmethod
    def with_defaults(cls) -> FileScanner:
        """Scanner using the config file in the working directory, or the defaults."""
        try:
            config = Config.load()
        except ConfigError:
            config = Config()
        return cls(config)

    def _dir_name_excluded(self, name: str) -> bool:
        return any(_matches(p, name) for p in self.config.large_files.excluded_dirs)

    def find_files_with_extensions(
        self, directory: str | Path, extensions: Iterable[str]
    ) -> list[Path]:
        extensions = tuple(extensions)
        found = []
        for dirpath, dirnames, filenames in os.walk(directory):
            dirnames[:] = [d for d in dirnames if not self._dir_name_excluded(d)]
            for name in filenames:
                path = Path(dirpath) / name
                if path.is_symlink() or not path.is_file():
                    continue
                if self.has_extension(path, extensions) and not self.is_excluded_path(path):
                    found.append(path)
        return found

    def find_js_ts_files(self, directory: str | Path) -> list[Path]:
        return self.find_files_with_extensions(directory, JS_TS_EXTENSIONS)

    def is_excluded_path(self, path: str | Path) -> bool:
        """True when any component of the path is an excluded directory or the file is excluded."""
        path = Path(path)
        for part in path.parts:
            if part == path.anchor or part in ("..", ""):
                continue
            if self._dir_name_excluded(part):
                return True
        return self.is_excluded_file(path)

    def is_excluded_file(self, path: str | Path) -> bool:
        name = Path(path).name
        if name in ("", ".."):
            return False
        return any(_matches(p, name) for p in self.config.large_files.excluded_files)

    def has_extension(self, path: str | Path, extensions: Iterable[str]) -> bool:
        ext = _extension(Path(path))
        return ext is not None and ext in tuple(extensions)

    def is_js_ts_file(self, path: str | Path) -> bool:
        return self.has_extension(path, JS_TS_EXTENSIONS)


def is_excluded_path(path: str | Path) -> bool:
    return FileScanner.with_defaults().is_excluded_path(path)


def find_js_ts_files(directory: str | Path) -> list[Path]:
    return FileScanner.with_defaults().find_js_ts_files(directory)