"""File helpers: discovery, line counting, parallel processing and paths."""

from __future__ import annotations

import os
import time
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

from sniffcheck.config import Config, ConfigError
from sniffcheck.progress import create_progress_bar, create_spinner

T = TypeVar("T")

_LARGE_FILE_BYTES = 1_048_576
_MIN_SPINNER_SECONDS = 0.2


def _load_config() -> Config:
    try:
        return Config.load()
    except ConfigError:
        return Config()


def has_extension(path: str | Path, extensions: Iterable[str]) -> bool:
    """True when the path's extension is one of the given ones (without dot)."""
    suffix = Path(path).suffix
    return bool(suffix) and suffix[1:] in tuple(extensions)


def is_excluded_path_with_config(path: str | Path, config: Config) -> bool:
    """True when any component of the path is one of the configured excluded directories."""
    path = Path(path)
    excluded = config.large_files.excluded_dirs
    return any(
        part in excluded
        for part in path.parts
        if part != path.anchor and part not in ("..", "")
    )


def is_node_modules(path: str | Path) -> bool:
    return is_excluded_path_with_config(path, _load_config())


def find_files_with_extensions(directory: str | Path, extensions: Iterable[str]) -> list[Path]:
    """Recursively collect files with the given extensions outside excluded directories."""
    config = _load_config()
    extensions = tuple(extensions)
    excluded = set(config.large_files.excluded_dirs)
    found = []
    for dirpath, dirnames, filenames in os.walk(directory):
        dirnames[:] = [d for d in dirnames if d not in excluded]
        for name in filenames:
            path = Path(dirpath) / name
            if path.is_symlink() or not path.is_file():
                continue
            if has_extension(path, extensions) and not is_excluded_path_with_config(path, config):
                found.append(path)
    return found


def find_files_with_progress(
    directory: str | Path, extensions: Iterable[str], quiet: bool
) -> list[Path]:
    """Like find_files_with_extensions, showing a spinner unless quiet."""
    spinner = create_spinner("Scanning files...", quiet)
    start = time.monotonic()
    files = find_files_with_extensions(directory, extensions)
    if spinner is not None:
        elapsed = time.monotonic() - start
        if elapsed < _MIN_SPINNER_SECONDS:
            time.sleep(_MIN_SPINNER_SECONDS - elapsed)
        spinner.set_description_str(f"Found {len(files)} files")
        spinner.close()
    return files


def count_lines(path: str | Path) -> int:
    """Count lines; files over 1 MiB are counted by newline bytes."""
    path = Path(path)
    if path.stat().st_size > _LARGE_FILE_BYTES:
        with path.open("rb") as handle:
            return sum(chunk.count(b"\n") for chunk in iter(lambda: handle.read(1 << 20), b""))
    content = path.read_text(encoding="utf-8")
    if not content:
        return 0
    return content.count("\n") + (0 if content.endswith("\n") else 1)


def process_files_parallel(
    files: Sequence[Path],
    operation: Callable[[Path], T],
    description: str,
    quiet: bool,
) -> list[T]:
    """Apply operation to every file in parallel; results keep the input order."""
    bar = create_progress_bar(description, len(files), quiet)

    def run(path: Path) -> T:
        result = operation(path)
        if bar is not None:
            bar.update(1)
        return result

    try:
        with ThreadPoolExecutor() as pool:
            results = list(pool.map(run, files))
    finally:
        if bar is not None:
            bar.set_description_str("Complete")
            bar.close()
    return results


def relative_path(path: str | Path) -> str:
    """The path relative to the working directory when it lies below it."""
    path = Path(path)
    try:
        rel = path.relative_to(Path.cwd())
    except ValueError:
        return str(path)
    return "" if not rel.parts else str(rel)