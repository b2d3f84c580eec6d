"""File walking, caching, batching and timing helpers tuned for large projects."""

from __future__ import annotations

import os
import time
from collections.abc import Callable, Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_EXCLUDED_DIRS = (
    "node_modules",
    ".git",
    ".next",
    "dist",
    "build",
    "target",
    ".vscode",
    ".idea",
)

DEFAULT_EXCLUDED_EXTENSIONS = (
    "png", "jpg", "jpeg", "gif", "svg", "ico",
    "woff", "woff2", "ttf", "eot",
    "mp4", "mp3", "webm",
    "pdf", "zip", "tar", "gz",
)

_LARGE_FILE_BYTES = 1024 * 1024
_CHUNK_BYTES = 1 << 20


def _extension(path: Path) -> str | None:
    suffix = path.suffix
    return suffix[1:] if suffix else None


@dataclass
class OptimizedFileWalker:
    """Walks a directory tree, skipping build directories and binary assets."""

    max_depth: int | None = None
    follow_links: bool = False
    excluded_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS))
    excluded_extensions: list[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_EXTENSIONS)
    )
    parallel_threshold: int = 50

    def _is_regular_file(self, path: Path) -> bool:
        if not self.follow_links and path.is_symlink():
            return False
        return path.is_file()

    def _iter_files(self, start_dir: str | Path) -> Iterator[Path]:
        start = Path(start_dir)
        if not start.is_dir():
            if start.is_file():
                yield start
            return
        depths = {str(start): 0}
        for dirpath, dirnames, filenames in os.walk(start, followlinks=self.follow_links):
            depth = depths.get(dirpath, 0)
            child_depth = depth + 1
            if self.max_depth is not None and child_depth >= self.max_depth:
                dirnames[:] = []
            else:
                dirnames[:] = [d for d in dirnames if d not in self.excluded_dirs]
                for name in dirnames:
                    depths[os.path.join(dirpath, name)] = child_depth
            if self.max_depth is not None and child_depth > self.max_depth:
                continue
            for name in filenames:
                path = Path(dirpath) / name
                if self._is_regular_file(path):
                    yield path

    def _should_include_file(self, path: Path) -> bool:
        if any(part in self.excluded_dirs for part in path.parts):
            return False
        ext = _extension(path)
        return ext is None or ext.lower() not in self.excluded_extensions

    def _has_extension(self, path: Path, extensions: Sequence[str]) -> bool:
        ext = _extension(path)
        return ext is not None and ext.lower() in extensions

    def walk(self, start_dir: str | Path) -> list[Path]:
        """All included files below start_dir."""
        return [p for p in self._iter_files(start_dir) if self._should_include_file(p)]

    def walk_with_extensions(
        self, start_dir: str | Path, extensions: Iterable[str]
    ) -> list[Path]:
        """Included files whose lower-cased extension is one of the given ones."""
        extensions = tuple(extensions)
        return [
            p
            for p in self._iter_files(start_dir)
            if self._should_include_file(p) and self._has_extension(p, extensions)
        ]

    def process_files(self, files: Sequence[Path], processor: Callable[[Path], R]) -> list[R]:
        """Apply processor to each file, in threads when there are enough files."""
        if len(files) >= self.parallel_threshold:
            with ThreadPoolExecutor() as pool:
                return list(pool.map(processor, files))
        return [processor(f) for f in files]


class CachedFileReader:
    """Reads text files, keeping small ones in a bounded first-in-first-out cache."""

    def __init__(self, cache_size_limit: int = 100, max_file_size: int = _LARGE_FILE_BYTES) -> None:
        self._cache: dict[Path, str] = {}
        self.cache_size_limit = cache_size_limit
        self.max_file_size = max_file_size

    def read_file(self, path: str | Path) -> str:
        key = Path(path)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        size = key.stat().st_size
        content = key.read_text(encoding="utf-8")
        if size > self.max_file_size:
            return content
        if len(self._cache) >= self.cache_size_limit and self._cache:
            del self._cache[next(iter(self._cache))]
        self._cache[key] = content
        return content

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> tuple[int, int]:
        """(number of cached files, cache limit)."""
        return len(self._cache), self.cache_size_limit


def count_lines_optimized(path: str | Path) -> int:
    """Count lines; files of 1 MiB or more are counted by newline bytes in chunks."""
    path = Path(path)
    if path.stat().st_size < _LARGE_FILE_BYTES:
        content = path.read_text(encoding="utf-8")
        if not content:
            return 0
        return content.count("\n") + (0 if content.endswith("\n") else 1)
    with path.open("rb") as handle:
        return sum(chunk.count(b"\n") for chunk in iter(lambda: handle.read(_CHUNK_BYTES), b""))


class BatchProcessor(Generic[T]):
    """Collects items and hands them back in batches of a fixed size."""

    def __init__(self, batch_size: int) -> None:
        self.batch_size = batch_size
        self._items: list[T] = []

    def add(self, item: T) -> list[T] | None:
        """Add an item; return the full batch once it reaches batch_size."""
        self._items.append(item)
        if len(self._items) >= self.batch_size:
            return self.flush()
        return None

    def flush(self) -> list[T]:
        items, self._items = self._items, []
        return items

    def __len__(self) -> int:
        return len(self._items)


def _format_duration(seconds: float) -> str:
    if seconds >= 1.0:
        return f"{seconds:.3f}s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.3f}ms"
    if seconds >= 1e-6:
        return f"{seconds * 1e6:.3f}µs"
    return f"{seconds * 1e9:.0f}ns"


class PerformanceMonitor:
    """Records named checkpoints as seconds elapsed since creation."""

    def __init__(self) -> None:
        self._start = time.perf_counter()
        self._checkpoints: list[tuple[str, float]] = []

    def checkpoint(self, name: str) -> None:
        self._checkpoints.append((name, self.total_elapsed()))

    def total_elapsed(self) -> float:
        return time.perf_counter() - self._start

    @property
    def checkpoints(self) -> tuple[tuple[str, float], ...]:
        return tuple(self._checkpoints)

    def print_report(self) -> None:
        print("Performance Report:")
        print(f"Total time: {_format_duration(self.total_elapsed())}")
        last = 0.0
        for name, total in self._checkpoints:
            print(f"  {name}: {_format_duration(total)} (Δ {_format_duration(total - last)})")
            last = total