"""Progress bars and spinners with one look across the commands."""

from __future__ import annotations

import time

from tqdm import tqdm

_SPINNER_FORMAT = "{desc} [{elapsed}]"
_BAR_FORMAT = "[{elapsed}] |{bar:40}| {n_fmt}/{total_fmt} {desc}"
_DEFAULT_LENGTH = 100
_MIN_DISPLAY_SECONDS = 0.2


class ProgressBarBuilder:
    """Fluent builder for spinners and determinate progress bars."""

    def __init__(self) -> None:
        self._quiet = False
        self._message = "Processing..."
        self._length: int | None = None

    def quiet(self, quiet: bool) -> ProgressBarBuilder:
        self._quiet = quiet
        return self

    def message(self, message: str) -> ProgressBarBuilder:
        self._message = str(message)
        return self

    def length(self, length: int) -> ProgressBarBuilder:
        self._length = length
        return self

    def spinner(self) -> tqdm | None:
        """Build an indeterminate progress display, or None when quiet."""
        if self._quiet:
            return None
        return tqdm(total=None, desc=self._message, bar_format=_SPINNER_FORMAT)

    def progress_bar(self) -> tqdm | None:
        """Build a determinate progress bar, or None when quiet."""
        if self._quiet:
            return None
        length = self._length if self._length is not None else _DEFAULT_LENGTH
        return tqdm(
            total=length,
            desc=self._message,
            bar_format=_BAR_FORMAT,
            ascii="-#",
        )


class FileProgressTracker:
    """Tracks progress over a set of files; usable as a context manager."""

    def __init__(self, message: str, total_files: int | None = None, quiet: bool = False) -> None:
        builder = ProgressBarBuilder().quiet(quiet).message(message)
        if total_files is not None:
            self._bar = builder.length(total_files).progress_bar()
        else:
            self._bar = builder.spinner()
        self._start = time.monotonic()
        self._position = 0
        self._message = message
        self._finished = False

    @property
    def bar(self) -> tqdm | None:
        return self._bar

    @property
    def position(self) -> int:
        return self._position

    @property
    def current_message(self) -> str:
        return self._message

    @property
    def finished(self) -> bool:
        return self._finished

    def inc(self) -> None:
        self._position += 1
        if self._bar is not None:
            self._bar.update(1)

    def set_position(self, pos: int) -> None:
        self._position = pos
        if self._bar is not None:
            self._bar.n = pos
            self._bar.refresh()

    def set_message(self, message: str) -> None:
        self._message = message
        if self._bar is not None:
            self._bar.set_description_str(message)

    def _wait_for_visibility(self) -> None:
        elapsed = time.monotonic() - self._start
        if elapsed < _MIN_DISPLAY_SECONDS:
            time.sleep(_MIN_DISPLAY_SECONDS - elapsed)

    def finish_with_message(self, message: str) -> None:
        """Finish, leaving the bar on screen with a final message."""
        self._wait_for_visibility()
        self._message = message
        self._finished = True
        if self._bar is not None:
            self._bar.set_description_str(message)
            self._bar.close()

    def finish_and_clear(self) -> None:
        """Finish and remove the bar from the screen."""
        self._wait_for_visibility()
        self._clear()

    def _clear(self) -> None:
        self._finished = True
        if self._bar is not None:
            self._bar.leave = False
            self._bar.close()

    def close(self) -> None:
        """Clear the bar if it has not been finished yet."""
        if not self._finished:
            self._clear()

    def __enter__(self) -> FileProgressTracker:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def create_spinner(message: str, quiet: bool) -> tqdm | None:
    return ProgressBarBuilder().quiet(quiet).message(message).spinner()


def create_progress_bar(message: str, total: int, quiet: bool) -> tqdm | None:
    return ProgressBarBuilder().quiet(quiet).message(message).length(total).progress_bar()