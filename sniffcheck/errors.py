"""Exit codes and error helpers shared by the commands."""

from __future__ import annotations

import sys
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    GENERAL_ERROR = 1
    VALIDATION_FAILED = 2
    THRESHOLD_EXCEEDED = 3
    CONFIGURATION_ERROR = 4


class SniffError(Exception):
    """An error reported by a command."""


def check_failure_threshold(has_critical_issues: bool, exit_code: ExitCode) -> None:
    """Exit the process with the given code when critical issues were found."""
    if has_critical_issues:
        raise SystemExit(int(exit_code))


def report_error(error: BaseException) -> None:
    print(f"Error: {error}", file=sys.stderr)


def validation_failed(message: str) -> SniffError:
    return SniffError(f"Validation failed: {message}")


def file_error(operation: str, path: str, source: OSError) -> SniffError:
    error = SniffError(f"Failed to {operation} file '{path}': {source}")
    error.__cause__ = source
    return error