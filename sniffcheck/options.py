"""Option sets shared by the commands."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from typing import Any


def _jsonable(data: Any) -> Any:
    to_dict = getattr(data, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return dataclasses.asdict(data)
    return data


@dataclass
class OutputOptions:
    json: bool = False
    quiet: bool = False

    def print_output(self, data: Any) -> None:
        """Print data as pretty JSON, or as text unless quiet."""
        if self.json:
            print(json.dumps(_jsonable(data), indent=2, ensure_ascii=False))
        elif not self.quiet:
            print(data)

    def print_if_not_quiet(self, message: str) -> None:
        if not self.quiet:
            print(message)


@dataclass
class ThresholdOptions:
    threshold: int = 100
    warning_threshold: int | None = None
    error_threshold: int | None = None


@dataclass
class FileFilterOptions:
    include: str | None = None
    exclude: str | None = None
    pattern: str | None = None


@dataclass
class ValidationOptions:
    fail_fast: bool = False
    max_warnings: int | None = None
    ignore_false_positives: bool = False