"""The standard JSON envelope that every command's output is wrapped in."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Generic, TypeVar

T = TypeVar("T")

VERSION = "0.2.1"


def _jsonable(data: Any) -> Any:
    to_dict = getattr(data, "to_dict", None)
    if callable(to_dict) and not isinstance(data, type):
        return to_dict()
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return dataclasses.asdict(data)
    return data


def _default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    converted = _jsonable(value)
    if converted is value:
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
    return converted


def _timestamp(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


class AnalysisStatus(Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    FAILED = "failed"

    @classmethod
    def from_issues(
        cls, issues_found: int, warning_threshold: int, error_threshold: int
    ) -> AnalysisStatus:
        """Status graded by how many issues were found against two thresholds."""
        if issues_found == 0:
            return cls.SUCCESS
        if issues_found <= warning_threshold:
            return cls.WARNING
        if issues_found <= error_threshold:
            return cls.ERROR
        return cls.FAILED

    @classmethod
    def from_has_issues(cls, has_issues: bool) -> AnalysisStatus:
        return cls.WARNING if has_issues else cls.SUCCESS


@dataclass
class ResponseSummary:
    total_items: int
    issues_found: int
    status: AnalysisStatus
    duration_ms: int | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "total_items": self.total_items,
            "issues_found": self.issues_found,
            "status": self.status.value,
        }
        if self.duration_ms is not None:
            result["duration_ms"] = self.duration_ms
        return result


@dataclass
class StandardResponse(Generic[T]):
    command: str
    data: T
    summary: ResponseSummary
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = VERSION
    warnings: list[str] = field(default_factory=list)
    metadata: dict[str, Any] | None = None

    def with_warning(self, warning: str) -> StandardResponse[T]:
        self.warnings.append(warning)
        return self

    def with_warnings(self, warnings: list[str]) -> StandardResponse[T]:
        self.warnings.extend(warnings)
        return self

    def with_metadata(self, key: str, value: Any) -> StandardResponse[T]:
        if self.metadata is None:
            self.metadata = {}
        self.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping; empty warnings and absent metadata are left out."""
        result: dict[str, Any] = {
            "command": self.command,
            "timestamp": _timestamp(self.timestamp),
            "version": self.version,
            "data": _jsonable(self.data),
            "summary": self.summary.to_dict(),
        }
        if self.warnings:
            result["warnings"] = list(self.warnings)
        if self.metadata is not None:
            result["metadata"] = dict(self.metadata)
        return result

    def to_json_pretty(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False, default=_default)

    def to_json_compact(self) -> str:
        return json.dumps(
            self.to_dict(), separators=(",", ":"), ensure_ascii=False, default=_default
        )


def create_standard_json_output(
    command: str,
    data: T,
    total_items: int,
    issues_found: int,
    duration_ms: int | None = None,
) -> StandardResponse[T]:
    """Wrap command data with a summary whose status reflects whether issues exist."""
    summary = ResponseSummary(
        total_items=total_items,
        issues_found=issues_found,
        status=AnalysisStatus.from_has_issues(issues_found > 0),
        duration_ms=duration_ms,
    )
    return StandardResponse(command=command, data=data, summary=summary)


def output_result(
    response: StandardResponse[T],
    json_output: bool,
    quiet: bool,
    print_fn: Callable[[T, bool], None],
) -> None:
    """Print the response as pretty JSON, or hand its data to print_fn."""
    if json_output:
        print(response.to_json_pretty())
    else:
        print_fn(response.data, quiet)