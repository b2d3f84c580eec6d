"""Severity and status values, summary counting and shared report formatting."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from termcolor import colored


class Severity(Enum):
    INFO = "Info"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    def colored(self) -> str:
        """The upper-case severity name in its colour."""
        return colored(self.name, _SEVERITY_COLORS[self])

    def icon(self) -> str:
        return _SEVERITY_ICONS[self]


_SEVERITY_COLORS = {
    Severity.INFO: "blue",
    Severity.LOW: "cyan",
    Severity.MEDIUM: "yellow",
    Severity.HIGH: "yellow",
    Severity.CRITICAL: "red",
}

_SEVERITY_ICONS = {
    Severity.INFO: "ℹ️",
    Severity.LOW: "⚡",
    Severity.MEDIUM: "⚠️",
    Severity.HIGH: "🔴",
    Severity.CRITICAL: "🚨",
}


class Status(Enum):
    PASSED = "Passed"
    FAILED = "Failed"
    WARNING = "Warning"
    SKIPPED = "Skipped"

    def colored(self) -> str:
        """The upper-case status name in its colour."""
        return colored(self.name, _STATUS_COLORS[self])

    def icon(self) -> str:
        return _STATUS_ICONS[self]


_STATUS_COLORS = {
    Status.PASSED: "green",
    Status.FAILED: "red",
    Status.WARNING: "yellow",
    Status.SKIPPED: "cyan",
}

_STATUS_ICONS = {
    Status.PASSED: "✅",
    Status.FAILED: "❌",
    Status.WARNING: "⚠️",
    Status.SKIPPED: "⏭️",
}

_STATUS_MESSAGES = {
    Status.PASSED: ("✅", "ALL CHECKS PASSED", "green"),
    Status.FAILED: ("🚨", "ISSUES FOUND", "red"),
    Status.WARNING: ("⚠️", "WARNINGS DETECTED", "yellow"),
    Status.SKIPPED: ("⏭️", "SOME CHECKS SKIPPED", "cyan"),
}


@dataclass
class CommonSummary:
    total_items: int = 0
    passed: int = 0
    failed: int = 0
    warnings: int = 0
    skipped: int = 0
    critical_issues: int = 0

    def add_result(self, status: Status, severity: Severity | None = None) -> None:
        """Count one result with its status and optional severity."""
        self.total_items += 1
        if status is Status.PASSED:
            self.passed += 1
        elif status is Status.FAILED:
            self.failed += 1
        elif status is Status.WARNING:
            self.warnings += 1
        elif status is Status.SKIPPED:
            self.skipped += 1
        if severity is Severity.CRITICAL:
            self.critical_issues += 1

    def is_successful(self) -> bool:
        return self.failed == 0 and self.critical_issues == 0

    def overall_status(self) -> Status:
        if self.failed > 0 or self.critical_issues > 0:
            return Status.FAILED
        if self.warnings > 0:
            return Status.WARNING
        return Status.PASSED


def print_header(title: str, icon: str) -> None:
    print()
    print(colored(f"{icon} {title}", "blue", attrs=["bold"]))
    print(colored("=" * (len(title) + 4), "blue"))
    print()


def print_section(title: str, icon: str) -> None:
    print(colored(f"{icon} {title}", "white", attrs=["bold"]))
    print(colored("─" * (len(title) + 4), "white"))


def print_summary(summary: CommonSummary, duration_ms: int | None = None) -> None:
    print(colored("📈 SUMMARY", "white", attrs=["bold"]))
    print(colored("─────────", "white"))
    print(f"  Total items: {summary.total_items}")

    counts = (
        ("Passed:", summary.passed, "green"),
        ("Failed:", summary.failed, "red"),
        ("Warnings:", summary.warnings, "yellow"),
        ("Skipped:", summary.skipped, "cyan"),
        ("Critical:", summary.critical_issues, "red"),
    )
    for label, count, color in counts:
        if count > 0:
            print(f"  {colored(label, color)} {colored(str(count), color)}")

    if duration_ms is not None:
        print(f"  Analysis time: {duration_ms}ms")
    print()

    icon, text, color = _STATUS_MESSAGES[summary.overall_status()]
    print(f"  Status: {colored(f'{icon} {text}', color, attrs=['bold'])}")
    print()


def print_recommendations(recommendations: list[str]) -> None:
    if not recommendations:
        return
    print(colored("💡 RECOMMENDATIONS", "green", attrs=["bold"]))
    print(colored("──────────────────", "green"))
    for number, rec in enumerate(recommendations, start=1):
        print(f"  {number}. {colored(rec, 'green')}")
    print()


_SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_file_size(size: int) -> str:
    """Human-readable size in binary units, one decimal above bytes."""
    value = float(size)
    unit = 0
    while value >= 1024.0 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024.0
        unit += 1
    if unit == 0:
        return f"{size} {_SIZE_UNITS[0]}"
    return f"{value:.1f} {_SIZE_UNITS[unit]}"


def format_percentage(value: float, good_threshold: float, poor_threshold: float) -> str:
    """Percentage with one decimal, green when good, yellow in between, red when poor."""
    text = f"{value:.1f}%"
    if value >= good_threshold:
        return colored(text, "green")
    if value >= poor_threshold:
        return colored(text, "yellow")
    return colored(text, "red")


def format_number(num: int) -> str:
    """Integer with comma thousands separators."""
    return f"{num:,}"