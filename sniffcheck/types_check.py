"""TypeScript quality check: 'any' usage, suppressions and missing return types."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from termcolor import colored

from sniffcheck.errors import ExitCode, check_failure_threshold
from sniffcheck.fileutils import process_files_parallel, relative_path
from sniffcheck.patterns import common_patterns
from sniffcheck.scanner import FileScanner


class IssueType(Enum):
    ANY_USAGE = "AnyUsage"
    MISSING_RETURN_TYPE = "MissingReturnType"
    UNTYPED_PARAMETER = "UntypedParameter"
    TS_IGNORE = "TSIgnore"
    TS_EXPECT_ERROR = "TSExpectError"
    IMPLICIT_ANY = "ImplicitAny"


_GROUP_TITLES = {
    IssueType.ANY_USAGE: "🚫 'any' Type Usage",
    IssueType.MISSING_RETURN_TYPE: "📝 Missing Return Types",
    IssueType.UNTYPED_PARAMETER: "❓ Untyped Parameters",
    IssueType.TS_IGNORE: "⚠️ @ts-ignore Comments",
    IssueType.TS_EXPECT_ERROR: "⚠️ @ts-expect-error Comments",
    IssueType.IMPLICIT_ANY: "🔄 Implicit Any",
}


@dataclass
class TypeIssue:
    file: str
    line: int
    column: int
    issue_type: IssueType
    message: str
    suggestion: str | None = None


@dataclass
class TypeSummary:
    files_scanned: int
    total_issues: int
    any_usage_count: int
    missing_return_types: int
    untyped_parameters: int
    ts_ignore_count: int
    type_coverage_score: float


@dataclass
class TypeScriptReport:
    issues: list[TypeIssue]
    summary: TypeSummary

    def to_dict(self) -> dict[str, Any]:
        issues = []
        for issue in self.issues:
            entry = dataclasses.asdict(issue)
            entry["issue_type"] = issue.issue_type.value
            issues.append(entry)
        return {"issues": issues, "summary": dataclasses.asdict(self.summary)}


def _lines(content: str) -> list[str]:
    segments = content.split("\n")
    tail = segments.pop()
    lines = [s[:-1] if s.endswith("\r") else s for s in segments]
    if tail:
        lines.append(tail)
    return lines


def analyze_file(path: str | Path) -> list[TypeIssue]:
    """Scan one TypeScript file line by line for type-quality issues."""
    content = Path(path).read_text(encoding="utf-8")
    patterns = common_patterns()
    file_path = relative_path(path)
    issues: list[TypeIssue] = []

    for number, line in enumerate(_lines(content), start=1):
        for match in patterns.any_type.finditer(line):
            issues.append(
                TypeIssue(
                    file=file_path,
                    line=number,
                    column=len(line[: match.start()].encode("utf-8")),
                    issue_type=IssueType.ANY_USAGE,
                    message="Usage of 'any' type detected",
                    suggestion="Consider using a more specific type",
                )
            )

        if patterns.ts_ignore.search(line):
            issues.append(
                TypeIssue(
                    file=file_path,
                    line=number,
                    column=0,
                    issue_type=IssueType.TS_IGNORE,
                    message="@ts-ignore comment found",
                    suggestion="Consider fixing the underlying type issue instead",
                )
            )

        if patterns.ts_expect_error.search(line):
            issues.append(
                TypeIssue(
                    file=file_path,
                    line=number,
                    column=0,
                    issue_type=IssueType.TS_EXPECT_ERROR,
                    message="@ts-expect-error comment found",
                    suggestion="Verify if this error suppression is still needed",
                )
            )

        if (
            patterns.function_def.search(line)
            and "):" not in line
            and not line.rstrip().endswith("=> {")
            and "constructor" not in line
            and "() {" not in line
        ):
            issues.append(
                TypeIssue(
                    file=file_path,
                    line=number,
                    column=0,
                    issue_type=IssueType.MISSING_RETURN_TYPE,
                    message="Function missing explicit return type",
                    suggestion="Add explicit return type annotation",
                )
            )

    return issues


def create_summary(files_scanned: int, issues: list[TypeIssue]) -> TypeSummary:
    """Count issues by kind and estimate a type coverage score between 0 and 100."""
    counts = {kind: 0 for kind in IssueType}
    for issue in issues:
        counts[issue.issue_type] += 1

    potential = files_scanned * 10
    if potential > 0:
        score = (potential - len(issues)) / potential * 100.0
    else:
        score = 100.0

    return TypeSummary(
        files_scanned=files_scanned,
        total_issues=len(issues),
        any_usage_count=counts[IssueType.ANY_USAGE],
        missing_return_types=counts[IssueType.MISSING_RETURN_TYPE],
        untyped_parameters=counts[IssueType.UNTYPED_PARAMETER],
        ts_ignore_count=counts[IssueType.TS_IGNORE] + counts[IssueType.TS_EXPECT_ERROR],
        type_coverage_score=min(max(score, 0.0), 100.0),
    )


def analyze_typescript_files(
    directory: str | Path | None = None, quiet: bool = False
) -> TypeScriptReport:
    """Analyse every .ts and .tsx file below directory (the working directory by default)."""
    root = Path(directory) if directory is not None else Path.cwd()
    files = FileScanner.with_defaults().find_files_with_extensions(root, ("ts", "tsx"))

    if not quiet:
        print(f"🔍 Found {len(files)} TypeScript files to analyze...")
        print("📊 Analyzing TypeScript files for type quality...")

    per_file = process_files_parallel(files, analyze_file, "Analyzing TypeScript files", quiet)

    if not quiet:
        print("✅ TypeScript analysis completed")

    issues = [issue for file_issues in per_file for issue in file_issues]
    return TypeScriptReport(issues=issues, summary=create_summary(len(files), issues))


def _dim(text: str) -> str:
    return colored(text, attrs=["dark"])


def _print_issue(issue: TypeIssue, color: str) -> None:
    print(f"  {colored(issue.file, color)}:{issue.line} - {issue.message}")
    if issue.suggestion is not None:
        print(f"    💡 {_dim(issue.suggestion)}")


def _print_summary(summary: TypeSummary) -> None:
    print(colored("📈 SUMMARY", "white", attrs=["bold"]))
    print(colored("─────────", "white"))
    print(f"  Files scanned: {summary.files_scanned}")
    print(f"  Total issues: {summary.total_issues}")

    if summary.any_usage_count > 0:
        label = colored("'any' usage:", "red")
        count = colored(str(summary.any_usage_count), "red")
        print(f"  {label} {count}")
    if summary.missing_return_types > 0:
        count = colored(str(summary.missing_return_types), "yellow")
        print(f"  {colored('Missing return types:', 'yellow')} {count}")
    if summary.ts_ignore_count > 0:
        count = colored(str(summary.ts_ignore_count), "cyan")
        print(f"  {colored('TS suppressions:', 'cyan')} {count}")
    print()

    score = summary.type_coverage_score
    color = "green" if score >= 90.0 else "yellow" if score >= 70.0 else "red"
    print(f"  Type Coverage Score: {colored(f'{score:.1f}%', color)}")
    print()

    if summary.any_usage_count > 0:
        print(colored("🚫 CRITICAL: Usage of 'any' type is strictly forbidden!", "red", attrs=["bold"]))
        print(_dim("   All 'any' types must be replaced with specific types."))

    print(_dim("💡 TIP: Enable strict mode in tsconfig.json for better type safety"))


def print_report(report: TypeScriptReport, quiet: bool) -> None:
    """Print issues grouped by kind, 'any' usage first, followed by the summary."""
    if not quiet:
        print()
        print(colored("📊 TypeScript Quality Report", "blue", attrs=["bold"]))
        print(colored("===========================", "blue"))
        print()

    if report.summary.total_issues == 0:
        print(colored("✅ Excellent TypeScript quality! No issues found.", "green"))
        return

    groups: dict[IssueType, list[TypeIssue]] = {}
    for issue in report.issues:
        groups.setdefault(issue.issue_type, []).append(issue)

    any_issues = groups.get(IssueType.ANY_USAGE)
    if any_issues:
        print(colored("🚫 'ANY' TYPE USAGE (CRITICAL)", "red", attrs=["bold"]))
        print(colored("─────────────────────────────", "red"))
        for issue in any_issues[:10]:
            _print_issue(issue, "red")
        if len(any_issues) > 10:
            print(f"  {_dim('...and')} {colored(str(len(any_issues) - 10), 'red')} more 'any' usages...")
        print()

    for kind, items in groups.items():
        if kind is IssueType.ANY_USAGE:
            continue
        title = _GROUP_TITLES[kind]
        color = "yellow" if "@ts-" in title else "cyan"
        print(colored(title, attrs=["bold"]))
        print("─" * len(title.encode("utf-8")))
        for issue in items[:5]:
            _print_issue(issue, color)
        if len(items) > 5:
            print(f"  {_dim('...and')} {len(items) - 5} more issues...")
        print()

    _print_summary(report.summary)


def run(json_output: bool = False, quiet: bool = False) -> None:
    """Run the check in the working directory; exits with code 2 on critical issues."""
    if not quiet:
        print(colored("🔍 Checking TypeScript type coverage...", "blue", attrs=["bold"]))

    report = analyze_typescript_files(Path.cwd(), quiet)

    if json_output:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_report(report, quiet)

    summary = report.summary
    has_critical = summary.any_usage_count > 0 or summary.ts_ignore_count > 5
    check_failure_threshold(has_critical, ExitCode.VALIDATION_FAILED)