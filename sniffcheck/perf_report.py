"""Printing of the performance audit report and the perf command itself."""

from __future__ import annotations

import json
import time
from pathlib import Path

from termcolor import colored

from sniffcheck.errors import ExitCode, check_failure_threshold
from sniffcheck.perf_audit import (
    AuditResult,
    PerformanceReport,
    PerformanceStatus,
    PerformanceSummary,
    perform_audit,
)

_STATUS_STYLE = {
    PerformanceStatus.EXCELLENT: ("🟢", "green"),
    PerformanceStatus.GOOD: ("🟡", "yellow"),
    PerformanceStatus.NEEDS_WORK: ("🟠", "yellow"),
    PerformanceStatus.POOR: ("🔴", "red"),
    PerformanceStatus.NOT_MEASURED: ("⚪", "white"),
}


def _dim(text: str) -> str:
    return colored(text, attrs=["dark"])


def _category(result: AuditResult) -> str:
    name = result.name.lower()
    if "bundle" in name or "performance" in name:
        return "Performance"
    if "accessibility" in name:
        return "Accessibility"
    if "seo" in name:
        return "SEO"
    if "best" in name:
        return "Best Practices"
    return "General"


def _score_color(score: float) -> str:
    return "green" if score >= 90.0 else "yellow" if score >= 50.0 else "red"


def _assessment(score: float) -> tuple[str, str, str]:
    if score >= 90.0:
        return "🎉", "EXCELLENT PERFORMANCE", "green"
    if score >= 75.0:
        return "✅", "GOOD PERFORMANCE", "green"
    if score >= 50.0:
        return "⚠️", "NEEDS IMPROVEMENT", "yellow"
    return "🚨", "POOR PERFORMANCE", "red"


def print_performance_report(report: PerformanceReport, quiet: bool) -> None:
    """Print audit results grouped by category, then advice and the summary."""
    if not quiet:
        print()
        print(colored("🚀 Performance Audit Report", "blue", attrs=["bold"]))
        print(colored("==========================", "blue"))
        print()

    categories: dict[str, list[AuditResult]] = {}
    for result in report.audit_results:
        categories.setdefault(_category(result), []).append(result)

    for category, results in categories.items():
        print(colored(f"📊 {category.upper()}", "white", attrs=["bold"]))
        print(colored("─" * (len(category) + 4), "white"))
        for result in results:
            icon, color = _STATUS_STYLE[result.status]
            score = colored(f"{result.score:.1f}", color)
            unit = result.unit or ""
            print(f"  {icon} {colored(result.name, attrs=['bold'])} ({score}{unit})")
            if result.description:
                print(f"     {_dim(result.description)}")
            if result.recommendation is not None:
                print(f"     💡 {colored(result.recommendation, 'yellow')}")
        print()

    if report.recommendations:
        print(colored("💡 RECOMMENDATIONS", "green", attrs=["bold"]))
        print(colored("──────────────────", "green"))
        for rec in report.recommendations:
            print(f"  • {colored(rec, 'green')}")
        print()

    print_performance_summary(report.summary, report.duration_ms)


def print_performance_summary(summary: PerformanceSummary, duration_ms: int) -> None:
    """Print the scores, audit counts, overall assessment and focus areas."""
    print(colored("📈 PERFORMANCE SUMMARY", "white", attrs=["bold"]))
    print(colored("─────────────────────", "white"))

    overall = colored(f"{summary.overall_score:.1f}%", _score_color(summary.overall_score))
    print(f"  Overall Score: {overall}")

    for label, score in (
        ("Performance", summary.performance_score),
        ("Accessibility", summary.accessibility_score),
        ("Best Practices", summary.best_practices_score),
        ("SEO", summary.seo_score),
    ):
        if score > 0.0:
            print(f"  {label}: {score:.1f}%")

    print(f"  Audits passed: {summary.passed_audits}/{summary.total_audits}")
    print(f"  Audit time: {duration_ms}ms")
    print()

    icon, text, color = _assessment(summary.overall_score)
    print(f"  Status: {colored(f'{icon} {text}', color, attrs=['bold'])}")

    if summary.overall_score < 75.0:
        print()
        print(colored("🎯 FOCUS AREAS", "cyan", attrs=["bold"]))
        print(colored("─────────────", "cyan"))
        if summary.performance_score < 75.0:
            print("  • Optimize Core Web Vitals (LCP, FID, CLS)")
        if summary.accessibility_score < 75.0:
            print("  • Improve accessibility compliance")
        if summary.best_practices_score < 75.0:
            print("  • Follow web development best practices")
        if summary.seo_score < 75.0:
            print("  • Enhance SEO optimization")

    print()
    print(_dim("💡 TIP: Run performance audits regularly during development"))


def run(json_output: bool = False, quiet: bool = False) -> None:
    """Audit the working directory; exits with code 1 when the overall score is below 50."""
    if not quiet:
        print(colored("🚀 Running performance audit...", "blue", attrs=["bold"]))
        print(_dim("Please ensure your development server is running"))

    start = time.monotonic()
    results, summary, recommendations = perform_audit(Path.cwd())
    duration_ms = int((time.monotonic() - start) * 1000)

    report = PerformanceReport(
        audit_results=results,
        summary=summary,
        recommendations=recommendations,
        duration_ms=duration_ms,
    )

    if json_output:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_performance_report(report, quiet)

    check_failure_threshold(report.summary.overall_score < 50.0, ExitCode.GENERAL_ERROR)