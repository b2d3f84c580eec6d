from sniffcheck.report import (
    CommonSummary,
    Severity,
    Status,
    format_file_size,
    format_number,
    format_percentage,
    print_header,
    print_recommendations,
    print_section,
    print_summary,
)

import pytest


def test_severity_icons():
    assert Severity.CRITICAL.icon() == "🚨"
    assert Severity.INFO.icon() == "ℹ️"


def test_status_icons():
    assert Status.PASSED.icon() == "✅"
    assert Status.FAILED.icon() == "❌"


def test_severity_colored_contains_name():
    assert "INFO" in Severity.INFO.colored()
    assert "LOW" in Severity.LOW.colored()
    assert "MEDIUM" in Severity.MEDIUM.colored()
    assert "HIGH" in Severity.HIGH.colored()
    assert "CRITICAL" in Severity.CRITICAL.colored()


def test_status_colored_contains_name():
    assert "PASSED" in Status.PASSED.colored()
    assert "FAILED" in Status.FAILED.colored()
    assert "WARNING" in Status.WARNING.colored()
    assert "SKIPPED" in Status.SKIPPED.colored()


def test_common_summary():
    summary = CommonSummary()
    summary.add_result(Status.PASSED, Severity.INFO)
    summary.add_result(Status.FAILED, Severity.CRITICAL)
    assert summary.total_items == 2
    assert summary.passed == 1
    assert summary.failed == 1
    assert summary.critical_issues == 1
    assert not summary.is_successful()
    assert summary.overall_status() is Status.FAILED


def test_summary_warning_status():
    summary = CommonSummary()
    summary.add_result(Status.PASSED)
    summary.add_result(Status.WARNING, Severity.MEDIUM)
    summary.add_result(Status.SKIPPED)
    assert summary.is_successful()
    assert summary.overall_status() is Status.WARNING
    assert summary.skipped == 1
    assert summary.total_items == 3


def test_empty_summary_passes():
    summary = CommonSummary()
    assert summary.is_successful()
    assert summary.overall_status() is Status.PASSED


def test_critical_severity_alone_fails():
    summary = CommonSummary()
    summary.add_result(Status.PASSED, Severity.CRITICAL)
    assert not summary.is_successful()
    assert summary.overall_status() is Status.FAILED


def test_file_size_formatting():
    assert format_file_size(512) == "512 B"
    assert format_file_size(1024) == "1.0 KB"
    assert format_file_size(1048576) == "1.0 MB"


def test_file_size_stays_in_gigabytes():
    assert format_file_size(1024**4).endswith(" GB")


@pytest.mark.parametrize("num", [0, 7, 999, 1000, 123456, 1234567, 10**12])
def test_format_number_round_trip(num):
    text = format_number(num)
    assert text.replace(",", "") == str(num)
    assert all(len(group) == 3 for group in text.split(",")[1:])


def test_format_number_example():
    assert format_number(1234567) == "1,234,567"


@pytest.mark.parametrize("value", [95.0, 60.0, 10.0])
def test_format_percentage_text(value):
    assert f"{value:.1f}%" in format_percentage(value, 90.0, 50.0)


def test_print_header(capsys):
    print_header("Report", "📊")
    out = capsys.readouterr().out
    assert "📊 Report" in out
    assert "=" * len("Report    ") in out


def test_print_section(capsys):
    print_section("Files", "📁")
    out = capsys.readouterr().out
    assert "📁 Files" in out
    assert "─" * len("Files    ") in out


def test_print_summary_passed(capsys):
    summary = CommonSummary()
    summary.add_result(Status.PASSED)
    summary.add_result(Status.PASSED)
    print_summary(summary, 42)
    out = capsys.readouterr().out
    assert "Total items: 2" in out
    assert "Analysis time: 42ms" in out
    assert "ALL CHECKS PASSED" in out
    assert "Failed:" not in out


def test_print_summary_failed(capsys):
    summary = CommonSummary()
    summary.add_result(Status.FAILED, Severity.CRITICAL)
    print_summary(summary)
    out = capsys.readouterr().out
    assert "ISSUES FOUND" in out
    assert "Critical:" in out
    assert "Analysis time" not in out


def test_print_recommendations(capsys):
    print_recommendations(["first", "second"])
    out = capsys.readouterr().out
    assert "1. first" in out
    assert "2. second" in out


def test_print_recommendations_empty(capsys):
    print_recommendations([])
    assert capsys.readouterr().out == ""