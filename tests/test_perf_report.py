import json
import subprocess

import pytest

from sniffcheck.perf_audit import (
    AuditResult,
    PerformanceReport,
    PerformanceStatus,
    calculate_performance_summary,
)
from sniffcheck.perf_report import print_performance_report, print_performance_summary, run


@pytest.fixture(autouse=True)
def _no_colors(monkeypatch):
    monkeypatch.setenv("ANSI_COLORS_DISABLED", "1")
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def no_tools(monkeypatch):
    def missing(*args, **kwargs):
        raise FileNotFoundError("not installed")

    monkeypatch.setattr(subprocess, "run", missing)


def _result(name, score, status, recommendation=None):
    return AuditResult(
        name=name,
        score=score,
        status=status,
        value=score,
        unit="%",
        description=f"{name} description",
        recommendation=recommendation,
    )


def _report(results, recommendations=()):
    return PerformanceReport(
        audit_results=results,
        summary=calculate_performance_summary(results),
        recommendations=list(recommendations),
        duration_ms=12,
    )


def test_report_groups_results_by_category(capsys):
    results = [
        _result("Performance", 95.0, PerformanceStatus.EXCELLENT),
        _result("Seo", 40.0, PerformanceStatus.POOR, "Add meta tags"),
    ]
    print_performance_report(_report(results, ["Use a CDN"]), quiet=False)
    out = capsys.readouterr().out
    assert "🚀 Performance Audit Report" in out
    assert "📊 PERFORMANCE" in out
    assert "📊 SEO" in out
    assert "🟢 Performance (95.0%)" in out
    assert "🔴 Seo (40.0%)" in out
    assert "💡 Add meta tags" in out
    assert "  • Use a CDN" in out


def test_quiet_report_skips_header(capsys):
    results = [_result("Performance", 95.0, PerformanceStatus.EXCELLENT)]
    print_performance_report(_report(results), quiet=True)
    out = capsys.readouterr().out
    assert "Performance Audit Report" not in out
    assert "📈 PERFORMANCE SUMMARY" in out


def test_summary_counts_and_assessment(capsys):
    results = [
        _result("Performance", 95.0, PerformanceStatus.EXCELLENT),
        _result("Accessibility", 30.0, PerformanceStatus.POOR),
    ]
    report = _report(results)
    print_performance_summary(report.summary, report.duration_ms)
    out = capsys.readouterr().out
    assert "Audits passed: 1/2" in out
    assert "Audit time: 12ms" in out
    assert "NEEDS IMPROVEMENT" in out
    assert "🎯 FOCUS AREAS" in out
    assert "Improve accessibility compliance" in out


def test_excellent_summary_has_no_focus_areas(capsys):
    results = [_result("Performance", 100.0, PerformanceStatus.EXCELLENT)]
    report = _report(results)
    print_performance_summary(report.summary, report.duration_ms)
    out = capsys.readouterr().out
    assert "EXCELLENT PERFORMANCE" in out
    assert "FOCUS AREAS" not in out


def test_run_exits_when_project_scores_poorly(tmp_path, monkeypatch, capsys, no_tools):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        run(json_output=True, quiet=True)
    assert excinfo.value.code == 1
    data = json.loads(capsys.readouterr().out)
    names = [r["name"] for r in data["audit_results"]]
    assert names == ["Bundle Size", "Lazy Loading", "Image Optimization"]
    assert data["recommendations"][0].startswith("Install Lighthouse CLI")


def test_run_succeeds_with_good_patterns(tmp_path, monkeypatch, capsys, no_tools):
    (tmp_path / "page.tsx").write_text(
        "import Image from 'next/image';\nconst Chart = dynamic(() => import('./c'));\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    run(json_output=True, quiet=True)
    data = json.loads(capsys.readouterr().out)
    assert data["summary"]["overall_score"] == 100.0
    assert data["summary"]["passed_audits"] == data["summary"]["total_audits"]