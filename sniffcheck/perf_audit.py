"""Performance audit: Lighthouse when available, otherwise basic project checks."""

from __future__ import annotations

import json
import os
import socket
import subprocess
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any

BUILD_DIRS = (".next", "dist", "build", "out")
FALLBACK_URLS = (
    "http://localhost:3000",
    "http://localhost:3001",
    "http://localhost:8000",
    "http://localhost:8080",
)
DEV_SERVER_PORTS = (
    3000, 3001, 3002, 3003,  # React, Next.js
    4200, 4201,  # Angular
    8000, 8001, 8080, 8081,  # General dev servers
    5000, 5001, 5173, 5174,  # Vite and other bundlers
    9000, 9001,  # Webpack dev server
    1234,  # Parcel
)
FRAMEWORK_PROCESSES = (
    ("next dev", 3000),
    ("vite", 5173),
    ("ng serve", 4200),
)
GENERAL_RECOMMENDATIONS = (
    "Use Next.js Image component for optimized images",
    "Implement proper caching strategies",
    "Consider using a CDN for static assets",
    "Minimize third-party scripts and dependencies",
)
INSTALL_LIGHTHOUSE = (
    "Install Lighthouse CLI for comprehensive performance auditing: "
    "npm install -g lighthouse"
)
_SOURCE_EXTENSIONS = ("ts", "tsx", "js", "jsx")
_PATTERN_SCAN_DEPTH = 3
_BYTES_PER_MB = 1_048_576.0

_CATEGORY_RECOMMENDATIONS = {
    "performance": "Focus on Core Web Vitals: LCP, FID, and CLS metrics",
    "accessibility": "Add proper ARIA labels, alt text, and keyboard navigation",
    "best-practices": "Follow security best practices and avoid deprecated APIs",
    "seo": "Add meta tags, structured data, and improve page titles",
}

_AUDIT_RECOMMENDATIONS = {
    "first-contentful-paint": (
        "Optimize First Contentful Paint by reducing server response times"
    ),
    "largest-contentful-paint": (
        "Improve Largest Contentful Paint by optimizing images and preloading key resources"
    ),
    "cumulative-layout-shift": (
        "Reduce Cumulative Layout Shift by setting dimensions on images and embeds"
    ),
    "unused-javascript": "Remove unused JavaScript to reduce bundle size",
    "render-blocking-resources": (
        "Eliminate render-blocking resources by inlining critical CSS"
    ),
}


class PerformanceStatus(Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_WORK = "NeedsWork"
    POOR = "Poor"
    NOT_MEASURED = "NotMeasured"


@dataclass
class AuditResult:
    name: str
    score: float
    status: PerformanceStatus
    value: float | None
    unit: str | None
    description: str
    recommendation: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        result["status"] = self.status.value
        return result


@dataclass
class PerformanceSummary:
    overall_score: float
    performance_score: float
    accessibility_score: float
    best_practices_score: float
    seo_score: float
    total_audits: int
    passed_audits: int


@dataclass
class PerformanceReport:
    audit_results: list[AuditResult]
    summary: PerformanceSummary
    recommendations: list[str]
    duration_ms: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "audit_results": [r.to_dict() for r in self.audit_results],
            "summary": asdict(self.summary),
            "recommendations": list(self.recommendations),
            "duration_ms": self.duration_ms,
        }


def status_for_score(score: float) -> PerformanceStatus:
    """Grade a 0-100 score."""
    if score >= 90.0:
        return PerformanceStatus.EXCELLENT
    if score >= 75.0:
        return PerformanceStatus.GOOD
    if score >= 50.0:
        return PerformanceStatus.NEEDS_WORK
    return PerformanceStatus.POOR


def _bundle_status(size_mb: float) -> PerformanceStatus:
    if size_mb < 1.0:
        return PerformanceStatus.EXCELLENT
    if size_mb < 2.0:
        return PerformanceStatus.GOOD
    if size_mb < 5.0:
        return PerformanceStatus.NEEDS_WORK
    return PerformanceStatus.POOR


def calculate_bundle_score(size_mb: float) -> float:
    """Score a total bundle size given in megabytes."""
    if size_mb < 0.5:
        return 100.0
    if size_mb < 1.0:
        return 90.0
    if size_mb < 2.0:
        return 75.0
    if size_mb < 3.0:
        return 60.0
    if size_mb < 5.0:
        return 40.0
    return 20.0


def title_case(text: str) -> str:
    """Capitalise each whitespace-separated word and lower-case the rest of it."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split())


def category_recommendation(category: str, score: float) -> str | None:
    if score < 75.0:
        return _CATEGORY_RECOMMENDATIONS.get(category)
    return None


def _number(value: Any) -> float | None:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return None


def _object(data: Any, key: str) -> dict[str, Any] | None:
    if isinstance(data, dict):
        value = data.get(key)
        if isinstance(value, dict):
            return value
    return None


def lighthouse_recommendations(data: Any) -> list[str]:
    """Advice for the known Lighthouse audits that scored below 0.9."""
    audits = _object(data, "audits")
    if audits is None:
        return []
    recommendations = []
    for audit_id in sorted(audits):
        score = _number(audits[audit_id].get("score")) if isinstance(audits[audit_id], dict) else None
        if score is not None and score < 0.9 and audit_id in _AUDIT_RECOMMENDATIONS:
            recommendations.append(_AUDIT_RECOMMENDATIONS[audit_id])
    return recommendations


def parse_lighthouse_results(data: Any) -> list[AuditResult]:
    """One audit result per scored category in a Lighthouse JSON report."""
    categories = _object(data, "categories")
    if categories is None:
        return []
    results = []
    for name in sorted(categories):
        category = categories[name]
        score = _number(category.get("score")) if isinstance(category, dict) else None
        if score is None:
            continue
        percent = score * 100.0
        results.append(
            AuditResult(
                name=title_case(name.replace("-", " ")),
                score=percent,
                status=status_for_score(percent),
                value=percent,
                unit="%",
                description=f"{name} score from Lighthouse audit",
                recommendation=category_recommendation(name, percent),
            )
        )
    return results


def calculate_performance_summary(audit_results: list[AuditResult]) -> PerformanceSummary:
    total = len(audit_results)
    passed = sum(1 for r in audit_results if r.score >= 75.0)
    overall = sum(r.score for r in audit_results) / total if total else 0.0

    performance = 0.0
    for result in audit_results:
        lowered = result.name.lower()
        if "performance" in lowered or "bundle" in lowered:
            performance = result.score if performance == 0.0 else (performance + result.score) / 2.0

    def first_score(word: str) -> float:
        return next((r.score for r in audit_results if word in r.name.lower()), 0.0)

    return PerformanceSummary(
        overall_score=overall,
        performance_score=performance,
        accessibility_score=first_score("accessibility"),
        best_practices_score=first_score("best"),
        seo_score=first_score("seo"),
        total_audits=total,
        passed_audits=passed,
    )


def _size_of_tree(path: Path) -> int:
    if path.is_file():
        return path.stat().st_size
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for name in filenames:
            file_path = Path(dirpath) / name
            if file_path.is_symlink():
                continue
            try:
                if file_path.is_file():
                    total += file_path.stat().st_size
            except OSError:
                continue
    return total


def check_build_size(root: str | Path = ".") -> float:
    """Size in MB of the first build directory found below root, or 0."""
    for name in BUILD_DIRS:
        path = Path(root) / name
        if path.exists():
            return _size_of_tree(path) / _BYTES_PER_MB
    return 0.0


def _pattern_scan_files(root: Path):
    for dirpath, dirnames, filenames in os.walk(root):
        depth = len(Path(dirpath).relative_to(root).parts)
        if depth + 1 >= _PATTERN_SCAN_DEPTH:
            dirnames[:] = []
        for name in filenames:
            path = Path(dirpath) / name
            if path.is_symlink() or not path.is_file():
                continue
            if path.suffix[1:] in _SOURCE_EXTENSIONS and path.suffix:
                yield path


def check_performance_patterns(root: str | Path = ".") -> tuple[list[AuditResult], list[str]]:
    """Look for lazy loading and image optimisation in sources up to three levels deep."""
    has_lazy = False
    has_image = False
    for path in _pattern_scan_files(Path(root)):
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        if "React.lazy" in content or "dynamic(" in content:
            has_lazy = True
        if "next/image" in content:
            has_image = True

    def flag_result(name: str, present: bool, description: str, advice: str) -> AuditResult:
        return AuditResult(
            name=name,
            score=100.0 if present else 0.0,
            status=PerformanceStatus.EXCELLENT if present else PerformanceStatus.POOR,
            value=1.0 if present else 0.0,
            unit="implemented",
            description=description,
            recommendation=None if present else advice,
        )

    results = [
        flag_result(
            "Lazy Loading",
            has_lazy,
            "Components are loaded lazily to improve performance",
            "Implement lazy loading for components using React.lazy() or Next.js dynamic()",
        ),
        flag_result(
            "Image Optimization",
            has_image,
            "Images are optimized using Next.js Image component",
            "Use Next.js Image component for automatic image optimization",
        ),
    ]
    return results, []


def run_basic_performance_checks(root: str | Path = ".") -> tuple[list[AuditResult], list[str]]:
    """Bundle size and source pattern checks, with general advice."""
    size = check_build_size(root)
    results = [
        AuditResult(
            name="Bundle Size",
            score=calculate_bundle_score(size),
            status=_bundle_status(size),
            value=size,
            unit="MB",
            description="Total size of JavaScript bundles",
            recommendation=(
                "Consider code splitting and tree shaking to reduce bundle size"
                if size > 2.0
                else None
            ),
        )
    ]
    pattern_results, recommendations = check_performance_patterns(root)
    results.extend(pattern_results)
    recommendations = list(recommendations)
    recommendations.extend(GENERAL_RECOMMENDATIONS)
    return results, recommendations


def _run(args: list[str], **kwargs: Any) -> subprocess.CompletedProcess | None:
    try:
        return subprocess.run(args, capture_output=True, **kwargs)
    except OSError:
        return None


def check_lighthouse_available() -> bool:
    return _run(["lighthouse", "--version"]) is not None


def is_port_responsive(port: int) -> bool:
    """True when something accepts TCP connections on the local port."""
    try:
        with socket.create_connection(("127.0.0.1", port), timeout=0.1):
            return True
    except OSError:
        return False


def is_http_server_responsive(url: str) -> bool:
    """True when a HEAD request to url answers with HTTP 200 or 404."""
    completed = _run(
        ["curl", "-s", "-I", "--connect-timeout", "1", "--max-time", "2", url]
    )
    if completed is None:
        return False
    response = completed.stdout.decode("utf-8", errors="replace")
    return response.startswith("HTTP/") and ("200" in response or "404" in response)


def detect_framework_servers() -> list[str]:
    """URLs of dev servers whose framework process is running."""
    servers = []
    for pattern, port in FRAMEWORK_PROCESSES:
        completed = _run(["pgrep", "-f", pattern])
        if completed is not None and completed.returncode == 0 and completed.stdout:
            if is_port_responsive(port):
                servers.append(f"http://localhost:{port}")
    return servers


def detect_running_servers() -> list[str]:
    servers = [
        f"http://localhost:{port}"
        for port in DEV_SERVER_PORTS
        if is_port_responsive(port) and is_http_server_responsive(f"http://localhost:{port}")
    ]
    servers.extend(detect_framework_servers())
    return servers


def run_lighthouse_audit() -> tuple[list[AuditResult], list[str]]:
    """Audit the first reachable server with Lighthouse; raises ValueError on bad output."""
    urls = detect_running_servers() or list(FALLBACK_URLS)
    output = None
    for url in urls:
        completed = _run(
            [
                "lighthouse",
                url,
                "--output=json",
                "--only-categories=performance,accessibility,best-practices,seo",
                "--chrome-flags=--headless",
                "--quiet",
            ]
        )
        if completed is not None and completed.returncode == 0:
            output = completed.stdout.decode("utf-8", errors="replace")
            break
    if output is None:
        return [], []
    data = json.loads(output)
    return parse_lighthouse_results(data), lighthouse_recommendations(data)


def perform_audit(
    root: str | Path = ".",
) -> tuple[list[AuditResult], PerformanceSummary, list[str]]:
    """Run the audit and return its results, summary and recommendations."""
    if check_lighthouse_available():
        try:
            results, recommendations = run_lighthouse_audit()
        except (ValueError, OSError):
            results, recommendations = run_basic_performance_checks(root)
    else:
        results, recommendations = run_basic_performance_checks(root)
        recommendations.insert(0, INSTALL_LIGHTHOUSE)
    return results, calculate_performance_summary(results), recommendations