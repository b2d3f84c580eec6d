import json
from dataclasses import dataclass
from enum import Enum

import pytest

from sniffcheck.jsonout import (
    AnalysisStatus,
    ResponseSummary,
    StandardResponse,
    create_standard_json_output,
    output_result,
)


class Kind(Enum):
    ANY = "AnyUsage"


@dataclass
class Payload:
    issues: list
    kind: Kind


@pytest.mark.parametrize(
    "issues, expected",
    [
        (0, AnalysisStatus.SUCCESS),
        (1, AnalysisStatus.WARNING),
        (5, AnalysisStatus.WARNING),
        (6, AnalysisStatus.ERROR),
        (10, AnalysisStatus.ERROR),
        (11, AnalysisStatus.FAILED),
    ],
)
def test_from_issues(issues, expected):
    assert AnalysisStatus.from_issues(issues, 5, 10) is expected


def test_from_has_issues():
    assert AnalysisStatus.from_has_issues(True) is AnalysisStatus.WARNING
    assert AnalysisStatus.from_has_issues(False) is AnalysisStatus.SUCCESS


def test_summary_to_dict_omits_missing_duration():
    summary = ResponseSummary(3, 1, AnalysisStatus.WARNING)
    assert summary.to_dict() == {"total_items": 3, "issues_found": 1, "status": "warning"}


def test_summary_to_dict_keeps_duration():
    summary = ResponseSummary(3, 0, AnalysisStatus.SUCCESS, duration_ms=12)
    assert summary.to_dict()["duration_ms"] == 12


def test_standard_json_structure():
    response = create_standard_json_output("imports", {"unused_imports": ["a"]}, 4, 1)
    parsed = json.loads(response.to_json_pretty())
    for key in ("command", "timestamp", "version", "data", "summary"):
        assert key in parsed
    assert parsed["command"] == "imports"
    assert parsed["summary"]["status"] == "warning"
    assert parsed["data"]["unused_imports"] == ["a"]
    assert "warnings" not in parsed
    assert "metadata" not in parsed
    assert "duration_ms" not in parsed["summary"]


def test_clean_output_is_success():
    response = create_standard_json_output("types", [], 2, 0, 15)
    parsed = json.loads(response.to_json_compact())
    assert parsed["summary"]["status"] == "success"
    assert parsed["summary"]["duration_ms"] == 15


def test_timestamp_is_utc():
    response = create_standard_json_output("large", {}, 0, 0)
    assert response.to_dict()["timestamp"].endswith("Z")


def test_warnings_and_metadata():
    response = (
        create_standard_json_output("env", {}, 1, 0)
        .with_warning("first")
        .with_warnings(["second", "third"])
        .with_metadata("files", 3)
        .with_metadata("root", ".")
    )
    parsed = json.loads(response.to_json_pretty())
    assert parsed["warnings"] == ["first", "second", "third"]
    assert parsed["metadata"] == {"files": 3, "root": "."}


def test_dataclass_data_with_enum_serialises():
    response = StandardResponse(
        command="types",
        data=Payload(issues=[1, 2], kind=Kind.ANY),
        summary=ResponseSummary(1, 2, AnalysisStatus.WARNING),
    )
    parsed = json.loads(response.to_json_compact())
    assert parsed["data"] == {"issues": [1, 2], "kind": "AnyUsage"}


def test_compact_has_no_newlines():
    response = create_standard_json_output("bundle", {"a": [1, 2]}, 1, 1)
    compact = response.to_json_compact()
    assert "\n" not in compact
    assert json.loads(compact) == json.loads(response.to_json_pretty())


def test_output_result_json(capsys):
    response = create_standard_json_output("large", {"files": []}, 0, 0)
    calls = []
    output_result(response, True, False, lambda data, quiet: calls.append(data))
    parsed = json.loads(capsys.readouterr().out)
    assert parsed["command"] == "large"
    assert calls == []


def test_output_result_text():
    response = create_standard_json_output("large", {"files": []}, 0, 0)
    calls = []
    output_result(response, False, True, lambda data, quiet: calls.append((data, quiet)))
    assert calls == [({"files": []}, True)]