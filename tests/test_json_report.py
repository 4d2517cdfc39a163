"""Tests for the scanner-findings and dependency JSON parsers."""

from __future__ import annotations

import json

import pytest

from scan_report.errors import MalformedInputError, MalformedJson, MalformedSchema
from scan_report.model import Severity
from scan_report.parsing.json_report import (
    UNKNOWN_FILE,
    load_json,
    parse_dependency_json,
    parse_semgrep_json,
)


def _result(**overrides):
    base = {
        "check_id": "demo.rule",
        "path": "a.py",
        "start": {"line": 1},
        "end": {"line": 1},
        "extra": {"message": "msg", "severity": "ERROR", "lines": "x = 1"},
    }
    base.update(overrides)
    return base


# ============================================================================
# Malformed input
# ============================================================================

class TestMalformedInput:
    def test_invalid_json(self):
        with pytest.raises(MalformedJson):
            load_json("{not json")

    @pytest.mark.parametrize("raw", ["[]", '{"results": "nope"}', "{}", '{"results": [1]}'])
    def test_wrong_shape_scanner(self, raw):
        with pytest.raises(MalformedSchema):
            parse_semgrep_json(raw)

    @pytest.mark.parametrize("raw", ["[]", '{"vulnerabilities": {}}', '{"results": []}'])
    def test_wrong_shape_dependencies(self, raw):
        with pytest.raises(MalformedSchema):
            parse_dependency_json(raw)

    def test_both_are_malformed_input_errors(self):
        assert issubclass(MalformedJson, MalformedInputError)
        assert issubclass(MalformedSchema, MalformedInputError)


# ============================================================================
# Scanner findings
# ============================================================================

class TestSemgrepJson:
    def test_sample_file(self, semgrep_json_path):
        findings = parse_semgrep_json(semgrep_json_path.read_text(encoding="utf-8"))
        assert [f.file for f in findings] == [
            "lib/bar.py",
            "routes/foo.js",
            "config/settings.py",
        ]
        evald, regexp, secret = findings

        assert evald.severity is Severity.WARNING
        assert evald.message == "Detected the use of eval()."
        assert evald.code_lines == ("7┆ result = eval(user_input)",)
        assert evald.cwe == ("CWE-95: Eval Injection",)

        assert regexp.line_start == 12 and regexp.line_end == 13
        assert regexp.code_lines == (
            "12┆ const regex = new RegExp(name);",
            "13┆ return regex;",
        )
        assert regexp.cwe == ("CWE-1333",)

        assert secret.severity is Severity.INFO
        assert secret.code_lines == ()

    def test_accepts_parsed_object(self):
        findings = parse_semgrep_json({"results": [_result()]})
        assert findings[0].rule == "demo.rule"

    def test_empty_results(self):
        assert parse_semgrep_json('{"results": []}') == ()

    def test_rule_falls_back_to_metadata_id(self):
        r = _result(check_id=None)
        r["extra"]["metadata"] = {"id": "meta.rule"}
        assert parse_semgrep_json({"results": [r]})[0].rule == "meta.rule"

    def test_message_falls_back_to_top_level(self):
        r = _result(message="top level")
        r["extra"] = {"severity": "INFO"}
        assert parse_semgrep_json({"results": [r]})[0].message == "top level"

    def test_missing_fields_are_tolerated(self):
        (f,) = parse_semgrep_json({"results": [{}]})
        assert f.file == UNKNOWN_FILE
        assert f.rule == ""
        assert f.severity is Severity.UNKNOWN
        assert f.line_start is None
        assert f.code_lines == ()

    def test_string_line_numbers(self):
        r = _result(start={"line": " 12 "}, end={"line": "14"})
        (f,) = parse_semgrep_json({"results": [r]})
        assert (f.line_start, f.line_end) == (12, 14)

    @pytest.mark.parametrize("line", ["²", "½", "-3", "1.5", True])
    def test_non_decimal_line_numbers_are_dropped(self, line):
        raw = json.dumps({"results": [{"path": "a.js", "start": {"line": line}}]})
        (f,) = parse_semgrep_json(raw)
        assert f.file == "a.js"
        assert f.line_start is None

    def test_end_defaults_to_start(self):
        r = _result(end={})
        assert parse_semgrep_json({"results": [r]})[0].line_end == 1

    def test_blank_excerpt_lines_skipped_but_counted(self):
        r = _result(start={"line": 10})
        r["extra"]["lines"] = "a()\n\nb()"
        assert parse_semgrep_json({"results": [r]})[0].code_lines == (
            "10┆ a()",
            "12┆ b()",
        )


# ============================================================================
# Dependency vulnerabilities
# ============================================================================

class TestDependencyJson:
    def test_sample_file(self, dependency_json_path):
        findings, project = parse_dependency_json(
            dependency_json_path.read_text(encoding="utf-8")
        )
        assert project == "demo-app"
        assert len(findings) == 2

        lodash, minimist = findings
        assert lodash.file == "lodash@4.17.15"
        assert lodash.rule == "SNYK-JS-LODASH-567746"
        assert lodash.message == "Prototype Pollution"
        assert lodash.severity is Severity.ERROR
        assert lodash.cwe == ("CWE-400",)
        assert lodash.metadata["fixed_in"] == ["4.17.16"]
        assert lodash.metadata["introduced_through"] == [
            "demo-app@1.0.0",
            "lodash@4.17.15",
        ]

        assert minimist.severity is Severity.WARNING
        assert "fixed_in" not in minimist.metadata
        assert minimist.metadata["package"] == "minimist"

    def test_same_vulnerability_via_different_paths_kept(self):
        vuln = {"id": "V1", "packageName": "p", "version": "1", "from": ["app", "p@1"]}
        other = dict(vuln, **{"from": ["app", "q@2", "p@1"]})
        findings, _ = parse_dependency_json(json.dumps({"vulnerabilities": [vuln, other]}))
        assert len(findings) == 2

    def test_missing_project_name(self):
        findings, project = parse_dependency_json({"vulnerabilities": []})
        assert findings == ()
        assert project == ""

    def test_severity_without_critical_scale(self):
        findings, _ = parse_dependency_json(
            {"vulnerabilities": [{"id": "V", "packageName": "p", "severity": "low"}]}
        )
        assert findings[0].severity is Severity.INFO
        assert findings[0].file == "p"
