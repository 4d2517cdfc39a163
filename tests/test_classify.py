"""Tests for the line classifier and its priority order."""

from __future__ import annotations

import pytest

from scan_report.model import LineKind
from scan_report.parsing.classify import (
    RULE_PATTERNS,
    classify_line,
    is_interesting,
    match_file_header,
    match_rule,
)


class TestFileHeader:
    @pytest.mark.parametrize(
        "line, path",
        [
            ("routes/foo.js", "routes/foo.js"),
            ("    lib/bar.py", "lib/bar.py"),
            ("**File:** src/app.ts", "src/app.ts"),
            ("src/components/Button.tsx  ", "src/components/Button.tsx"),
            ("cmd/main.go", "cmd/main.go"),
            ("App.JAVA", "App.JAVA"),
        ],
    )
    def test_recognized(self, line, path):
        assert match_file_header(line) == path
        assert classify_line(line).kind is LineKind.FILE_HEADER

    @pytest.mark.parametrize(
        "line",
        [
            "README.md",
            "main.c",
            "see routes/foo.js for details",
            "foo.js.map",
            "12┆ // see helper.js",
            "Do not pass input to eval in app.js",
            "my project/app.py",
        ],
    )
    def test_rejected(self, line):
        assert match_file_header(line) is None


class TestRuleMarker:
    @pytest.mark.parametrize(
        "line, rule",
        [
            ("   ❯❯❱ demo.rule", "demo.rule"),
            ("❯❱❯❯❱ javascript.audit.xss", "javascript.audit.xss"),
            ("**Rule:** my-check", "my-check"),
            ("javascript.express.security.audit.xss", "javascript.express.security.audit.xss"),
            ("python.lang.security.audit.eval-detected", "python.lang.security.audit.eval-detected"),
            ("no-eval-rule", "no-eval-rule"),
            ("semgrep custom rule triggered", "semgrep custom rule triggered"),
        ],
    )
    def test_surface_forms(self, line, rule):
        assert match_rule(line) == rule
        classified = classify_line(line)
        assert classified.kind is LineKind.RULE_MARKER
        assert classified.text == rule

    def test_pattern_table_order(self):
        assert [p.name for p in RULE_PATTERNS] == [
            "arrow",
            "formatted",
            "dotted",
            "suffix",
            "keyword",
        ]

    def test_plain_sentence_is_not_a_rule(self):
        assert match_rule("Detected the use of eval().") is None

    def test_rule_closed_falls_through_to_free_text(self):
        classified = classify_line("❯❯❱ second.rule", rule_open=False)
        assert classified.kind is LineKind.FREE_TEXT
        assert classified.text == "❯❯❱ second.rule"


class TestCodeLines:
    def test_numbered_code_is_normalized(self):
        classified = classify_line("           12┆ const x = 1;")
        assert classified.kind is LineKind.NUMBERED_CODE
        assert classified.text == "12┆ const x = 1;"

    @pytest.mark.parametrize(
        "line",
        [
            "const regex = new RegExp(input)",
            "  pattern = new RegExp (value)",
            "Nested regex quantifiers",
            "this is vulnerable to backtracking",
            "possible ReDoS",
        ],
    )
    def test_interesting_code(self, line):
        assert is_interesting(line)
        classified = classify_line(line)
        assert classified.kind is LineKind.INTERESTING_CODE
        assert classified.text == line.strip()

    def test_numbered_wins_over_interesting(self):
        line = "  4┆ const regex = new RegExp(name);"
        assert classify_line(line).kind is LineKind.NUMBERED_CODE


class TestPriority:
    def test_blank(self):
        assert classify_line("").kind is LineKind.BLANK
        assert classify_line("   \t").kind is LineKind.BLANK

    def test_header_wins_over_rule_marker(self):
        assert match_rule("javascript.audit.js") == "javascript.audit.js"
        assert classify_line("javascript.audit.js").kind is LineKind.FILE_HEADER

    def test_arrow_marker_naming_a_js_file_is_a_rule(self):
        classified = classify_line("❯❯❱ rules/check.js")
        assert classified.kind is LineKind.RULE_MARKER
        assert classified.text == "rules/check.js"

    def test_numbered_line_ending_in_source_path_is_code(self):
        classified = classify_line("  12┆ // see helper.js")
        assert classified.kind is LineKind.NUMBERED_CODE
        assert classified.text == "12┆ // see helper.js"

    def test_free_text_trimmed(self):
        classified = classify_line("      some description text  ")
        assert classified.kind is LineKind.FREE_TEXT
        assert classified.text == "some description text"
