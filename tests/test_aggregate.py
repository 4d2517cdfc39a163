"""Tests for summary aggregation."""

from __future__ import annotations

from scan_report.aggregate import severity_counts, summarize
from scan_report.model import Severity
from scan_report.model.finding import UNKNOWN_RULE, Finding


def _f(rule: str = "", file: str = "a.js", severity: Severity = Severity.UNKNOWN) -> Finding:
    return Finding(file=file, rule=rule, severity=severity)


class TestSummarize:
    def test_rule_order_count_then_key(self):
        findings = [_f(r) for r in ("C", "B", "A", "B", "A", "B", "A")]
        summary = summarize(findings)
        assert summary.by_rule == (("A", 3), ("B", 3), ("C", 1))
        assert summary.total == 7

    def test_order_independent_of_input(self):
        findings = [_f("x", "1.js"), _f("y", "2.js"), _f("y", "2.js")]
        assert summarize(findings) == summarize(list(reversed(findings)))

    def test_by_file(self):
        findings = [_f("r", "b.js"), _f("r", "a.js"), _f("r", "b.js")]
        assert summarize(findings).by_file == (("b.js", 2), ("a.js", 1))

    def test_missing_rule_counted_under_placeholder(self):
        assert summarize([_f("")]).by_rule == ((UNKNOWN_RULE, 1),)

    def test_empty(self):
        summary = summarize([])
        assert summary.total == 0
        assert summary.by_rule == () and summary.by_file == ()

    def test_to_dict(self):
        d = summarize([_f("A"), _f("A")]).to_dict()
        assert d == {
            "total": 2,
            "by_rule": [{"key": "A", "count": 2}],
            "by_file": [{"key": "a.js", "count": 2}],
        }


class TestSeverityCounts:
    def test_worst_first_and_non_zero_only(self):
        findings = [
            _f(severity=Severity.INFO),
            _f(severity=Severity.ERROR),
            _f(severity=Severity.INFO),
        ]
        counts = severity_counts(findings)
        assert list(counts.items()) == [(Severity.ERROR, 1), (Severity.INFO, 2)]
