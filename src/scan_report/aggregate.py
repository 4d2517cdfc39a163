"""Aggregator — summary counts by rule, by file and by severity."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from scan_report.model import Severity
from scan_report.model.finding import Finding
from scan_report.model.summary import SummaryIndex


def _ordered(counts: Counter[str]) -> tuple[tuple[str, int], ...]:
    return tuple(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


def summarize(findings: Iterable[Finding]) -> SummaryIndex:
    """Build the rule/file counts in one pass.

    Ordering is count descending, then key ascending, so the result does
    not depend on input order.
    """
    by_rule: Counter[str] = Counter()
    by_file: Counter[str] = Counter()
    total = 0
    for f in findings:
        by_rule[f.rule_label] += 1
        by_file[f.file] += 1
        total += 1
    return SummaryIndex(by_rule=_ordered(by_rule), by_file=_ordered(by_file), total=total)


def severity_counts(findings: Iterable[Finding]) -> dict[Severity, int]:
    """Non-zero counts per severity, worst first."""
    counts = Counter(f.severity for f in findings)
    return {
        sev: counts[sev]
        for sev in sorted(Severity, key=lambda s: s.rank)
        if counts.get(sev)
    }
