"""Parse the scanner's human-readable text dump into findings."""

from __future__ import annotations

from scan_report.model.finding import Finding
from scan_report.parsing.builder import build_findings
from scan_report.parsing.normalize import normalize_text


def parse_text_report(raw: str) -> tuple[Finding, ...]:
    return build_findings(normalize_text(raw))
