"""Parsing — text dump and JSON report formats into ``Finding`` records."""

from scan_report.parsing.json_report import parse_dependency_json, parse_semgrep_json
from scan_report.parsing.text_report import parse_text_report

__all__ = [
    "parse_text_report",
    "parse_semgrep_json",
    "parse_dependency_json",
]
