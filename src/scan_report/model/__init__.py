"""Enums shared across the parsing, rendering and emit layers."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Scanner severity, ordered by ``rank`` (worst first)."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    UNKNOWN = "UNKNOWN"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @property
    def is_high_impact(self) -> bool:
        return self in (Severity.ERROR, Severity.WARNING)

    @classmethod
    def parse(cls, raw: object) -> "Severity":
        """Map a raw scanner severity string onto the enum.

        Accepts the scanner's own levels (``ERROR``/``WARNING``/``INFO``)
        and the dependency scanner's four-level scale.  Anything else is
        ``UNKNOWN``.
        """
        if not isinstance(raw, str):
            return cls.UNKNOWN
        return _SEVERITY_ALIASES.get(raw.strip().lower(), cls.UNKNOWN)


_SEVERITY_RANK = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
    Severity.UNKNOWN: 3,
}

_SEVERITY_ALIASES = {
    "error": Severity.ERROR,
    "critical": Severity.ERROR,
    "high": Severity.ERROR,
    "warning": Severity.WARNING,
    "medium": Severity.WARNING,
    "info": Severity.INFO,
    "low": Severity.INFO,
}


class LineKind(str, Enum):
    """Category assigned to one line of a text report."""

    FILE_HEADER = "file_header"
    RULE_MARKER = "rule_marker"
    NUMBERED_CODE = "numbered_code"
    INTERESTING_CODE = "interesting_code"
    FREE_TEXT = "free_text"
    BLANK = "blank"


class ReportSource(str, Enum):
    """Which upstream artifact a report was built from."""

    SEMGREP_TEXT = "semgrep-text"
    SEMGREP_JSON = "semgrep-json"
    DEPENDENCIES = "dependencies"

    @property
    def title(self) -> str:
        if self is ReportSource.DEPENDENCIES:
            return "Dependency Vulnerability Report"
        return "Semgrep Report"

    @property
    def default_outcome_key(self) -> str:
        if self is ReportSource.DEPENDENCIES:
            return "has_issues"
        return "has_findings"
