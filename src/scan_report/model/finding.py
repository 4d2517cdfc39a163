"""Finding — the normalized record for a single reported issue."""

from __future__ import annotations

from dataclasses import dataclass, field

from . import Severity

UNKNOWN_RULE = "(unknown rule)"


@dataclass(frozen=True, slots=True)
class Finding:
    """Immutable finding built from one report block or JSON result.

    ``rule`` is empty when the report never named one.  ``code_lines``
    holds numbered excerpts (``"12┆ source"``) and unnumbered lines that
    matched a risk pattern, in order of appearance.
    """

    file: str
    rule: str = ""
    message: str = ""
    code_lines: tuple[str, ...] = ()
    severity: Severity = Severity.UNKNOWN
    line_start: int | None = None
    line_end: int | None = None
    cwe: tuple[str, ...] = ()
    metadata: dict = field(default_factory=dict)

    @property
    def rule_label(self) -> str:
        return self.rule or UNKNOWN_RULE

    @property
    def location(self) -> str:
        if self.line_start is None:
            return self.file
        end = self.line_end if self.line_end is not None else self.line_start
        return f"{self.file}:{self.line_start}-{end}"

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        d: dict = {
            "file": self.file,
            "rule": self.rule,
            "message": self.message,
            "code_lines": list(self.code_lines),
            "severity": self.severity.value,
        }
        if self.line_start is not None:
            d["line_start"] = self.line_start
            d["line_end"] = (
                self.line_end if self.line_end is not None else self.line_start
            )
        if self.cwe:
            d["cwe"] = list(self.cwe)
        if self.metadata:
            d["metadata"] = dict(self.metadata)
        return d


def sort_key(f: Finding) -> tuple:
    """Severity rank, then file, then first line."""
    return (f.severity.rank, f.file, f.line_start or 0, f.rule)
