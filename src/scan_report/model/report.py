"""ScanReport — the assembled result handed to renderers and the emitter."""

from __future__ import annotations

from dataclasses import dataclass, field

from scan_report import __version__
from scan_report.model import ReportSource
from scan_report.model.finding import Finding
from scan_report.model.summary import SummaryIndex


@dataclass(frozen=True)
class ScanReport:
    """Immutable report value.

    ``degraded_reason`` is set when the input could not be read or parsed
    and the pipeline fell back to an empty finding set.
    """

    source: ReportSource
    findings: tuple[Finding, ...] = ()
    summary: SummaryIndex = field(default_factory=SummaryIndex)
    project_name: str = ""
    input_name: str = ""
    degraded_reason: str | None = None
    generated_at: str | None = None
    tool_version: str = __version__

    @property
    def has_findings(self) -> bool:
        return bool(self.findings)

    @property
    def is_degraded(self) -> bool:
        return self.degraded_reason is not None

    @property
    def high_impact(self) -> tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.severity.is_high_impact)

    def to_dict(self) -> dict:
        d: dict = {
            "schema_version": "scan_report_v1",
            "tool_version": self.tool_version,
            "source": self.source.value,
            "has_findings": self.has_findings,
            "degraded": self.is_degraded,
            "summary": self.summary.to_dict(),
            "findings": [f.to_dict() for f in self.findings],
        }
        if self.degraded_reason is not None:
            d["degraded_reason"] = self.degraded_reason
        if self.project_name:
            d["project_name"] = self.project_name
        if self.input_name:
            d["input_name"] = self.input_name
        if self.generated_at is not None:
            d["generated_at"] = self.generated_at
        return d
