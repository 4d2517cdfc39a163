"""Pipeline — raw report text to an assembled ``ScanReport``.

``report_from_*`` are pure: they take the raw text and never raise for
bad input.  A :class:`ReportError` from the parsing layer degrades to an
empty report carrying ``degraded_reason``.  ``build_report`` adds the one
piece of input I/O: reading the file.

Degradation policy is the same for every format: a missing, unreadable or
malformed input yields the degraded document and a ``false`` outcome.  The
CLI decides the exit code (see ``--strict``).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from scan_report.aggregate import summarize
from scan_report.errors import InputNotFound, ReportError
from scan_report.model import ReportSource
from scan_report.model.finding import Finding
from scan_report.model.report import ScanReport
from scan_report.parsing import parse_dependency_json, parse_semgrep_json, parse_text_report

_logger = logging.getLogger(__name__)


def _assemble(
    source: ReportSource,
    findings: tuple[Finding, ...],
    *,
    project_name: str = "",
    input_name: str = "",
    generated_at: str | None = None,
) -> ScanReport:
    return ScanReport(
        source=source,
        findings=findings,
        summary=summarize(findings),
        project_name=project_name,
        input_name=input_name,
        generated_at=generated_at,
    )


def degraded_report(
    source: ReportSource,
    reason: str,
    *,
    input_name: str = "",
    generated_at: str | None = None,
) -> ScanReport:
    return ScanReport(
        source=source,
        degraded_reason=reason,
        input_name=input_name,
        generated_at=generated_at,
    )


def report_from_text(
    raw: str,
    *,
    input_name: str = "",
    generated_at: str | None = None,
) -> ScanReport:
    findings = parse_text_report(raw)
    _logger.debug("text report: %d findings", len(findings))
    return _assemble(
        ReportSource.SEMGREP_TEXT,
        findings,
        input_name=input_name,
        generated_at=generated_at,
    )


def report_from_semgrep_json(
    raw: str | bytes,
    *,
    input_name: str = "",
    generated_at: str | None = None,
) -> ScanReport:
    try:
        findings = parse_semgrep_json(raw)
    except ReportError as exc:
        _logger.warning("degrading scanner JSON report: %s", exc)
        return degraded_report(
            ReportSource.SEMGREP_JSON,
            str(exc),
            input_name=input_name,
            generated_at=generated_at,
        )
    return _assemble(
        ReportSource.SEMGREP_JSON,
        findings,
        input_name=input_name,
        generated_at=generated_at,
    )


def report_from_dependency_json(
    raw: str | bytes,
    *,
    input_name: str = "",
    generated_at: str | None = None,
) -> ScanReport:
    try:
        findings, project = parse_dependency_json(raw)
    except ReportError as exc:
        _logger.warning("degrading dependency report: %s", exc)
        return degraded_report(
            ReportSource.DEPENDENCIES,
            str(exc),
            input_name=input_name,
            generated_at=generated_at,
        )
    return _assemble(
        ReportSource.DEPENDENCIES,
        findings,
        project_name=project,
        input_name=input_name,
        generated_at=generated_at,
    )


_BUILDERS = {
    ReportSource.SEMGREP_TEXT: report_from_text,
    ReportSource.SEMGREP_JSON: report_from_semgrep_json,
    ReportSource.DEPENDENCIES: report_from_dependency_json,
}


def report_from_content(
    raw: str,
    source: ReportSource,
    *,
    input_name: str = "",
    generated_at: str | None = None,
) -> ScanReport:
    return _BUILDERS[source](raw, input_name=input_name, generated_at=generated_at)


def detect_source(path: str | Path, raw: str | None = None) -> ReportSource:
    """Guess the report format from the file name and, for JSON, its content.

    ``.json`` files are scanner findings unless the payload carries a
    ``vulnerabilities`` list.  Everything else is the text dump.
    """
    if Path(path).suffix.lower() != ".json":
        return ReportSource.SEMGREP_TEXT
    if raw is not None:
        try:
            payload = json.loads(raw)
        except ValueError:
            return ReportSource.SEMGREP_JSON
        if isinstance(payload, dict) and "vulnerabilities" in payload:
            return ReportSource.DEPENDENCIES
    return ReportSource.SEMGREP_JSON


def read_input(path: str | Path) -> str:
    """Read the input artifact, raising :class:`InputNotFound` if absent."""
    p = Path(path)
    if not p.is_file():
        raise InputNotFound(p)
    return p.read_text(encoding="utf-8", errors="replace")


def build_report(
    path: str | Path,
    source: ReportSource | None = None,
    *,
    generated_at: str | None = None,
) -> ScanReport:
    """Read *path* and build its report.

    *source* ``None`` means auto-detect.  A missing or unreadable file
    degrades; it never raises.
    """
    p = Path(path)
    try:
        raw = read_input(p)
    except InputNotFound as exc:
        _logger.warning("%s", exc)
        return degraded_report(
            source or detect_source(p),
            str(exc),
            input_name=p.name,
            generated_at=generated_at,
        )
    except OSError as exc:
        _logger.warning("could not read %s: %s", p, exc)
        return degraded_report(
            source or detect_source(p),
            f"Could not read {p}: {exc}",
            input_name=p.name,
            generated_at=generated_at,
        )

    if source is None:
        source = detect_source(p, raw)
    return report_from_content(raw, source, input_name=p.name, generated_at=generated_at)
