"""Markdown renderer — PR-comment style report for a ``ScanReport``.

Layout:

*  Headline with the report title, optional scan timestamp and total count.
*  One of three bodies:
   -  degraded marker when the input could not be read,
   -  a single confirmation line when there are no findings,
   -  summary tables followed by one section per finding.
*  Footer with the tool version.

Every piece of report-controlled text (paths, rules, messages, package
names) goes through :mod:`scan_report.render.escape`.  The output depends
only on the report value, so identical inputs render identical documents.
"""

from __future__ import annotations

import re

from scan_report.aggregate import severity_counts
from scan_report.model import ReportSource, Severity
from scan_report.model.finding import Finding, sort_key
from scan_report.model.report import ScanReport
from scan_report.parsing.classify import RISK_PATTERNS
from scan_report.render.escape import (
    code_span,
    fence_for,
    html_escape,
    md_escape_block,
    md_escape_inline,
)

NO_FINDINGS_LINE = "✅ No findings. Great job!"
DEGRADED_MARKER = "⚠️ Report not found or unreadable"
NO_CODE = "_(no code)_"
NO_DESCRIPTION = "(no description)"

_HIGHLIGHT_RE = re.compile("|".join(p.pattern for p in RISK_PATTERNS), re.IGNORECASE)


# ── sections ────────────────────────────────────────────────────────


def _hard_breaks(lines: list[str]) -> list[str]:
    """Markdown hard line breaks between *lines*, none after the last."""
    return [line + "  " for line in lines[:-1]] + lines[-1:]


def _headline(report: ScanReport) -> list[str]:
    meta: list[str] = []
    if report.project_name:
        meta.append(f"**Project:** {md_escape_inline(report.project_name)}")
    if report.generated_at:
        meta.append(f"**Scanned:** {report.generated_at}")
    meta.append(f"**Total findings:** {len(report.findings)}")
    if report.high_impact:
        meta.append(f"**High impact (ERROR/WARNING):** {len(report.high_impact)}")

    lines = [f"# 🛡️ {report.source.title}", "", *_hard_breaks(meta), ""]
    if report.input_name:
        lines.append(
            f"> This comment is auto-generated from {code_span(report.input_name)}.  "
        )
        lines.append(
            "> Messages are normalized to remove decorative separators and spacing artifacts."
        )
        lines.append("")
    return lines


def _table(title: str, header: str, rows: list[tuple[str, int]]) -> list[str]:
    if not rows:
        return []
    out = [f"#### {title}", "", f"| {header} | Findings |", "|---|---:|"]
    out.extend(f"| {md_escape_inline(key)} | {count} |" for key, count in rows)
    out.append("")
    return out


def _summary(report: ScanReport) -> list[str]:
    lines: list[str] = []
    sev = severity_counts(report.findings)
    if any(s is not Severity.UNKNOWN for s in sev):
        lines.extend(
            _table("By Severity", "Severity", [(s.value, c) for s, c in sev.items()])
        )
    lines.extend(_table("By Rule", "Rule", list(report.summary.by_rule)))
    lines.extend(_table("By File", "File", list(report.summary.by_file)))
    return lines


def _highlight(line: str) -> str:
    escaped = html_escape(line)
    return _HIGHLIGHT_RE.sub(lambda m: f"<mark>{m.group(0)}</mark>", escaped)


def render_code_block(
    code_lines: tuple[str, ...],
    *,
    collapsible: bool = True,
    highlight: bool = False,
) -> str:
    if not code_lines:
        return NO_CODE

    body = "\n".join(code_lines)
    if highlight:
        block = ["<pre>", *(_highlight(line) for line in code_lines), "</pre>"]
    else:
        fence = fence_for(body)
        block = [f"{fence}text", body, fence]

    if not collapsible:
        return "\n".join(block)
    return "\n".join(
        [
            "<details>",
            "<summary><strong>Show code</strong></summary>",
            "",
            *block,
            "",
            "</details>",
        ]
    )


def _finding_section(
    index: int,
    f: Finding,
    *,
    collapsible: bool,
    highlight: bool,
) -> list[str]:
    meta = [f"**Rule:** {code_span(f.rule_label)}"]
    if f.severity is not Severity.UNKNOWN:
        meta.append(f"**Severity:** {f.severity.value}")
    if f.line_start is not None:
        end = f.line_end if f.line_end is not None else f.line_start
        meta.append(f"**Lines:** {f.line_start}-{end}")
    if f.cwe:
        meta.append(f"**CWE:** {md_escape_inline(', '.join(f.cwe))}")
    fixed_in = f.metadata.get("fixed_in")
    if fixed_in:
        meta.append(f"**Fixed in:** {md_escape_inline(', '.join(fixed_in))}")
    elif "package" in f.metadata:
        meta.append("**Fixed in:** no fix available")
    introduced = f.metadata.get("introduced_through")
    if introduced:
        meta.append(f"**Introduced through:** {md_escape_inline(' > '.join(introduced))}")

    return [
        f"## {index}. {md_escape_inline(f.file)}",
        *_hard_breaks(meta),
        "",
        f"> {md_escape_block(f.message or NO_DESCRIPTION)}",
        "",
        render_code_block(f.code_lines, collapsible=collapsible, highlight=highlight),
        "",
    ]


def ordered_findings(report: ScanReport) -> tuple[Finding, ...]:
    """Text reports keep input order; JSON reports sort by severity."""
    if report.source is ReportSource.SEMGREP_TEXT:
        return report.findings
    return tuple(sorted(report.findings, key=sort_key))


# ── public API ──────────────────────────────────────────────────────


def render_markdown(
    report: ScanReport,
    *,
    collapsible: bool = True,
    highlight: bool = False,
    include_summary: bool = True,
) -> str:
    """Render *report* as a complete markdown document.

    Parameters
    ----------
    report:
        The assembled report.
    collapsible:
        Wrap code excerpts in ``<details>`` blocks.
    highlight:
        Render code as HTML ``<pre>`` with risk phrases in ``<mark>``.
    include_summary:
        Emit the By Severity / By Rule / By File tables.
    """
    lines = _headline(report)

    if report.is_degraded:
        lines.append(f"{DEGRADED_MARKER}: {md_escape_inline(report.degraded_reason or '')}")
        lines.append("")
    elif not report.has_findings:
        lines.append(NO_FINDINGS_LINE)
        lines.append("")
    else:
        if include_summary:
            lines.extend(_summary(report))
        lines.append("---")
        lines.append("")
        for i, f in enumerate(ordered_findings(report), 1):
            lines.extend(
                _finding_section(i, f, collapsible=collapsible, highlight=highlight)
            )

    lines.append("---")
    lines.append(f"*Generated by scan-report {report.tool_version}*")
    lines.append("")
    return "\n".join(lines)
