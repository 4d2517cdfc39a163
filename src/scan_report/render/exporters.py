"""Multi-format exporters for scan reports.

Supports:

*  **Markdown** — PR-comment document (see :mod:`scan_report.render.markdown`).
*  **HTML** — self-contained HTML document with embedded CSS.
*  **JSON** — machine-readable, validated against ``scan_report.schema.json``.

All exporters accept a :class:`ScanReport` and produce a string.
"""

from __future__ import annotations

from typing import Any

from scan_report.aggregate import severity_counts
from scan_report.contracts.load import validate_instance
from scan_report.model import Severity
from scan_report.model.report import ScanReport
from scan_report.render.escape import html_escape
from scan_report.render.markdown import (
    DEGRADED_MARKER,
    NO_CODE,
    NO_DESCRIPTION,
    NO_FINDINGS_LINE,
    ordered_findings,
    render_markdown,
)
from scan_report.utils.json_norm import stable_json_dumps

FORMATS = ("markdown", "md", "html", "json")


# ════════════════════════════════════════════════════════════════════
# JSON exporter
# ════════════════════════════════════════════════════════════════════


def export_json(report: ScanReport, *, indent: int = 2) -> str:
    """Export a ``ScanReport`` as canonical JSON."""
    payload = report.to_dict()
    validate_instance(payload, "scan_report.schema.json")
    return stable_json_dumps(payload, indent=indent)


# ════════════════════════════════════════════════════════════════════
# Markdown exporter
# ════════════════════════════════════════════════════════════════════


def export_markdown(report: ScanReport, **options: Any) -> str:
    return render_markdown(report, **options)


# ════════════════════════════════════════════════════════════════════
# HTML exporter
# ════════════════════════════════════════════════════════════════════

_SEVERITY_COLOR = {
    Severity.ERROR: "#dc3545",
    Severity.WARNING: "#fd7e14",
    Severity.INFO: "#17a2b8",
    Severity.UNKNOWN: "#6c757d",
}

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
  body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; margin: 2rem; color: #212529; }}
  h1 {{ color: #343a40; }}
  .summary {{ background: #f8f9fa; padding: 1rem; border-radius: 6px; margin-bottom: 1.5rem; }}
  .badge {{ display: inline-block; padding: 2px 8px; border-radius: 4px; color: #fff; font-size: 0.85em; font-weight: 600; }}
  table {{ border-collapse: collapse; width: 100%; margin-bottom: 1.5rem; }}
  th, td {{ text-align: left; padding: 6px 12px; border-bottom: 1px solid #dee2e6; }}
  th {{ background: #e9ecef; }}
  .finding {{ margin-bottom: 1.5rem; }}
  pre {{ background: #f6f8fa; padding: 0.75rem; overflow-x: auto; }}
  footer {{ margin-top: 2rem; color: #6c757d; font-size: 0.85em; }}
</style>
</head>
<body>
{body}
</body>
</html>
"""


def _html_table(title: str, header: str, rows: list[tuple[str, int]]) -> list[str]:
    if not rows:
        return []
    parts = [f"<h2>{title}</h2>", f"<table><tr><th>{header}</th><th>Findings</th></tr>"]
    for key, count in rows:
        parts.append(f"<tr><td>{html_escape(key)}</td><td>{count}</td></tr>")
    parts.append("</table>")
    return parts


def export_html(report: ScanReport) -> str:
    """Export a ``ScanReport`` as a self-contained HTML document."""
    title = html_escape(report.source.title)
    parts: list[str] = [f"<h1>{title}</h1>", '<div class="summary">']
    if report.project_name:
        parts.append(f"<p><strong>Project:</strong> {html_escape(report.project_name)}</p>")
    if report.generated_at:
        parts.append(f"<p><strong>Scanned:</strong> {html_escape(report.generated_at)}</p>")
    parts.append(f"<p><strong>Total findings:</strong> {len(report.findings)}</p>")
    parts.append("</div>")

    if report.is_degraded:
        parts.append(
            f"<p>{html_escape(DEGRADED_MARKER)}: {html_escape(report.degraded_reason or '')}</p>"
        )
    elif not report.has_findings:
        parts.append(f"<p>{html_escape(NO_FINDINGS_LINE)}</p>")
    else:
        sev = severity_counts(report.findings)
        if any(s is not Severity.UNKNOWN for s in sev):
            parts.extend(
                _html_table("By Severity", "Severity", [(s.value, c) for s, c in sev.items()])
            )
        parts.extend(_html_table("By Rule", "Rule", list(report.summary.by_rule)))
        parts.extend(_html_table("By File", "File", list(report.summary.by_file)))

        for i, f in enumerate(ordered_findings(report), 1):
            color = _SEVERITY_COLOR[f.severity]
            parts.append('<div class="finding">')
            parts.append(f"<h3>{i}. {html_escape(f.location)}</h3>")
            parts.append(
                f'<p><span class="badge" style="background:{color}">'
                f"{f.severity.value}</span> <code>{html_escape(f.rule_label)}</code></p>"
            )
            parts.append(f"<blockquote>{html_escape(f.message or NO_DESCRIPTION)}</blockquote>")
            if f.code_lines:
                code = "\n".join(html_escape(line) for line in f.code_lines)
                parts.append(f"<pre>{code}</pre>")
            else:
                parts.append(f"<p><em>{html_escape(NO_CODE.strip('_'))}</em></p>")
            parts.append("</div>")

    parts.append(f"<footer>Generated by scan-report {html_escape(report.tool_version)}</footer>")
    return _HTML_TEMPLATE.format(title=title, body="\n".join(parts))


# ════════════════════════════════════════════════════════════════════
# Dispatcher
# ════════════════════════════════════════════════════════════════════


def export_report(report: ScanReport, fmt: str = "markdown", **options: Any) -> str:
    """Export a ``ScanReport`` in the specified format.

    Parameters
    ----------
    report:
        The report to export.
    fmt:
        One of ``"markdown"`` (``"md"``), ``"html"``, ``"json"``.
    options:
        Passed to the markdown renderer (``collapsible``, ``highlight``,
        ``include_summary``); ignored by the other formats.

    Raises
    ------
    ValueError
        If *fmt* is not recognised.
    """
    if fmt in ("markdown", "md"):
        return export_markdown(report, **options)
    if fmt == "html":
        return export_html(report)
    if fmt == "json":
        return export_json(report)
    raise ValueError(f"Unknown export format: {fmt!r} (use markdown|html|json)")
