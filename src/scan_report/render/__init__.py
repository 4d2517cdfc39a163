"""Renderers — markdown, HTML and JSON output for scan reports."""

from scan_report.render.exporters import export_report
from scan_report.render.markdown import render_markdown

__all__ = ["export_report", "render_markdown"]
