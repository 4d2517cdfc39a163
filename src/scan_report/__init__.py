"""scan_report — turn security-scanner output into a PR-comment report."""

__all__ = [
    "__version__",
    "build_report",
    "report_from_text",
    "report_from_semgrep_json",
    "report_from_dependency_json",
    "export_report",
    "emit_report",
]
__version__ = "0.1.0"

from scan_report.emit import emit_report  # noqa: E402
from scan_report.pipeline import (  # noqa: E402
    build_report,
    report_from_dependency_json,
    report_from_semgrep_json,
    report_from_text,
)
from scan_report.render.exporters import export_report  # noqa: E402
