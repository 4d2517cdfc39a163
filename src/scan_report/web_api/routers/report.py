"""
Report Router
=============
Endpoints that render scanner output into markdown.

Malformed input never errors: it renders the degraded document with
``has_findings`` false.
"""
import logging

from fastapi import APIRouter, HTTPException

from scan_report.model.report import ScanReport
from scan_report.pipeline import (
    report_from_dependency_json,
    report_from_semgrep_json,
    report_from_text,
)
from scan_report.render.markdown import render_markdown
from scan_report.web_api.config import settings
from scan_report.web_api.schemas.report import (
    JsonReportRequest,
    ReportResponse,
    TextReportRequest,
)

router = APIRouter()

_logger = logging.getLogger(__name__)


def _check_size(content: str) -> None:
    if len(content) > settings.MAX_CONTENT_CHARS:
        raise HTTPException(
            status_code=413,
            detail=f"Report content exceeds {settings.MAX_CONTENT_CHARS} characters",
        )


def _respond(report: ScanReport, request: JsonReportRequest) -> ReportResponse:
    document = render_markdown(
        report,
        collapsible=request.collapsible,
        highlight=request.highlight,
    )
    _logger.debug("rendered %s report: %d findings", report.source.value, len(report.findings))
    return ReportResponse(
        has_findings=report.has_findings,
        total=len(report.findings),
        degraded=report.is_degraded,
        degraded_reason=report.degraded_reason,
        summary=report.summary.to_dict(),
        document=document,
    )


@router.post("/text", response_model=ReportResponse)
async def render_text_report(request: TextReportRequest):
    """
    Render a plain-text scanner dump.

    - **content**: the dump, verbatim
    - **collapsible**: wrap code in ``<details>`` blocks
    - **highlight**: mark risky code phrases
    """
    _check_size(request.content)
    return _respond(report_from_text(request.content), request)


@router.post("/semgrep", response_model=ReportResponse)
async def render_semgrep_report(request: JsonReportRequest):
    """
    Render scanner JSON output (``{"results": [...]}``).
    """
    _check_size(request.content)
    return _respond(report_from_semgrep_json(request.content), request)


@router.post("/dependencies", response_model=ReportResponse)
async def render_dependency_report(request: JsonReportRequest):
    """
    Render a dependency vulnerability report (``{"vulnerabilities": [...]}``).
    """
    _check_size(request.content)
    return _respond(report_from_dependency_json(request.content), request)
