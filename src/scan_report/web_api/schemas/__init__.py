"""
Pydantic Schemas
================
Request and response models for the API.
"""
from .report import JsonReportRequest, ReportResponse, TextReportRequest

__all__ = ["JsonReportRequest", "ReportResponse", "TextReportRequest"]
