"""
Scan Report Web API
===================
FastAPI service that renders scanner output into PR-comment documents.

Quick Start:
    uvicorn scan_report.web_api.main:app --reload
"""
from .main import app

__all__ = ["app"]
