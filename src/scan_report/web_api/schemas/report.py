"""
Report Schemas
==============
Request and response models for report endpoints.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class JsonReportRequest(BaseModel):
    """Raw JSON scanner output to render"""

    content: str = Field(..., description="Scanner output, verbatim")
    collapsible: bool = Field(default=True, description="Wrap code in <details> blocks")
    highlight: bool = Field(default=False, description="Mark risky code phrases")

    class Config:
        json_schema_extra = {
            "example": {
                "content": '{"results": []}',
                "collapsible": True,
                "highlight": False,
            }
        }


class TextReportRequest(JsonReportRequest):
    """Plain-text scanner dump to render"""

    class Config:
        json_schema_extra = {
            "example": {
                "content": "routes/foo.js\n❯❯❱ demo.rule\nsome description text\n12┆ const x = 1;\n",
                "collapsible": True,
                "highlight": False,
            }
        }


class ReportResponse(BaseModel):
    """Rendered report plus the outcome signal"""

    has_findings: bool = Field(..., description="Outcome signal value")
    total: int = Field(default=0)
    degraded: bool = Field(default=False, description="Input could not be parsed")
    degraded_reason: Optional[str] = Field(default=None)
    summary: Dict[str, Any] = Field(default_factory=dict)
    document: str = Field(..., description="Rendered markdown document")
