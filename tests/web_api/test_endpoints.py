"""
Web API Endpoint Tests
======================
Integration tests for the report rendering endpoints.

Usage:
    pip install scan-report[api]
    pytest tests/web_api/test_endpoints.py -v
"""
import pytest


# Skip entire module if FastAPI not installed
pytest.importorskip("fastapi")


from fastapi.testclient import TestClient
from scan_report import __version__
from scan_report.render.markdown import DEGRADED_MARKER, NO_FINDINGS_LINE
from scan_report.web_api.config import settings
from scan_report.web_api.main import app


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


# ============================================================================
# HEALTH ENDPOINTS
# ============================================================================

class TestHealthEndpoint:
    """Tests for GET /health and GET /ready"""

    def test_health_returns_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}

    def test_ready(self, client):
        response = client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_root(self, client):
        assert client.get("/").json()["name"] == "Scan Report API"


# ============================================================================
# TEXT REPORT
# ============================================================================

class TestTextReportEndpoint:
    """Tests for POST /report/text"""

    def test_scenario(self, client, scenario_text):
        response = client.post("/report/text", json={"content": scenario_text})
        assert response.status_code == 200
        data = response.json()
        assert data["has_findings"] is True
        assert data["total"] == 1
        assert data["degraded"] is False
        assert data["summary"]["by_rule"] == [{"key": "demo.rule", "count": 1}]
        assert "## 1. routes/foo.js" in data["document"]
        assert "<details>" in data["document"]

    def test_options(self, client, scenario_text):
        response = client.post(
            "/report/text",
            json={"content": scenario_text, "collapsible": False},
        )
        assert "<details>" not in response.json()["document"]

    def test_no_findings(self, client):
        data = client.post("/report/text", json={"content": "nothing here"}).json()
        assert data["has_findings"] is False
        assert NO_FINDINGS_LINE in data["document"]

    def test_content_required(self, client):
        assert client.post("/report/text", json={}).status_code == 422

    def test_oversized_content(self, client, monkeypatch):
        monkeypatch.setattr(settings, "MAX_CONTENT_CHARS", 10)
        response = client.post("/report/text", json={"content": "x" * 11})
        assert response.status_code == 413


# ============================================================================
# JSON REPORTS
# ============================================================================

class TestJsonReportEndpoints:
    """Tests for POST /report/semgrep and POST /report/dependencies"""

    def test_semgrep(self, client, semgrep_json_path):
        content = semgrep_json_path.read_text(encoding="utf-8")
        data = client.post("/report/semgrep", json={"content": content}).json()
        assert data["has_findings"] is True
        assert data["total"] == 3

    def test_dependencies(self, client, dependency_json_path):
        content = dependency_json_path.read_text(encoding="utf-8")
        data = client.post("/report/dependencies", json={"content": content}).json()
        assert data["total"] == 2
        assert "**Project:** demo-app" in data["document"]

    @pytest.mark.parametrize("path", ["/report/semgrep", "/report/dependencies"])
    def test_malformed_content_degrades(self, client, path):
        response = client.post(path, json={"content": "{not json"})
        assert response.status_code == 200
        data = response.json()
        assert data["has_findings"] is False
        assert data["degraded"] is True
        assert data["degraded_reason"].startswith("Invalid JSON")
        assert DEGRADED_MARKER in data["document"]
