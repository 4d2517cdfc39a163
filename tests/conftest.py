"""Shared fixtures: bundled sample reports and environment isolation."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from scan_report.utils.determinism import set_ci_mode

FIXTURES = Path(__file__).resolve().parent / "fixtures" / "reports"

_ISOLATED_ENV = ("GITHUB_OUTPUT", "CI_MODE", "DETERMINISTIC")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep the outcome sink, CI mode and config overrides out of tests."""
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("SCAN_REPORT_"):
            monkeypatch.delenv(name, raising=False)
    set_ci_mode(False)
    yield
    set_ci_mode(False)


@pytest.fixture
def text_report_path() -> Path:
    return FIXTURES / "semgrep_output.txt"


@pytest.fixture
def semgrep_json_path() -> Path:
    return FIXTURES / "semgrep_results.json"


@pytest.fixture
def dependency_json_path() -> Path:
    return FIXTURES / "dependencies.json"


@pytest.fixture
def scenario_text() -> str:
    """Smallest complete block: header, rule, message, one code line."""
    return "routes/foo.js\n❯❯❱ demo.rule\nsome description text\n12┆ const x = 1;\n"
