"""Tests for the canonical JSON normalization layer."""

import json
from pathlib import Path

from scan_report.model import Severity
from scan_report.model.finding import Finding
from scan_report.utils.json_norm import stable_json_dumps


def test_stable_json_dumps_sorts_keys_and_adds_newline():
    s = stable_json_dumps({"b": 1, "a": 2})
    assert s.endswith("\n")
    # Keys should be sorted in the serialized output
    assert s.index('"a"') < s.index('"b"')


def test_stable_json_dumps_normalizes_paths():
    s = stable_json_dumps({"p": Path("a") / "b"})
    obj = json.loads(s)
    assert obj["p"] == "a/b"


def test_stable_json_dumps_enums_and_dataclasses():
    obj = json.loads(stable_json_dumps({"sev": Severity.ERROR, "f": Finding(file="x.js")}))
    assert obj["sev"] == "ERROR"
    assert obj["f"]["file"] == "x.js"
    assert obj["f"]["code_lines"] == []


def test_stable_json_dumps_keeps_unicode():
    assert "12┆ x" in stable_json_dumps({"line": "12┆ x"})
