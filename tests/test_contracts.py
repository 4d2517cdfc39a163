"""Tests for the bundled JSON schemas."""

from __future__ import annotations

import jsonschema
import pytest

from scan_report.contracts.load import load_schema, validate_instance

SCHEMAS = (
    "semgrep_results.schema.json",
    "dependency_report.schema.json",
    "scan_report.schema.json",
)


@pytest.mark.parametrize("name", SCHEMAS)
def test_schema_loads_and_is_valid_draft(name):
    schema = load_schema(name)
    jsonschema.Draft202012Validator.check_schema(schema)
    assert schema["$id"] == name


def test_validate_instance_raises():
    with pytest.raises(jsonschema.ValidationError):
        validate_instance({"results": {}}, "semgrep_results.schema.json")


def test_validate_instance_accepts_matching_shape():
    validate_instance({"vulnerabilities": []}, "dependency_report.schema.json")
    with pytest.raises(jsonschema.ValidationError):
        validate_instance({"results": []}, "dependency_report.schema.json")


def test_unknown_schema():
    with pytest.raises(FileNotFoundError):
        load_schema("nope.schema.json")
