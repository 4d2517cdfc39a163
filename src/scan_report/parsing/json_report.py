"""Parsers for the two structured JSON report formats.

*  Scanner findings: ``{"results": [{path, start, end, extra: {...}}]}``
*  Dependency vulnerabilities:
   ``{"vulnerabilities": [{packageName, version, ...}], "projectName": ...}``

The top-level shape is checked against a bundled schema; a mismatch raises
:class:`MalformedSchema`.  Individual entries are read best-effort, one
field at a time, and never abort the parse.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import jsonschema

from scan_report.contracts.load import validate_instance
from scan_report.errors import MalformedJson, MalformedSchema
from scan_report.model import Severity
from scan_report.model.finding import Finding
from scan_report.parsing.normalize import normalize_message

_logger = logging.getLogger(__name__)

UNKNOWN_FILE = "(unknown file)"

# Placeholder the scanner emits instead of source when not logged in.
_REDACTED_LINES = {"requires login"}


def load_json(raw: str | bytes) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedJson(f"Invalid JSON: {exc}") from exc


def _coerce(raw_or_obj: Any) -> Any:
    if isinstance(raw_or_obj, (str, bytes)):
        return load_json(raw_or_obj)
    return raw_or_obj


def _require(payload: Any, schema_name: str, field: str) -> None:
    try:
        validate_instance(payload, schema_name)
    except jsonschema.ValidationError as exc:
        raise MalformedSchema(
            f"Expected a top-level '{field}' list: {exc.message}"
        ) from exc


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    return None


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _str_tuple(value: Any) -> tuple[str, ...]:
    if value is None or value == "":
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(s for s in (_as_str(v) for v in value) if s)
    text = _as_str(value)
    return (text,) if text else ()


# ── scanner findings ────────────────────────────────────────────────


def _code_lines(raw_lines: Any, start: int | None) -> tuple[str, ...]:
    if not isinstance(raw_lines, str) or raw_lines.strip().lower() in _REDACTED_LINES:
        return ()
    out: list[str] = []
    number = start
    for line in raw_lines.splitlines():
        text = line.strip()
        if text:
            out.append(f"{number}┆ {text}" if number is not None else text)
        if number is not None:
            number += 1
    return tuple(out)


def _result_to_finding(result: dict) -> Finding:
    extra = _as_dict(result.get("extra"))
    metadata = _as_dict(extra.get("metadata"))

    start = _as_int(_as_dict(result.get("start")).get("line"))
    end = _as_int(_as_dict(result.get("end")).get("line"))
    if end is None:
        end = start

    rule = _as_str(result.get("check_id")) or _as_str(metadata.get("id"))
    message = _as_str(extra.get("message")) or _as_str(result.get("message"))

    return Finding(
        file=_as_str(result.get("path")) or UNKNOWN_FILE,
        rule=rule,
        message=normalize_message(message),
        code_lines=_code_lines(extra.get("lines"), start),
        severity=Severity.parse(extra.get("severity")),
        line_start=start,
        line_end=end,
        cwe=_str_tuple(metadata.get("cwe")),
    )


def parse_semgrep_json(raw_or_obj: Any) -> tuple[Finding, ...]:
    """Turn a scanner ``results`` payload into findings, in input order."""
    payload = _coerce(raw_or_obj)
    _require(payload, "semgrep_results.schema.json", "results")

    findings = tuple(_result_to_finding(r) for r in payload["results"])
    _logger.debug("parsed %d scanner results", len(findings))
    return findings


# ── dependency vulnerabilities ──────────────────────────────────────


def _vulnerability_to_finding(vuln: dict) -> Finding:
    package = _as_str(vuln.get("packageName")) or _as_str(vuln.get("name"))
    version = _as_str(vuln.get("version"))
    target = f"{package}@{version}" if package and version else package or UNKNOWN_FILE
    severity = vuln.get("severityWithCritical") or vuln.get("severity")

    metadata: dict[str, Any] = {"package": package, "version": version}
    fixed_in = _str_tuple(vuln.get("fixedIn"))
    if fixed_in:
        metadata["fixed_in"] = list(fixed_in)
    introduced = _str_tuple(vuln.get("from"))
    if introduced:
        metadata["introduced_through"] = list(introduced)

    return Finding(
        file=target,
        rule=_as_str(vuln.get("id")),
        message=normalize_message(_as_str(vuln.get("title"))),
        severity=Severity.parse(severity),
        cwe=_str_tuple(_as_dict(vuln.get("identifiers")).get("CWE")),
        metadata=metadata,
    )


def parse_dependency_json(raw_or_obj: Any) -> tuple[tuple[Finding, ...], str]:
    """Return ``(findings, project_name)`` for a dependency report.

    The dependency scanner lists one entry per introduction path; entries
    repeating the same vulnerability id, package and path are kept once.
    """
    payload = _coerce(raw_or_obj)
    _require(payload, "dependency_report.schema.json", "vulnerabilities")

    seen: set[tuple] = set()
    findings: list[Finding] = []
    for vuln in payload["vulnerabilities"]:
        finding = _vulnerability_to_finding(vuln)
        key = (
            finding.rule,
            finding.file,
            tuple(finding.metadata.get("introduced_through", ())),
        )
        if key in seen:
            continue
        seen.add(key)
        findings.append(finding)

    project = _as_str(payload.get("projectName"))
    _logger.debug(
        "parsed %d dependency vulnerabilities (%d duplicates dropped)",
        len(findings),
        len(payload["vulnerabilities"]) - len(findings),
    )
    return tuple(findings), project
