"""Report configuration.

Values are layered, later layers winning:

1. ``ReportConfig`` defaults
2. a YAML file (``--config``)
3. ``SCAN_REPORT_<FIELD>`` environment variables
4. CLI flags (applied by the caller with ``dataclasses.replace``)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from scan_report.policy.exit_codes import FAIL_ON_CHOICES
from scan_report.render.exporters import FORMATS

ENV_PREFIX = "SCAN_REPORT_"

_BOOL_TRUE = ("true", "1", "yes", "on")
_BOOL_FALSE = ("false", "0", "no", "off")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ReportConfig:
    """Immutable report configuration."""

    output_path: str = "pretty-comment.md"
    outcome_key: Optional[str] = None     # None: per-source default
    output_env_var: str = "GITHUB_OUTPUT"
    fallback_output: str = "github_output.txt"
    format: str = "markdown"              # markdown | html | json
    collapsible: bool = True
    highlight: bool = False
    strict: bool = False
    fail_on: str = "never"                # never | error | warning | any


_FIELD_TYPES: dict[str, type] = {
    "output_path": str,
    "outcome_key": str,
    "output_env_var": str,
    "fallback_output": str,
    "format": str,
    "collapsible": bool,
    "highlight": bool,
    "strict": bool,
    "fail_on": str,
}

_CHOICES: dict[str, tuple[str, ...]] = {
    "format": FORMATS,
    "fail_on": FAIL_ON_CHOICES,
}


def _coerce(key: str, value: Any) -> Any:
    expected = _FIELD_TYPES[key]
    if key == "outcome_key" and value is None:
        return None
    if expected is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _BOOL_TRUE + _BOOL_FALSE:
            return value.strip().lower() in _BOOL_TRUE
        raise ConfigError(f"'{key}' must be a boolean, got {value!r}")
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"'{key}' must be a non-empty string, got {value!r}")
    value = value.strip()
    allowed = _CHOICES.get(key)
    if allowed and value not in allowed:
        raise ConfigError(f"'{key}' must be one of {'|'.join(allowed)}, got {value!r}")
    return value


def _apply(config: ReportConfig, raw: Mapping[str, Any], *, origin: str) -> ReportConfig:
    unknown = sorted(set(raw) - set(_FIELD_TYPES))
    if unknown:
        raise ConfigError(f"{origin}: unknown config keys: {', '.join(unknown)}")
    try:
        values = {k: _coerce(k, v) for k, v in raw.items()}
    except ConfigError as exc:
        raise ConfigError(f"{origin}: {exc}") from exc
    return replace(config, **values)


def _env_overrides(env: Mapping[str, str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for f in fields(ReportConfig):
        value = env.get(ENV_PREFIX + f.name.upper())
        if value is not None:
            out[f.name] = value
    return out


def load_config(
    path: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ReportConfig:
    """Build a ``ReportConfig`` from an optional YAML file and the environment."""
    config = ReportConfig()

    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        try:
            raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"{config_path}: top level must be a mapping")
        config = _apply(config, raw, origin=str(config_path))

    overrides = _env_overrides(os.environ if env is None else env)
    if overrides:
        config = _apply(config, overrides, origin="environment")

    return config
