"""Determinism utilities for CI-reproducible output.

When --ci / --deterministic mode is enabled the report timestamp is fixed
to a known epoch, so re-running on an unchanged input yields a
byte-identical document.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone

# Fixed timestamp for CI mode
FIXED_TIMESTAMP = "2000-01-01 00:00:00 UTC"

_TRUTHY = ("1", "true", "yes", "on")

# Module-level state for ci_mode (set by CLI)
_ci_mode: bool = False


def set_ci_mode(enabled: bool) -> None:
    """Set the global CI mode flag.

    Called by CLI when --ci or --deterministic is passed.
    """
    global _ci_mode
    _ci_mode = enabled


def is_ci_mode() -> bool:
    """Check if CI/deterministic mode is enabled.

    Checks in order:
    1. Environment variable CI_MODE or DETERMINISTIC
    2. Global _ci_mode state (set by CLI)
    """
    if os.environ.get("CI_MODE", "").lower() in _TRUTHY:
        return True
    if os.environ.get("DETERMINISTIC", "").lower() in _TRUTHY:
        return True

    return _ci_mode


def utc_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def deterministic_timestamp(ci_mode: bool = False) -> str:
    """Return the report timestamp.

    In CI mode, returns FIXED_TIMESTAMP; otherwise the current UTC time.
    """
    if ci_mode or is_ci_mode():
        return FIXED_TIMESTAMP
    return utc_now()
