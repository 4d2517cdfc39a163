"""Centralized exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success — report written (including degraded reports by default)
  1   Violation — findings at or above the ``--fail-on`` threshold
  2   Error — usage error, or degraded input under ``--strict``
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
