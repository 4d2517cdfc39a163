"""Exit-code policy — findings-based CI exit-code contract.

Philosophy:
  - Deterministic in CI
  - Stable mapping from worst severity → exit code
  - No hidden magic inside CLI glue
  - Findings with an unknown severity only trip the ``any`` threshold
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

from scan_report.model import Severity
from scan_report.model.finding import Finding
from scan_report.utils.exit_codes import ExitCode

FailOn = Literal["never", "error", "warning", "any"]

FAIL_ON_CHOICES: tuple[str, ...] = ("never", "error", "warning", "any")

# Worst rank that still trips each threshold (lower rank = worse).
_THRESHOLD_RANK: dict[str, int] = {
    "never": -1,
    "error": Severity.ERROR.rank,
    "warning": Severity.WARNING.rank,
    "any": Severity.UNKNOWN.rank,
}


@dataclass(frozen=True)
class ExitCodePolicy:
    """Tunable threshold for findings → exit-code mapping."""

    ok: int = ExitCode.SUCCESS
    fail: int = ExitCode.VIOLATION
    fail_on: FailOn = "never"


DEFAULT_POLICY = ExitCodePolicy()


def worst_severity(findings: Iterable[Finding]) -> Severity | None:
    """Worst severity present, or ``None`` when there are no findings."""
    worst: Severity | None = None
    for f in findings:
        if worst is None or f.severity.rank < worst.rank:
            worst = f.severity
    return worst


def exit_code_for_findings(
    findings: Iterable[Finding],
    *,
    policy: ExitCodePolicy = DEFAULT_POLICY,
) -> int:
    """Compute the CI exit code from a set of findings.

    Contract:
      - monotonic (worse severity never produces a lower exit code)
      - no findings always maps to ``policy.ok``
    """
    if policy.fail_on not in _THRESHOLD_RANK:
        raise ValueError(
            f"Unknown fail-on threshold: {policy.fail_on!r} "
            f"(use {'|'.join(FAIL_ON_CHOICES)})"
        )
    worst = worst_severity(findings)
    if worst is None:
        return policy.ok
    if worst.rank <= _THRESHOLD_RANK[policy.fail_on]:
        return policy.fail
    return policy.ok
