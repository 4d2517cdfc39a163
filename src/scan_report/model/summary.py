"""SummaryIndex — per-rule and per-file finding counts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SummaryIndex:
    """Counts keyed by rule label and by file path.

    Entries are ``(key, count)`` pairs ordered by descending count, ties
    broken by ascending key.
    """

    by_rule: tuple[tuple[str, int], ...] = ()
    by_file: tuple[tuple[str, int], ...] = ()
    total: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "by_rule": [{"key": k, "count": c} for k, c in self.by_rule],
            "by_file": [{"key": k, "count": c} for k, c in self.by_file],
        }
