"""Line classifier — assigns each report line exactly one ``LineKind``.

Rules are checked in a fixed priority order and the first match wins:

  1. file header       ``routes/foo.js`` or ``**File:** routes/foo.js``
  2. rule marker       only while the open block has no rule yet
  3. numbered code     ``  12┆ const x = 1;``
  4. interesting code  unnumbered lines matching a risk pattern
  5. free text         anything else that is not blank
  6. blank

A file header is one whitespace-free token ending in a known source
extension.  A message line that is nothing but such a path still opens a
new block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from scan_report.model import LineKind
from scan_report.parsing.normalize import normalize_numbered

SOURCE_EXTENSIONS: tuple[str, ...] = ("js", "ts", "jsx", "tsx", "py", "java", "go", "rb")

_FILE_HEADER_RE = re.compile(
    r"^\s*(?:\*\*File:\*\*\s*)?(\S+\.(?:" + "|".join(SOURCE_EXTENSIONS) + r"))\s*$",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class RulePattern:
    """One surface form of a rule identifier line.

    ``extract`` turns the trimmed line into the rule id; the default keeps
    the whole trimmed line.
    """

    name: str
    regex: re.Pattern[str]
    extract: Optional[Callable[[re.Match[str]], str]] = None

    def match(self, text: str) -> str | None:
        m = self.regex.match(text)
        if m is None:
            return None
        if self.extract is None:
            return text
        return self.extract(m).strip()


RULE_PATTERNS: tuple[RulePattern, ...] = (
    RulePattern("arrow", re.compile(r"^.*❯❯❱\s*(.+)$"), lambda m: m.group(1)),
    RulePattern(
        "formatted",
        re.compile(r"^\*\*Rule:\*\*\s*(.+)$", re.IGNORECASE),
        lambda m: m.group(1),
    ),
    RulePattern(
        "dotted",
        re.compile(
            r"^(?:javascript|typescript|python|java|go|ruby|generic)\.[\w.-]+$",
        ),
    ),
    RulePattern("suffix", re.compile(r"^[a-z0-9_.-]+-rule$", re.IGNORECASE)),
    RulePattern("keyword", re.compile(r"^semgrep.*rule.*$", re.IGNORECASE)),
)

RISK_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"const\s+regex\s*=\s*new\s+RegExp", re.IGNORECASE),
    re.compile(r"\bnew\s+RegExp\s*\(", re.IGNORECASE),
    re.compile(r"\bNested regex\b", re.IGNORECASE),
    re.compile(r"\bvulnerable to backtracking\b", re.IGNORECASE),
    re.compile(r"\bReDoS\b", re.IGNORECASE),
)


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    kind: LineKind
    text: str = ""


_BLANK = ClassifiedLine(LineKind.BLANK)


def match_file_header(line: str) -> str | None:
    m = _FILE_HEADER_RE.match(line)
    return m.group(1).strip() if m else None


def match_rule(line: str) -> str | None:
    text = line.strip()
    for pattern in RULE_PATTERNS:
        rule = pattern.match(text)
        if rule:
            return rule
    return None


def is_interesting(line: str) -> bool:
    return any(p.search(line) for p in RISK_PATTERNS)


def classify_line(line: str, *, rule_open: bool = True) -> ClassifiedLine:
    """Classify a single normalized line.  Never raises."""
    if not line.strip():
        return _BLANK

    path = match_file_header(line)
    if path:
        return ClassifiedLine(LineKind.FILE_HEADER, path)

    if rule_open:
        rule = match_rule(line)
        if rule:
            return ClassifiedLine(LineKind.RULE_MARKER, rule)

    numbered = normalize_numbered(line)
    if numbered is not None:
        return ClassifiedLine(LineKind.NUMBERED_CODE, numbered)

    if is_interesting(line):
        return ClassifiedLine(LineKind.INTERESTING_CODE, line.strip())

    return ClassifiedLine(LineKind.FREE_TEXT, line.strip())
