"""Text normalization for the scanner's human-readable dump.

The dump is produced for terminals and sometimes passes through an HTML
layer before it reaches us, so a handful of entities can show up verbatim.
Decorative "wall" separators (``⋮┆----``) are folded out of messages.
"""

from __future__ import annotations

import re

# Order matters: ``&amp;`` last so ``&amp;lt;`` decodes to ``&lt;``.
_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_WALL_RE = re.compile(r"(?:^|\s)⋮┆[-─—–]{4,}(?:\s|$)")
_SPACE_BEFORE_PERIOD_RE = re.compile(r"\s+\.")
_WHITESPACE_RE = re.compile(r"\s+")
_NUMBERED_RE = re.compile(r"^\s*(\d+)┆\s*(.*)$")


def html_unescape(text: str) -> str:
    """Replace the fixed entity set with literal characters."""
    for entity, literal in _ENTITIES:
        text = text.replace(entity, literal)
    return text


def split_lines(text: str) -> tuple[str, ...]:
    """Split on ``\\n`` or ``\\r\\n``, keeping blank lines."""
    return tuple(_LINE_SPLIT_RE.split(text))


def normalize_text(raw: str) -> tuple[str, ...]:
    return split_lines(html_unescape(raw))


def normalize_message(text: str) -> str:
    """Drop wall separators, fix ``word .`` artifacts, collapse whitespace."""
    text = _WALL_RE.sub(" ", text)
    text = _SPACE_BEFORE_PERIOD_RE.sub(".", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def normalize_numbered(line: str) -> str | None:
    """Return ``"<n>┆ <text>"`` for a numbered excerpt line, else ``None``.

    Indentation before the marker and trailing whitespace are removed; the
    line number itself is kept verbatim.
    """
    m = _NUMBERED_RE.match(line)
    if m is None:
        return None
    number, body = m.groups()
    return f"{number}┆ {body}".rstrip()
