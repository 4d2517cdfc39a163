"""Escaping helpers for text interpolated into markdown and HTML."""

from __future__ import annotations

import html
import re

_MD_SPECIAL_RE = re.compile(r"([\\`*_\[\]|<>])")
_NEWLINES_RE = re.compile(r"[\r\n]+")
_BACKTICK_RUN_RE = re.compile(r"`+")
_BLOCK_MARKER_RE = re.compile(r"^(\s*)([#+\-=~])")
_ORDERED_MARKER_RE = re.compile(r"^(\s*)([0-9]{1,9})([.)])")


def md_escape_inline(text: str) -> str:
    """Escape *text* for a single markdown line or table cell.

    Pipes cannot split table cells, angle brackets cannot open HTML tags and
    emphasis markers render literally.
    """
    text = _NEWLINES_RE.sub(" ", text)
    return _MD_SPECIAL_RE.sub(r"\\\1", text)


def md_escape_block(text: str) -> str:
    """Escape *text* that starts a markdown line.

    On top of :func:`md_escape_inline`, a leading heading, list, rule or
    fence marker is escaped so the line stays a paragraph.
    """
    text = _BLOCK_MARKER_RE.sub(r"\1\\\2", md_escape_inline(text), count=1)
    return _ORDERED_MARKER_RE.sub(r"\1\2\\\3", text, count=1)


def _longest_backtick_run(text: str) -> int:
    return max((len(m.group(0)) for m in _BACKTICK_RUN_RE.finditer(text)), default=0)


def code_span(text: str) -> str:
    """Inline code span that survives backticks inside *text*."""
    text = _NEWLINES_RE.sub(" ", text)
    ticks = "`" * (_longest_backtick_run(text) + 1)
    if text.startswith("`") or text.endswith("`"):
        text = f" {text} "
    return f"{ticks}{text}{ticks}"


def fence_for(body: str) -> str:
    """Backtick fence longer than any backtick run in *body* (minimum 3)."""
    return "`" * max(3, _longest_backtick_run(body) + 1)


def html_escape(text: str) -> str:
    return html.escape(text, quote=True)
