"""Finding builder — a two-state machine folded over classified lines.

States::

    NO_BLOCK --file header--> IN_BLOCK
    IN_BLOCK --file header--> IN_BLOCK   (previous block emitted)
    IN_BLOCK --end of input-> emitted

Lines seen in ``NO_BLOCK`` other than a file header are discarded.  The
state is an immutable value holding the finding in progress; every
transition returns the next state plus the finding it closed, if any.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator

from scan_report.model import LineKind
from scan_report.model.finding import Finding
from scan_report.parsing.classify import ClassifiedLine, classify_line
from scan_report.parsing.normalize import normalize_message


class Phase(str, Enum):
    NO_BLOCK = "no_block"
    IN_BLOCK = "in_block"


@dataclass(frozen=True, slots=True)
class Draft:
    """Finding under construction."""

    file: str
    rule: str = ""
    message_parts: tuple[str, ...] = ()
    code_lines: tuple[str, ...] = ()

    def finalize(self) -> Finding:
        return Finding(
            file=self.file,
            rule=self.rule,
            message=normalize_message(" ".join(self.message_parts)),
            code_lines=self.code_lines,
        )


@dataclass(frozen=True, slots=True)
class BuilderState:
    phase: Phase = Phase.NO_BLOCK
    current: Draft | None = None

    @property
    def rule_open(self) -> bool:
        return self.current is not None and not self.current.rule


INITIAL_STATE = BuilderState()

Transition = tuple[BuilderState, "Finding | None"]


def apply(state: BuilderState, line: ClassifiedLine) -> Transition:
    """Transition on an already classified line."""
    kind = line.kind

    if kind is LineKind.FILE_HEADER:
        closed = state.current.finalize() if state.current is not None else None
        return BuilderState(Phase.IN_BLOCK, Draft(file=line.text)), closed

    draft = state.current
    if draft is None:
        return state, None

    if kind is LineKind.RULE_MARKER and not draft.rule:
        draft = replace(draft, rule=line.text)
    elif kind in (LineKind.NUMBERED_CODE, LineKind.INTERESTING_CODE):
        draft = replace(draft, code_lines=draft.code_lines + (line.text,))
    elif kind is LineKind.FREE_TEXT:
        draft = replace(draft, message_parts=draft.message_parts + (line.text,))
    else:
        return state, None

    return replace(state, current=draft), None


def step(state: BuilderState, raw_line: str) -> Transition:
    """Classify *raw_line* against the current state and transition."""
    return apply(state, classify_line(raw_line, rule_open=state.rule_open))


def finish(state: BuilderState) -> Finding | None:
    """Close the open block at end of input."""
    if state.current is None:
        return None
    return state.current.finalize()


def iter_findings(lines: Iterable[str]) -> Iterator[Finding]:
    state = INITIAL_STATE
    for line in lines:
        state, closed = step(state, line)
        if closed is not None:
            yield closed
    last = finish(state)
    if last is not None:
        yield last


def build_findings(lines: Iterable[str]) -> tuple[Finding, ...]:
    return tuple(iter_findings(lines))
