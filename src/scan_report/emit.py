"""Report emitter — writes the rendered document and the outcome signal.

The outcome signal is one ``key=true|false`` line appended to the file
named by an environment variable (``GITHUB_OUTPUT`` by default).  When the
variable is unset the line is appended to a local fallback file instead.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

_logger = logging.getLogger(__name__)

DEFAULT_ENV_VAR = "GITHUB_OUTPUT"
DEFAULT_FALLBACK = Path("github_output.txt")


@dataclass(frozen=True)
class EmitResult:
    document_path: Path
    outcome_path: Path | None
    outcome_line: str


def format_outcome(key: str, value: bool) -> str:
    return f"{key}={'true' if value else 'false'}\n"


def write_document(path: str | Path, text: str) -> Path:
    """Write *text* to *path* in one call, creating parent directories."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    _logger.info("wrote %s (%d bytes)", out, len(text.encode("utf-8")))
    return out


def resolve_sink(
    *,
    env: Mapping[str, str] | None = None,
    env_var: str = DEFAULT_ENV_VAR,
    fallback: str | Path = DEFAULT_FALLBACK,
) -> Path:
    target = (os.environ if env is None else env).get(env_var, "")
    if target:
        return Path(target)
    _logger.info("%s is not set; using %s", env_var, fallback)
    return Path(fallback)


def append_outcome(
    key: str,
    value: bool,
    *,
    env: Mapping[str, str] | None = None,
    env_var: str = DEFAULT_ENV_VAR,
    fallback: str | Path = DEFAULT_FALLBACK,
) -> Path | None:
    """Append ``key=value`` to the outcome sink.

    Returns the file written, or ``None`` when the sink could not be
    written (logged, not raised: the document is the primary artifact).
    """
    sink = resolve_sink(env=env, env_var=env_var, fallback=fallback)
    line = format_outcome(key, value)
    try:
        with sink.open("a", encoding="utf-8") as handle:
            handle.write(line)
    except OSError as exc:
        _logger.warning("could not write outcome to %s: %s", sink, exc)
        return None
    return sink


def emit_report(
    document: str,
    *,
    has_findings: bool,
    output_path: str | Path,
    outcome_key: str,
    env: Mapping[str, str] | None = None,
    env_var: str = DEFAULT_ENV_VAR,
    fallback: str | Path = DEFAULT_FALLBACK,
) -> EmitResult:
    """Write the document, then append exactly one outcome line."""
    doc_path = write_document(output_path, document)
    sink = append_outcome(
        outcome_key, has_findings, env=env, env_var=env_var, fallback=fallback
    )
    return EmitResult(
        document_path=doc_path,
        outcome_path=sink,
        outcome_line=format_outcome(outcome_key, has_findings).rstrip("\n"),
    )
