"""CLI entry-point for scan_report.

Usage:
    python -m scan_report render <input> [--source auto|text|semgrep-json|dependencies]
        [--format markdown|html|json] [--output FILE] [--outcome-key KEY]
        [--config FILE] [--no-collapse] [--highlight] [--strict]
        [--fail-on never|error|warning|any] [--ci] [--timestamp] [--stdout]
    python -m scan_report summary <input> [--source ...]
    python -m scan_report --version
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from scan_report import __version__
from scan_report.config import ConfigError, ReportConfig, load_config
from scan_report.emit import append_outcome, emit_report
from scan_report.model import ReportSource
from scan_report.model.report import ScanReport
from scan_report.pipeline import build_report
from scan_report.policy.exit_codes import FAIL_ON_CHOICES, ExitCodePolicy, exit_code_for_findings
from scan_report.render.exporters import FORMATS, export_report
from scan_report.utils.determinism import deterministic_timestamp, is_ci_mode, set_ci_mode
from scan_report.utils.exit_codes import ExitCode
from scan_report.utils.json_norm import stable_json_dumps

_SOURCE_CHOICES = {
    "auto": None,
    "text": ReportSource.SEMGREP_TEXT,
    "semgrep-json": ReportSource.SEMGREP_JSON,
    "dependencies": ReportSource.DEPENDENCIES,
}


# ── parser ──────────────────────────────────────────────────────────


def _add_source_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--source",
        choices=list(_SOURCE_CHOICES),
        default="auto",
        help="Input format (default: detect from file name and content).",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="scan-report",
        description="Turn security-scanner output into a pull-request comment.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log debug output to stderr.",
    )
    sub = p.add_subparsers(dest="command")

    # ── render subcommand ─────────────────────────────────────────
    render_p = sub.add_parser(
        "render",
        help="Render a scanner report and write the outcome signal.",
    )
    render_p.add_argument(
        "input",
        type=Path,
        help="Scanner output: text dump, findings JSON or dependency JSON.",
    )
    _add_source_arg(render_p)
    render_p.add_argument(
        "--format",
        dest="fmt",
        choices=list(FORMATS),
        default=None,
        help="Output format (default: markdown).",
    )
    render_p.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Document path (default: pretty-comment.md).",
    )
    render_p.add_argument(
        "--outcome-key",
        default=None,
        help="Key written to the outcome sink (default: has_findings, "
        "or has_issues for dependency reports).",
    )
    render_p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file.",
    )
    render_p.add_argument(
        "--no-collapse",
        dest="collapsible",
        action="store_false",
        default=None,
        help="Render code excerpts inline instead of in <details> blocks.",
    )
    render_p.add_argument(
        "--highlight",
        action="store_true",
        default=None,
        help="Mark risky code phrases in the excerpts.",
    )
    render_p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Exit 2 when the input is missing or malformed.",
    )
    render_p.add_argument(
        "--fail-on",
        choices=list(FAIL_ON_CHOICES),
        default=None,
        help="Exit 1 when a finding at or above this severity exists (default: never).",
    )
    render_p.add_argument(
        "--ci",
        "--deterministic",
        dest="ci_mode",
        action="store_true",
        default=False,
        help="Use a fixed scan timestamp so reruns are byte-identical.",
    )
    render_p.add_argument(
        "--timestamp",
        action="store_true",
        default=False,
        help="Stamp the document with the current UTC time (omitted by default).",
    )
    render_p.add_argument(
        "--stdout",
        action="store_true",
        default=False,
        help="Print the document instead of writing the output file.",
    )

    # ── summary subcommand ────────────────────────────────────────
    summary_p = sub.add_parser(
        "summary",
        help="Print the finding summary as JSON.",
    )
    summary_p.add_argument("input", type=Path)
    _add_source_arg(summary_p)

    return p


# ── handlers ────────────────────────────────────────────────────────


def _effective_config(args: argparse.Namespace) -> ReportConfig:
    """Layer CLI flags over the file/environment config."""
    config = load_config(args.config)
    overrides = {
        "output_path": str(args.output) if args.output is not None else None,
        "outcome_key": args.outcome_key,
        "format": args.fmt,
        "collapsible": args.collapsible,
        "highlight": args.highlight,
        "strict": args.strict,
        "fail_on": args.fail_on,
    }
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})


def _render_exit_code(report: ScanReport, config: ReportConfig) -> int:
    if report.is_degraded:
        return ExitCode.ERROR if config.strict else ExitCode.SUCCESS
    policy = ExitCodePolicy(fail_on=config.fail_on)
    return exit_code_for_findings(report.findings, policy=policy)


def _generated_at(args: argparse.Namespace) -> str | None:
    """Fixed under CI mode, live with ``--timestamp``, otherwise omitted."""
    if is_ci_mode():
        return deterministic_timestamp(ci_mode=True)
    if args.timestamp:
        return deterministic_timestamp()
    return None


def _handle_render(args: argparse.Namespace) -> int:
    """Dispatch ``scan-report render <input>``."""
    try:
        config = _effective_config(args)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return ExitCode.ERROR

    set_ci_mode(args.ci_mode)
    generated_at = _generated_at(args)

    report = build_report(
        args.input,
        _SOURCE_CHOICES[args.source],
        generated_at=generated_at,
    )
    document = export_report(
        report,
        config.format,
        collapsible=config.collapsible,
        highlight=config.highlight,
    )
    outcome_key = config.outcome_key or report.source.default_outcome_key

    if args.stdout:
        sys.stdout.write(document)
        append_outcome(
            outcome_key,
            report.has_findings,
            env=os.environ,
            env_var=config.output_env_var,
            fallback=config.fallback_output,
        )
    else:
        result = emit_report(
            document,
            has_findings=report.has_findings,
            output_path=config.output_path,
            outcome_key=outcome_key,
            env=os.environ,
            env_var=config.output_env_var,
            fallback=config.fallback_output,
        )
        print(f"Report written to {result.document_path}", file=sys.stderr)

    if report.is_degraded:
        print(f"warning: {report.degraded_reason}", file=sys.stderr)
    return _render_exit_code(report, config)


def _handle_summary(args: argparse.Namespace) -> int:
    """Dispatch ``scan-report summary <input>``."""
    report = build_report(args.input, _SOURCE_CHOICES[args.source])
    if report.is_degraded:
        print(f"error: {report.degraded_reason}", file=sys.stderr)
        return ExitCode.ERROR
    sys.stdout.write(stable_json_dumps(report.summary.to_dict()))
    return ExitCode.SUCCESS


_HANDLERS = {
    "render": _handle_render,
    "summary": _handle_summary,
}


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (0 = ok, 1 = findings over threshold, 2 = error)."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    handler = _HANDLERS.get(args.command)
    if handler is None:
        parser.print_help(sys.stderr)
        return ExitCode.ERROR
    return int(handler(args))


if __name__ == "__main__":
    raise SystemExit(main())
