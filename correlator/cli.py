"""Command-line entry point for the SCAP results correlator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .config import Settings, load_settings
from .engine import correlate
from .errors import ConfigurationError, CorrelationError, PolicyFormatError
from .logging_config import setup_logging
from .policy import PolicyCheckSet, load_policy
from .result import ResultSet, format_summary_table
from .xccdf import ResultsDocument

ABORT_EXIT_CODE = 3

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Correlate OpenSCAP ARF results with a policy's expected checks",
    )
    parser.add_argument(
        "--arf",
        "--results",
        dest="arf_path",
        default=None,
        help="Path to the ARF/XCCDF results document (defaults to the workspace results file).",
    )
    parser.add_argument(
        "--policy",
        required=True,
        help="Path to the YAML policy listing the expected check ids.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML settings file (workspace, profile, results_file).",
    )
    parser.add_argument(
        "--format",
        choices=["json"],
        default="json",
        help="Report format for file output (defaults to json).",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the structured report (e.g., artifacts/observations.json).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Emit logs as JSON lines on stderr.",
    )
    return parser


def resolve_results_path(arf_path: Optional[str], settings: Settings) -> Path:
    if arf_path:
        return Path(arf_path)
    settings.require_complete()
    return settings.arf_path


def run_correlation(results_path: Path, policy_path: Path) -> ResultSet:
    check_set = PolicyCheckSet.from_policy(load_policy(policy_path))
    if not check_set:
        logger.warning("Policy %s declares no checks; no observations will be produced", policy_path)
    document = ResultsDocument.from_path(results_path)
    return correlate(document, check_set)


def build_report(result_set: ResultSet, settings: Settings) -> Dict[str, object]:
    report = result_set.to_dict()
    if settings.profile:
        report["profile"] = settings.profile
    return report


def write_output(report: Dict[str, object], summary: str, output_path: str | None, report_format: str) -> None:
    print(summary)

    if report_format == "json":
        payload = json.dumps(report, indent=2)
        if output_path:
            output_file = Path(output_path)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_text(payload, encoding="utf-8")
            print(f"\nReport written to {output_path}")
        else:
            print("\nJSON Report")
            print(payload)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level, json_logs=args.json_logs)

    try:
        settings = load_settings(Path(args.config) if args.config else None)
        results_path = resolve_results_path(args.arf_path, settings)
        result_set = run_correlation(results_path, Path(args.policy))
    except (CorrelationError, PolicyFormatError, ConfigurationError) as exc:
        logger.debug("Correlation aborted", exc_info=True)
        sys.stderr.write(f"Correlation aborted: {exc}\n")
        return ABORT_EXIT_CODE

    write_output(build_report(result_set, settings), format_summary_table(result_set), args.output_path, args.format)
    return result_set.exit_code()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
