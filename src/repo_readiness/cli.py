"""Command-line front end: compute the readiness score and emit both artefacts.

Usage:
    repo-readiness                       # score the current directory
    repo-readiness path/to/repo --output reports --verbose
    repo-readiness https://github.com/psf/requests

Exit codes:
    0  report produced (categories may still be flagged insufficient_data)
    1  repository could not be read
    2  scoring configuration or a command-line option is invalid (nothing was scored)
    3  report computed but could not be written (summary still printed)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from repo_readiness.domain.entities import Report
from repo_readiness.domain.exceptions import ConfigurationError, OutputError, ReadinessError
from repo_readiness.domain.scoring_constants import default_scoring_config
from repo_readiness.infrastructure.config import Settings, get_settings
from repo_readiness.infrastructure.source_factory import open_source
from repo_readiness.services.compute_readiness import ComputeReadinessUseCase
from repo_readiness.services.report_emitter import emit_report
from repo_readiness.services.report_renderer import render_summary
from repo_readiness.services.signal_collector import SignalCollector

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SOURCE_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_OUTPUT_ERROR = 3

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repo-readiness",
        description=(
            "Repository Readiness Score: weighs tests, security, documentation and "
            "developer-experience signals into a 0-100 score and a phase label."
        ),
    )
    parser.add_argument(
        "repository",
        nargs="?",
        default=".",
        help="Local directory or https://github.com/<owner>/<repo> URL (default: .)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=settings.output_dir,
        help=f"Directory for dprs.json and dprs.md (default: {settings.output_dir})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Add per-check Score Details to the summary and log at DEBUG",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.log_level,
        help=f"Logging level when not verbose (default: {settings.log_level})",
    )
    return parser


async def _score(repository: str, settings: Settings) -> Report:
    config = default_scoring_config(
        precision=settings.score_precision,
        weighted_precision=settings.weighted_precision,
    )
    collector = SignalCollector(
        config,
        probe_timeout=settings.probe_timeout_seconds,
        max_files_to_scan=settings.max_files_to_scan,
    )
    use_case = ComputeReadinessUseCase(config=config, collector=collector)
    async with open_source(repository, settings) as source:
        return await use_case.execute(source)


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    # argparse does not check a default against choices; LOG_LEVEL arrives that way.
    if args.log_level not in LOG_LEVELS:
        parser.error(
            f"invalid LOG_LEVEL {settings.log_level!r} (choose from {', '.join(LOG_LEVELS)})"
        )

    logging.basicConfig(
        level="DEBUG" if args.verbose else args.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        stream=sys.stderr,
    )

    try:
        report = asyncio.run(_score(args.repository, settings))
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIG_ERROR
    except ReadinessError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return EXIT_SOURCE_ERROR

    print(render_summary(report, verbose=args.verbose), end="")

    try:
        emit_report(report, args.output, verbose=args.verbose)
    except OutputError as exc:
        logger.error("%s", exc)
        return EXIT_OUTPUT_ERROR
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
