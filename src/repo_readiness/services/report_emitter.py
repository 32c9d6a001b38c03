"""Report emitter — persist a finished report as ``dprs.json`` and ``dprs.md``."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from repo_readiness.domain.entities import Report
from repo_readiness.domain.exceptions import OutputError
from repo_readiness.services.report_renderer import render_summary, to_structured

logger = logging.getLogger(__name__)

JSON_FILENAME = "dprs.json"
SUMMARY_FILENAME = "dprs.md"


@dataclass(frozen=True, slots=True)
class EmittedReport:
    """Where the two artefacts of a run were written."""

    json_path: Path
    summary_path: Path


def render_json(report: Report) -> str:
    """Serialise the structured form; identical reports give identical bytes."""
    return json.dumps(to_structured(report), indent=2, ensure_ascii=False) + "\n"


def emit_report(report: Report, output_dir: str | Path, verbose: bool = False) -> EmittedReport:
    """Write both artefacts into *output_dir*, creating it if needed.

    Raises :class:`OutputError` (carrying *report*) if anything cannot be written.
    """
    target = Path(output_dir)
    json_path = target / JSON_FILENAME
    summary_path = target / SUMMARY_FILENAME

    try:
        target.mkdir(parents=True, exist_ok=True)
        json_path.write_text(render_json(report), encoding="utf-8")
        summary_path.write_text(render_summary(report, verbose=verbose), encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"Could not write report to {target}: {exc}", report=report) from exc

    logger.info("Wrote %s and %s", json_path, summary_path)
    return EmittedReport(json_path=json_path, summary_path=summary_path)
