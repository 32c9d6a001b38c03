"""Compute-readiness use case — the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the :class:`RepoSource` port and the pure scoring services; the CLI and the
HTTP interface inject a concrete source at runtime.

Pipeline: collect → aggregate → weight → classify → :class:`Report`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Mapping, Sequence

from repo_readiness.domain.entities import Check, Report
from repo_readiness.domain.ports.repo_source import RepoSource
from repo_readiness.domain.value_objects import ScoringConfig
from repo_readiness.services.composite_scorer import score_categories, total_score
from repo_readiness.services.phase_classifier import classify
from repo_readiness.services.signal_collector import SignalCollector

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with second precision."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def build_report(
    repository: str,
    collected: Mapping[str, Sequence[Check]],
    config: ScoringConfig,
    timestamp: str,
) -> Report:
    """Score already-collected checks.  Pure: same inputs, same :class:`Report`."""
    categories = score_categories(collected, config)
    total = total_score(categories)
    phase = classify(total, config.thresholds)
    return Report(
        repository=repository,
        timestamp=timestamp,
        categories=categories,
        total_score=total,
        phase_readiness=phase,
        thresholds=config.thresholds,
        precision=config.precision,
        weighted_precision=config.weighted_precision,
    )


class ComputeReadinessUseCase:
    """Orchestrates the full repository → readiness report pipeline.

    Parameters
    ----------
    config:
        Validated scoring configuration shared by collector and scorer.
    collector:
        Signal collector; built from *config* when omitted.
    clock:
        Returns the report timestamp; injectable for reproducible output.
    """

    def __init__(
        self,
        config: ScoringConfig,
        collector: SignalCollector | None = None,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        self._config = config
        self._collector = collector or SignalCollector(config)
        self._clock = clock

    async def execute(self, source: RepoSource) -> Report:
        """Collect every signal for *source* and return its report."""
        logger.info("Scoring readiness of %s", source.identifier)

        collected = await self._collector.collect(source)

        report = build_report(source.identifier, collected, self._config, self._clock())

        flagged = [c.id for c in report.categories if c.insufficient_data]
        if flagged:
            logger.warning("Insufficient data for categories: %s", ", ".join(flagged))
        logger.info(
            "Readiness of %s: %s/100 (%s)",
            report.repository,
            report.total_score,
            report.phase_readiness.value,
        )
        return report
