"""Weighting & composite scoring.

``weighted_score = round(score * weight / 100, weighted_precision)`` per
category (one decimal place by default) and ``total_score = sum(weighted_score)``
clamped to [0, 100].  All arithmetic is :class:`~decimal.Decimal` with half-up
rounding so identical inputs give identical output on every platform.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Mapping, Sequence

from repo_readiness.domain.entities import CategoryScore, Check, clamp_score
from repo_readiness.domain.value_objects import ScoringConfig
from repo_readiness.services.category_aggregator import aggregate_category

logger = logging.getLogger(__name__)

_HUNDRED = Decimal(100)


def weighted(score: Decimal, weight: Decimal, config: ScoringConfig) -> Decimal:
    """One category's contribution to the total, in percentage points."""
    return config.quantize_weighted(score * weight / _HUNDRED)


def score_categories(
    collected: Mapping[str, Sequence[Check]],
    config: ScoringConfig,
) -> tuple[CategoryScore, ...]:
    """Aggregate and weight every configured category, in configuration order.

    Categories missing from *collected* still appear in the result with the
    fallback score and ``insufficient_data`` set.
    """
    unknown = set(collected) - set(config.weights)
    if unknown:
        logger.warning("Ignoring checks for unconfigured categories: %s", sorted(unknown))

    results: list[CategoryScore] = []
    for spec in config.categories:
        score, insufficient, used, unavailable = aggregate_category(
            spec, collected.get(spec.id, ()), config
        )
        results.append(
            CategoryScore(
                id=spec.id,
                title=spec.title,
                weight=spec.weight,
                score=score,
                weighted_score=weighted(score, spec.weight, config),
                insufficient_data=insufficient,
                checks=used,
                unavailable_checks=unavailable,
            )
        )
        logger.debug(
            "Category %s: score=%s weight=%s weighted=%s insufficient=%s",
            spec.id,
            score,
            spec.weight,
            results[-1].weighted_score,
            insufficient,
        )
    return tuple(results)


def total_score(categories: Sequence[CategoryScore]) -> Decimal:
    """Sum of weighted scores, clamped to [0, 100]."""
    return clamp_score(sum((c.weighted_score for c in categories), Decimal(0)))
