"""Phase classification — map a total score onto the ordered phase table."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from repo_readiness.domain.entities import Phase, PhaseThreshold, clamp_score, to_decimal

logger = logging.getLogger(__name__)


def classify(score: int | float | Decimal, thresholds: Sequence[PhaseThreshold]) -> Phase:
    """Return the phase of the first threshold (highest first) whose minimum ≤ *score*.

    A score sitting exactly on a boundary belongs to the higher phase.  Scores
    outside [0, 100] are clamped; the validated table always ends at 0, so a
    match is guaranteed.
    """
    value = to_decimal(score)
    clamped = clamp_score(value)
    if clamped != value:
        logger.warning("Score %s outside [0, 100]; clamped to %s", value, clamped)

    for row in thresholds:
        if row.minimum <= clamped:
            return row.phase

    raise ValueError("Phase table does not cover the score range.")
