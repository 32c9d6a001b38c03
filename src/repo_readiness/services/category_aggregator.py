"""Category aggregation — combine a category's checks into one 0-100 score.

The score is the arithmetic mean over the checks the configuration declares
for the category.  A declared check that was not collected, or came back
unavailable, counts as the "no signal" fallback of 0 and flags the category
with ``insufficient_data`` so a broken probe never inflates the result.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from repo_readiness.domain.entities import Check, clamp_score
from repo_readiness.domain.value_objects import CategorySpec, ScoringConfig

logger = logging.getLogger(__name__)

NO_SIGNAL_SCORE = Decimal(0)


def aggregate_category(
    spec: CategorySpec,
    checks: Iterable[Check],
    config: ScoringConfig,
) -> tuple[Decimal, bool, tuple[Check, ...], tuple[str, ...]]:
    """Return ``(score, insufficient_data, used_checks, unavailable_ids)``.

    Parameters
    ----------
    spec:
        The category's fixed configuration (check ids, weight).
    checks:
        Checks collected for this category.  Ids not declared in *spec* are
        ignored.
    config:
        Supplies the rounding precision shared across the run.
    """
    by_id: dict[str, Check] = {}
    for check in checks:
        if check.id not in spec.checks:
            logger.debug("Ignoring undeclared check %r for category %s", check.id, spec.id)
            continue
        by_id[check.id] = check

    if not by_id:
        logger.warning("Category %s: no checks collected, scoring as no signal", spec.id)

    used: list[Check] = []
    unavailable: list[str] = []
    total = Decimal(0)

    for check_id in spec.checks:
        check = by_id.get(check_id)
        if check is None:
            check = Check.unavailable(check_id, "Check was not collected.")
        used.append(check)
        if check.value is None:
            unavailable.append(check_id)
            total += NO_SIGNAL_SCORE
        else:
            total += check.value

    score = config.quantize(clamp_score(total / len(spec.checks)))
    return score, bool(unavailable), tuple(used), tuple(unavailable)
