"""Tests for phase classification."""

from __future__ import annotations

from decimal import Decimal

import pytest

from repo_readiness.domain.entities import Phase
from repo_readiness.services.phase_classifier import classify
from tests.helpers import DEFAULT_THRESHOLDS


@pytest.mark.parametrize(
    "score,expected",
    [
        (100, Phase.SCALE),
        (95, Phase.SCALE),
        (90, Phase.SCALE),
        (89, Phase.BETA),
        (85, Phase.BETA),
        (80, Phase.BETA),
        (79, Phase.MVP),
        (72, Phase.MVP),
        (70, Phase.MVP),
        (60, Phase.MVP),
        (59, Phase.POC),
        (50, Phase.POC),
        (40, Phase.POC),
        (39, Phase.INCEPTION),
        (30, Phase.INCEPTION),
        (0, Phase.INCEPTION),
    ],
)
def test_thresholds(score: int, expected: Phase) -> None:
    assert classify(score, DEFAULT_THRESHOLDS) is expected


def test_fractional_just_below_boundary() -> None:
    assert classify(Decimal("89.9"), DEFAULT_THRESHOLDS) is Phase.BETA


def test_every_integer_score_maps_to_exactly_one_phase() -> None:
    phases = [classify(s, DEFAULT_THRESHOLDS) for s in range(101)]
    assert all(isinstance(p, Phase) for p in phases)
    # Monotone: a higher score never maps to a lower phase.
    order = list(Phase)
    ranks = [order.index(p) for p in phases]
    assert ranks == sorted(ranks)


def test_out_of_range_scores_clamped() -> None:
    assert classify(140, DEFAULT_THRESHOLDS) is Phase.SCALE
    assert classify(-3, DEFAULT_THRESHOLDS) is Phase.INCEPTION
