"""Tests for the compute-readiness use case and report assembly."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Callable

import pytest

from repo_readiness.domain.entities import Check, Phase
from repo_readiness.domain.value_objects import ScoringConfig
from repo_readiness.infrastructure.local_source import LocalRepoSource
from repo_readiness.services.compute_readiness import (
    ComputeReadinessUseCase,
    build_report,
    utc_timestamp,
)
from repo_readiness.services.report_emitter import render_json
from repo_readiness.services.signal_collector import Probe, RepoSnapshot, SignalCollector
from tests.helpers import FIXED_TIMESTAMP, WELL_KEPT_REPO, FakeSource, single_check_config

WEIGHTS = {"tests": 30, "security": 30, "documentation": 20, "developer_experience": 20}


def _collected(values: dict[str, float | None]) -> dict[str, tuple[Check, ...]]:
    out: dict[str, tuple[Check, ...]] = {}
    for cid, value in values.items():
        check_id = f"{cid}_check"
        if value is None:
            out[cid] = (Check.unavailable(check_id, "source offline"),)
        else:
            out[cid] = (Check.from_number(check_id, value),)
    return out


class TestBuildReport:
    def test_example_scenario(self) -> None:
        config = single_check_config(WEIGHTS)
        collected = _collected(
            {"tests": 80, "security": 60, "documentation": 90, "developer_experience": 50}
        )
        report = build_report("acme/widget", collected, config, FIXED_TIMESTAMP)

        assert report.total_score == 70
        assert report.phase_readiness is Phase.MVP
        assert [c.id for c in report.categories] == list(WEIGHTS)
        assert report.by_id["tests"].weighted_score == 24
        assert not report.insufficient_data

    def test_unavailable_category_flagged_and_counted_as_zero(self) -> None:
        config = single_check_config(WEIGHTS)
        collected = _collected(
            {"tests": 100, "security": None, "documentation": 100, "developer_experience": 100}
        )
        report = build_report("acme/widget", collected, config, FIXED_TIMESTAMP)

        security = report.by_id["security"]
        assert security.score == 0
        assert security.insufficient_data
        assert security.unavailable_checks == ("security_check",)
        assert report.insufficient_data
        assert report.total_score == 70

    def test_identical_inputs_give_identical_bytes(self) -> None:
        config = single_check_config(WEIGHTS, precision=1)
        collected = _collected(
            {"tests": 77.7, "security": 33.3, "documentation": 12.5, "developer_experience": 99}
        )
        first = render_json(build_report("r", collected, config, FIXED_TIMESTAMP))
        second = render_json(build_report("r", collected, config, FIXED_TIMESTAMP))
        assert first == second

    def test_thresholds_carried_on_report(self, scoring_config: ScoringConfig) -> None:
        report = build_report("r", {}, scoring_config, FIXED_TIMESTAMP)
        assert report.thresholds == scoring_config.thresholds
        assert report.total_score == 0
        assert report.phase_readiness is Phase.INCEPTION


def test_utc_timestamp_is_iso_utc() -> None:
    stamp = utc_timestamp()
    assert stamp.endswith("+00:00")
    assert "." not in stamp


class TestComputeReadinessUseCase:
    @pytest.mark.asyncio
    async def test_well_kept_repo_reaches_scale(
        self, scoring_config: ScoringConfig, fixed_clock: Callable[[], str]
    ) -> None:
        use_case = ComputeReadinessUseCase(scoring_config, clock=fixed_clock)
        report = await use_case.execute(FakeSource(WELL_KEPT_REPO))

        assert report.repository == "acme/widget"
        assert report.timestamp == FIXED_TIMESTAMP
        assert report.total_score == 100
        assert report.phase_readiness is Phase.SCALE
        assert not report.insufficient_data

    @pytest.mark.asyncio
    async def test_repeated_runs_are_byte_identical(
        self, scoring_config: ScoringConfig, fixed_clock: Callable[[], str]
    ) -> None:
        use_case = ComputeReadinessUseCase(scoring_config, clock=fixed_clock)
        files = {"README.md": "# x\n", "tests/test_a.py": "", "Makefile": "all:\n"}
        first = await use_case.execute(FakeSource(files))
        second = await use_case.execute(FakeSource(files))
        assert render_json(first) == render_json(second)

    @pytest.mark.asyncio
    async def test_failed_probe_flags_its_category(
        self, fixed_clock: Callable[[], str]
    ) -> None:
        async def ok(snap: RepoSnapshot) -> bool:
            return True

        async def broken(snap: RepoSnapshot) -> bool:
            raise RuntimeError("api down")

        config = single_check_config({"tests": 50, "security": 50})
        probes = {
            "tests_check": Probe("tests_check", "ok", ok),
            "security_check": Probe("security_check", "broken", broken),
        }
        use_case = ComputeReadinessUseCase(
            config, collector=SignalCollector(config, probes=probes), clock=fixed_clock
        )
        report = await use_case.execute(FakeSource({}))

        assert report.by_id["tests"].score == 100
        assert report.by_id["security"].score == 0
        assert report.by_id["security"].insufficient_data
        assert report.by_id["security"].checks[0].error == "api down"
        assert report.total_score == 50
        assert report.phase_readiness is Phase.POC

    @pytest.mark.asyncio
    async def test_local_directory(
        self,
        scoring_config: ScoringConfig,
        fixed_clock: Callable[[], str],
        make_repo: Callable[[dict[str, str]], Path],
    ) -> None:
        root = make_repo(WELL_KEPT_REPO)
        use_case = ComputeReadinessUseCase(scoring_config, clock=fixed_clock)
        report = await use_case.execute(LocalRepoSource(root))

        assert report.repository == "repo"
        assert report.total_score == 100
        assert all(isinstance(c.score, Decimal) for c in report.categories)
