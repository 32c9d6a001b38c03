"""Fixed scoring configuration — category weights, check sets and phase table.

No magic numbers inside the scoring services; everything they need is passed
in as a :class:`ScoringConfig` built from the values below.
"""

from __future__ import annotations

from repo_readiness.domain.entities import Phase
from repo_readiness.domain.value_objects import CategorySpec, ScoringConfig, build_thresholds

# ── Categories (weights sum to 100) ─────────────────────────────────────────

TESTS = "tests"
SECURITY = "security"
DOCUMENTATION = "documentation"
DEVELOPER_EXPERIENCE = "developer_experience"

CATEGORY_WEIGHTS: dict[str, int] = {
    TESTS: 30,
    SECURITY: 30,
    DOCUMENTATION: 20,
    DEVELOPER_EXPERIENCE: 20,
}

CATEGORY_TITLES: dict[str, str] = {
    TESTS: "Tests",
    SECURITY: "Security",
    DOCUMENTATION: "Documentation",
    DEVELOPER_EXPERIENCE: "Developer Experience",
}

CATEGORY_CHECKS: dict[str, tuple[str, ...]] = {
    TESTS: (
        "test_files",
        "test_config",
        "ci_workflow",
        "coverage_config",
    ),
    SECURITY: (
        "security_policy",
        "dependency_updates",
        "gitignore",
        "no_committed_env_files",
        "no_hardcoded_secrets",
    ),
    DOCUMENTATION: (
        "readme",
        "readme_depth",
        "license",
        "contributing",
        "changelog",
        "docs_dir",
    ),
    DEVELOPER_EXPERIENCE: (
        "build_manifest",
        "task_runner",
        "editor_config",
        "pre_commit",
        "lint_config",
        "env_template",
        "container_setup",
    ),
}

# ── Phase table (highest minimum first, last row starts at 0) ──────────────

PHASE_THRESHOLDS: tuple[tuple[int, Phase], ...] = (
    (90, Phase.SCALE),
    (80, Phase.BETA),
    (60, Phase.MVP),
    (40, Phase.POC),
    (0, Phase.INCEPTION),
)

# ── Numeric check ranges ────────────────────────────────────────────────────

# Test files needed for a full ``test_files`` score.
TEST_FILES_FOR_FULL_SCORE: int = 10
# Non-blank README lines needed for a full ``readme_depth`` score.
README_LINES_FOR_FULL_SCORE: int = 50


def default_scoring_config(
    precision: int = 0, weighted_precision: int = 1
) -> ScoringConfig:
    """Build (and thereby validate) the fixed configuration for a run."""
    return ScoringConfig(
        categories=tuple(
            CategorySpec.create(
                category_id,
                weight,
                CATEGORY_CHECKS[category_id],
                CATEGORY_TITLES[category_id],
            )
            for category_id, weight in CATEGORY_WEIGHTS.items()
        ),
        thresholds=build_thresholds(PHASE_THRESHOLDS),
        precision=precision,
        weighted_precision=weighted_precision,
    )
