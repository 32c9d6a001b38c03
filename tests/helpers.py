"""Shared test doubles and sample repositories."""

from __future__ import annotations

from typing import Iterable

from repo_readiness.domain.entities import Phase
from repo_readiness.domain.exceptions import ContentExtractionError
from repo_readiness.domain.value_objects import CategorySpec, ScoringConfig, build_thresholds

FIXED_TIMESTAMP = "2026-01-01T00:00:00+00:00"

DEFAULT_THRESHOLDS = build_thresholds(
    [(90, Phase.SCALE), (80, Phase.BETA), (60, Phase.MVP), (40, Phase.POC), (0, Phase.INCEPTION)]
)


class FakeSource:
    """In-memory RepoSource: ``{path: text}``; paths in *fail_reads* raise on read."""

    def __init__(
        self,
        files: dict[str, str],
        identifier: str = "acme/widget",
        fail_reads: Iterable[str] = (),
    ) -> None:
        self._files = files
        self._identifier = identifier
        self._fail = set(fail_reads)
        self.reads: list[str] = []

    @property
    def identifier(self) -> str:
        return self._identifier

    async def list_files(self) -> list[str]:
        return list(self._files)

    async def read_text(self, path: str) -> str:
        self.reads.append(path)
        if path in self._fail:
            raise ContentExtractionError(f"boom: {path}")
        return self._files[path]


def single_check_config(
    weights: dict[str, int | float], precision: int = 0, weighted_precision: int = 1
) -> ScoringConfig:
    """One check per category, named ``<category>_check``."""
    return ScoringConfig(
        categories=tuple(
            CategorySpec.create(cid, w, [f"{cid}_check"]) for cid, w in weights.items()
        ),
        thresholds=DEFAULT_THRESHOLDS,
        precision=precision,
        weighted_precision=weighted_precision,
    )


WELL_KEPT_REPO: dict[str, str] = {
    "README.md": "# Widget\n" + "\n".join(f"Line {i}" for i in range(60)),
    "LICENSE": "MIT",
    "CONTRIBUTING.md": "Be nice.",
    "CHANGELOG.md": "## 1.0.0",
    "docs/index.md": "Docs",
    "SECURITY.md": "Report to security@example.com",
    ".github/dependabot.yml": "version: 2",
    ".github/workflows/ci.yml": "on: push",
    ".gitignore": ".env\n",
    "pyproject.toml": (
        "[project]\nname = 'widget'\n\n"
        "[tool.pytest.ini_options]\n\n[tool.coverage.run]\n\n[tool.ruff]\n"
    ),
    "Makefile": "test:\n\tpytest\n",
    ".editorconfig": "root = true",
    ".pre-commit-config.yaml": "repos: []",
    ".env.example": "API_URL=",
    "Dockerfile": "FROM python:3.12",
    "src/widget/core.py": "def run():\n    return 1\n",
    **{f"tests/test_mod{i}.py": "def test_ok():\n    assert True\n" for i in range(10)},
}
