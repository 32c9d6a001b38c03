"""
Pytest configuration and fixtures.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest

from repo_readiness.domain.scoring_constants import default_scoring_config
from repo_readiness.domain.value_objects import ScoringConfig
from repo_readiness.infrastructure.config import get_settings
from tests.helpers import FIXED_TIMESTAMP


@pytest.fixture
def scoring_config() -> ScoringConfig:
    return default_scoring_config()


@pytest.fixture
def fixed_clock() -> Callable[[], str]:
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write ``{relative_path: text}`` under a fresh directory and return it."""

    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "repo"
        root.mkdir(exist_ok=True)
        for rel, text in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return root

    return _make


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    """Settings are lru_cached; keep env changes from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
