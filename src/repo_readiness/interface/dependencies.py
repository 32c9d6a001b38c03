"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

import httpx

from repo_readiness.domain.scoring_constants import default_scoring_config
from repo_readiness.domain.value_objects import ScoringConfig
from repo_readiness.infrastructure.config import Settings, get_settings
from repo_readiness.services.compute_readiness import ComputeReadinessUseCase
from repo_readiness.services.signal_collector import SignalCollector

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    # Fail fast on a broken scoring configuration before serving requests.
    get_use_case()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_settings_dependency() -> Settings:
    return _settings()


@lru_cache(maxsize=1)
def get_scoring_config() -> ScoringConfig:
    """Validated scoring configuration, built once per process."""
    settings = _settings()
    return default_scoring_config(
        precision=settings.score_precision,
        weighted_precision=settings.weighted_precision,
    )


@lru_cache(maxsize=1)
def get_use_case() -> ComputeReadinessUseCase:
    """Build (or return cached) use case with the configured collector."""
    settings = _settings()
    config = get_scoring_config()
    collector = SignalCollector(
        config,
        probe_timeout=settings.probe_timeout_seconds,
        max_files_to_scan=settings.max_files_to_scan,
    )
    return ComputeReadinessUseCase(config=config, collector=collector)


def get_http_client() -> httpx.AsyncClient:
    assert _http_client is not None, "startup() was not called"
    return _http_client
