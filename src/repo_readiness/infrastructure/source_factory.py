"""Pick the RepoSource implementation for a repository argument."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from repo_readiness.domain.ports.repo_source import RepoSource
from repo_readiness.domain.value_objects import GitHubUrl
from repo_readiness.infrastructure.config import Settings
from repo_readiness.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_readiness.infrastructure.local_source import LocalRepoSource


def github_source(client: httpx.AsyncClient, repository: str, settings: Settings) -> GitHubRestAdapter:
    """Build a GitHub-backed source sharing *client*."""
    token = settings.github_token.get_secret_value() if settings.github_token else None
    return GitHubRestAdapter(
        client=client,
        url=GitHubUrl.from_string(repository),
        token=token,
        max_file_size_kb=settings.max_file_size_kb,
    )


@asynccontextmanager
async def open_source(repository: str, settings: Settings) -> AsyncIterator[RepoSource]:
    """Yield a source for a GitHub URL or a local directory, closing any HTTP client after."""
    if GitHubUrl.looks_like(repository):
        timeout = httpx.Timeout(settings.http_timeout_seconds)
        async with httpx.AsyncClient(timeout=timeout) as client:
            yield github_source(client, repository, settings)
    else:
        yield LocalRepoSource(repository, max_file_size_kb=settings.max_file_size_kb)
