"""GitHub REST API adapter — implements the RepoSource port for public repositories."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

import httpx

from repo_readiness.domain.exceptions import (
    ContentExtractionError,
    EmptyRepositoryError,
    GitHubRateLimitError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
)
from repo_readiness.domain.value_objects import GitHubUrl

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_RAW_BASE = "https://raw.githubusercontent.com"
_USER_AGENT = "repo-readiness/1.0"


class GitHubRestAdapter:
    """Concrete RepoSource backed by the GitHub v3 REST API.

    The default branch and tree are fetched once and cached; file reads go
    through raw.githubusercontent.com, bounded by a small semaphore.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: GitHubUrl,
        token: str | None = None,
        max_file_size_kb: int = 200,
        max_concurrent_reads: int = 10,
    ) -> None:
        self._client = client
        self._url = url
        self._max_bytes = max_file_size_kb * 1024
        self._sem = asyncio.Semaphore(max_concurrent_reads)
        self._branch: str | None = None
        self._sizes: dict[str, int] = {}
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": _USER_AGENT,
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    @property
    def identifier(self) -> str:
        return self._url.full_name

    async def default_branch(self) -> str:
        """GET /repos/{owner}/{repo} → default branch name."""
        if self._branch is None:
            resp = await self._api_get(f"/repos/{self._url.owner}/{self._url.repo}")
            self._branch = resp.json().get("default_branch", "main")
        return self._branch

    async def list_files(self) -> list[str]:
        """GET /repos/{owner}/{repo}/git/trees/{branch}?recursive=1 → blob paths."""
        branch = await self.default_branch()
        resp = await self._api_get(
            f"/repos/{self._url.owner}/{self._url.repo}/git/trees/{branch}",
            params={"recursive": "1"},
        )
        data = resp.json()
        tree = data.get("tree", [])

        if not tree:
            raise EmptyRepositoryError(f"Repository {self._url.full_name} appears empty.")
        if data.get("truncated"):
            logger.warning("Tree for %s was truncated by GitHub", self._url.full_name)

        self._sizes = {
            item["path"]: item.get("size", 0)
            for item in tree
            if item.get("type", "blob") == "blob"
        }
        return list(self._sizes)

    async def read_text(self, path: str) -> str:
        """Fetch raw file content via raw.githubusercontent.com (no rate limit)."""
        size = self._sizes.get(path, 0)
        if size > self._max_bytes:
            raise ContentExtractionError(
                f"{path} is {size} bytes, above the {self._max_bytes} byte limit"
            )

        branch = await self.default_branch()
        raw_url = f"{_RAW_BASE}/{self._url.owner}/{self._url.repo}/{branch}/{path}"
        async with self._sem:
            try:
                resp = await self._client.get(raw_url, headers={"User-Agent": _USER_AGENT})
            except httpx.HTTPError as exc:
                raise ContentExtractionError(
                    f"Network error fetching {raw_url}: {exc}"
                ) from exc

        if resp.status_code == 200:
            return resp.text

        if resp.status_code == 404:
            raise ContentExtractionError(f"File not found: {path}")

        raise ContentExtractionError(
            f"raw.githubusercontent.com returned HTTP {resp.status_code} for {path}"
        )

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{_GITHUB_API}{endpoint}"
        try:
            resp = await self._client.get(
                url, headers=self._api_headers, params=params
            )
        except httpx.HTTPError as exc:
            raise ContentExtractionError(
                f"Network error fetching {url}: {exc}"
            ) from exc

        if resp.status_code == 200:
            return resp

        if resp.status_code == 404:
            raise RepositoryNotFoundError(
                "Repository not found. Make sure the URL points to a public repository."
            )

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}. "
                    "Set the GITHUB_TOKEN environment variable to increase the limit."
                )
            raise RepositoryAccessDeniedError(
                "Access denied. The repository may be private."
            )

        if resp.status_code == 429:
            raise GitHubRateLimitError("GitHub API rate limit exceeded (HTTP 429).")

        raise ContentExtractionError(
            f"GitHub API returned HTTP {resp.status_code} for {url}"
        )
