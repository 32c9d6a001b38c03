"""Domain exception hierarchy.

Inner layers raise these; the CLI maps them to exit codes and the HTTP
error-handler maps them to status codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from repo_readiness.domain.entities import Report


class ReadinessError(Exception):
    """Base exception for the entire application."""


# ── Configuration (fatal, raised before any scoring) ───────────────────────


class ConfigurationError(ReadinessError):
    """The fixed scoring configuration is invalid (weights, checks, phases)."""


# ── Signal collection (recoverable, per check) ─────────────────────────────


class SignalUnavailable(ReadinessError):
    """A single signal could not be collected; recorded as an unavailable check."""


# ── Output ──────────────────────────────────────────────────────────────────


class OutputError(ReadinessError):
    """The report could not be written to the requested destination.

    The fully computed :class:`Report` stays reachable through ``report`` so the
    caller can still present it.
    """

    def __init__(self, message: str, report: Report | None = None) -> None:
        super().__init__(message)
        self.report = report


# ── Repository sources ──────────────────────────────────────────────────────


class InvalidGitHubUrlError(ReadinessError):
    """The supplied URL does not point to a valid GitHub repository."""


class RepositoryNotFoundError(ReadinessError):
    """The repository does not exist or is not accessible (404 / missing path)."""


class RepositoryAccessDeniedError(ReadinessError):
    """Access to the repository was denied (403)."""


class EmptyRepositoryError(ReadinessError):
    """The repository exists but has no content (empty tree)."""


class GitHubRateLimitError(ReadinessError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class ContentExtractionError(ReadinessError):
    """Failed to read repository content (network error, unexpected status)."""
