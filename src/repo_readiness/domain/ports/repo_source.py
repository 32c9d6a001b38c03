"""Port: repository source — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class RepoSource(Protocol):
    """Abstract contract for reading a repository tree, local or remote."""

    @property
    def identifier(self) -> str:
        """Human-readable repository identifier written into the report."""
        ...

    async def list_files(self) -> list[str]:
        """Return every file path in the repository, ``/``-separated and relative."""
        ...

    async def read_text(self, path: str) -> str:
        """Return the decoded text content of a single file."""
        ...
