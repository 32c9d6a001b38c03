"""Local filesystem adapter — implements the RepoSource port for a checkout on disk."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from repo_readiness.domain.exceptions import ContentExtractionError, RepositoryNotFoundError
from repo_readiness.services.path_rules import SKIP_DIRS

logger = logging.getLogger(__name__)


class LocalRepoSource:
    """Concrete RepoSource reading a directory tree.

    Skipped directories (VCS metadata, virtualenvs, ``node_modules`` …) are
    pruned during the walk, never descended into.
    """

    def __init__(self, root: str | Path, max_file_size_kb: int = 200) -> None:
        self._root = Path(root).expanduser().resolve()
        if not self._root.is_dir():
            raise RepositoryNotFoundError(f"Repository path not found or not a directory: {root}")
        self._max_bytes = max_file_size_kb * 1024

    @property
    def identifier(self) -> str:
        return self._root.name or str(self._root)

    async def list_files(self) -> list[str]:
        return await asyncio.to_thread(self._walk)

    def _walk(self) -> list[str]:
        files: list[str] = []
        for dirpath, dirnames, filenames in os.walk(self._root):
            dirnames[:] = sorted(
                d for d in dirnames if d not in SKIP_DIRS and not d.endswith(".egg-info")
            )
            rel_dir = Path(dirpath).relative_to(self._root)
            for name in sorted(filenames):
                files.append((rel_dir / name).as_posix())
        logger.debug("Walked %s: %d file(s)", self._root, len(files))
        return files

    async def read_text(self, path: str) -> str:
        return await asyncio.to_thread(self._read, path)

    def _read(self, path: str) -> str:
        target = (self._root / path).resolve()
        if not target.is_relative_to(self._root):
            raise ContentExtractionError(f"Path escapes the repository root: {path}")
        try:
            size = target.stat().st_size
            if size > self._max_bytes:
                raise ContentExtractionError(
                    f"{path} is {size} bytes, above the {self._max_bytes} byte limit"
                )
            return target.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ContentExtractionError(f"Could not read {path}: {exc}") from exc
