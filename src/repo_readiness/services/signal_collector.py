"""Signal collection — run the repository probes and normalise their results.

Every probe inspects a :class:`RepoSnapshot` (file listing plus lazy text
reads) and yields one :class:`Check`.  Probes for all categories run
concurrently; ``collect`` only returns once every probe has finished, so the
aggregator always receives a fully materialised set of checks.  A probe that
raises or times out becomes an *unavailable* check instead of failing the run.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, Mapping

from repo_readiness.domain.entities import Check
from repo_readiness.domain.exceptions import ConfigurationError, ReadinessError, SignalUnavailable
from repo_readiness.domain.ports.repo_source import RepoSource
from repo_readiness.domain.scoring_constants import (
    README_LINES_FOR_FULL_SCORE,
    TEST_FILES_FOR_FULL_SCORE,
)
from repo_readiness.domain.value_objects import CategorySpec, ScoringConfig
from repo_readiness.services.path_rules import (
    SECRET_FILES,
    depth,
    filename,
    in_skipped_dir,
    is_test_file,
    normalise,
)
from repo_readiness.services.secret_scanner import is_scannable, scan_batch

logger = logging.getLogger(__name__)


# ── Snapshot ────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RepoSnapshot:
    """Read-only view of a repository shared by all probes of one run."""

    identifier: str
    files: tuple[str, ...]
    source: RepoSource
    max_files_to_scan: int = 50
    _lower: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def build(
        cls,
        identifier: str,
        paths: Iterable[str],
        source: RepoSource,
        max_files_to_scan: int = 50,
    ) -> RepoSnapshot:
        files = sorted({normalise(p) for p in paths} - {""})
        files = [p for p in files if not in_skipped_dir(p)]
        return cls(
            identifier=identifier,
            files=tuple(files),
            source=source,
            max_files_to_scan=max_files_to_scan,
            _lower={p.lower(): p for p in files},
        )

    def find(self, *paths: str) -> str | None:
        """Return the first of *paths* present (case-insensitive), with its real casing."""
        for candidate in paths:
            hit = self._lower.get(candidate.lower())
            if hit is not None:
                return hit
        return None

    def has(self, *paths: str) -> bool:
        return self.find(*paths) is not None

    def under(self, directory: str, suffixes: tuple[str, ...] = ()) -> list[str]:
        """Files below *directory* (case-insensitive), optionally filtered by suffix."""
        prefix = directory.lower().rstrip("/") + "/"
        return [
            real
            for lower, real in self._lower.items()
            if lower.startswith(prefix) and (not suffixes or lower.endswith(suffixes))
        ]

    def matching(self, predicate: Callable[[str], bool]) -> list[str]:
        return [p for p in self.files if predicate(p)]

    async def read(self, path: str) -> str:
        return await self.source.read_text(path)

    async def contains(self, path: str, *needles: str) -> bool:
        """Return *True* if *path* exists and its text contains any of *needles*."""
        real = self.find(path)
        if real is None:
            return False
        text = await self.read(real)
        return any(needle in text for needle in needles)


# ── Probe registry ──────────────────────────────────────────────────────────

ProbeFn = Callable[[RepoSnapshot], Awaitable["bool | Check"]]


@dataclass(frozen=True, slots=True)
class Probe:
    """A named signal producer."""

    check_id: str
    description: str
    run: ProbeFn


PROBES: dict[str, Probe] = {}


def probe(check_id: str, description: str) -> Callable[[ProbeFn], ProbeFn]:
    """Register the decorated coroutine as the producer of *check_id*."""

    def decorator(fn: ProbeFn) -> ProbeFn:
        PROBES[check_id] = Probe(check_id=check_id, description=description, run=fn)
        return fn

    return decorator


def _variants(stem: str, exts: tuple[str, ...] = ("", ".md", ".rst", ".txt")) -> list[str]:
    return [f"{stem}{ext}" for ext in exts]


def _in_dirs(names: list[str], dirs: tuple[str, ...] = ("", ".github/", "docs/")) -> list[str]:
    return [f"{d}{n}" for d in dirs for n in names]


# ── Tests ───────────────────────────────────────────────────────────────────


@probe("test_files", f"Test files present ({TEST_FILES_FOR_FULL_SCORE}+ for full score)")
async def _test_files(snap: RepoSnapshot) -> Check:
    count = len(snap.matching(is_test_file))
    return Check.from_number("test_files", count, maximum=TEST_FILES_FOR_FULL_SCORE)


@probe("test_config", "Test runner configured")
async def _test_config(snap: RepoSnapshot) -> bool:
    if snap.has(
        "pytest.ini", "conftest.py", "tests/conftest.py", "tox.ini", "noxfile.py",
        "jest.config.js", "jest.config.ts", "jest.config.cjs", "jest.config.mjs",
        "vitest.config.ts", "vitest.config.js", "vitest.config.mts",
        "karma.conf.js", ".mocharc.json", ".mocharc.yml", ".mocharc.js", "phpunit.xml",
        ".rspec",
    ):
        return True
    return (
        await snap.contains("pyproject.toml", "[tool.pytest")
        or await snap.contains("setup.cfg", "[tool:pytest]")
        or await snap.contains("package.json", '"jest"', '"vitest"', '"mocha"')
    )


@probe("ci_workflow", "Continuous integration configured")
async def _ci_workflow(snap: RepoSnapshot) -> bool:
    if snap.under(".github/workflows", (".yml", ".yaml")):
        return True
    return snap.has(
        ".gitlab-ci.yml", ".circleci/config.yml", "Jenkinsfile", "azure-pipelines.yml",
        ".travis.yml", "bitbucket-pipelines.yml", ".drone.yml", ".buildkite/pipeline.yml",
    )


@probe("coverage_config", "Coverage measurement configured")
async def _coverage_config(snap: RepoSnapshot) -> bool:
    if snap.has(
        ".coveragerc", "codecov.yml", ".codecov.yml", ".github/codecov.yml",
        ".nycrc", ".nycrc.json", ".nycrc.yml",
    ):
        return True
    return (
        await snap.contains("pyproject.toml", "[tool.coverage")
        or await snap.contains("setup.cfg", "[coverage:")
        or await snap.contains("tox.ini", "[coverage:", "--cov")
        or await snap.contains("package.json", "--coverage", '"c8"', '"nyc"')
    )


# ── Security ────────────────────────────────────────────────────────────────


@probe("security_policy", "Security policy (SECURITY.md)")
async def _security_policy(snap: RepoSnapshot) -> bool:
    return snap.has(*_in_dirs(_variants("SECURITY")))


@probe("dependency_updates", "Automated dependency updates (Dependabot / Renovate)")
async def _dependency_updates(snap: RepoSnapshot) -> bool:
    return snap.has(
        ".github/dependabot.yml", ".github/dependabot.yaml",
        "renovate.json", "renovate.json5", ".renovaterc", ".renovaterc.json",
        ".github/renovate.json", ".github/renovate.json5",
    )


@probe("gitignore", ".gitignore present")
async def _gitignore(snap: RepoSnapshot) -> bool:
    return snap.has(".gitignore")


@probe("no_committed_env_files", "No environment files with secrets committed")
async def _no_committed_env_files(snap: RepoSnapshot) -> bool:
    committed = snap.matching(lambda p: filename(p).lower() in SECRET_FILES)
    if committed:
        logger.warning("%s: committed environment files: %s", snap.identifier, committed)
    return not committed


@probe("no_hardcoded_secrets", "No hard-coded credentials in text files")
async def _no_hardcoded_secrets(snap: RepoSnapshot) -> bool:
    candidates = sorted(snap.matching(is_scannable), key=lambda p: (depth(p), p))
    candidates = candidates[: snap.max_files_to_scan]
    if not candidates:
        return True

    async def _read_one(path: str) -> tuple[str, str] | None:
        try:
            return path, await snap.read(path)
        except ReadinessError:
            logger.debug("Secret scan: could not read %s, skipping", path, exc_info=True)
            return None

    # Reads run concurrently; the source bounds how many are in flight.
    results = await asyncio.gather(*(_read_one(path) for path in candidates))
    texts = dict(r for r in results if r is not None)
    if not texts:
        raise SignalUnavailable(f"None of {len(candidates)} candidate files could be read.")

    result = scan_batch(texts)
    if not result.clean:
        logger.warning(
            "%s: %d suspected secret(s) in %d scanned file(s)",
            snap.identifier,
            len(result.findings),
            result.files_scanned,
        )
    return result.clean


# ── Documentation ───────────────────────────────────────────────────────────

_README_NAMES = _variants("README", ("", ".md", ".rst", ".txt", ".markdown", ".adoc"))


@probe("readme", "README present")
async def _readme(snap: RepoSnapshot) -> bool:
    return snap.has(*_README_NAMES)


@probe("readme_depth", f"README substance ({README_LINES_FOR_FULL_SCORE}+ non-blank lines)")
async def _readme_depth(snap: RepoSnapshot) -> Check:
    path = snap.find(*_README_NAMES)
    lines = 0
    if path is not None:
        text = await snap.read(path)
        lines = sum(1 for line in text.splitlines() if line.strip())
    return Check.from_number("readme_depth", lines, maximum=README_LINES_FOR_FULL_SCORE)


@probe("license", "License file present")
async def _license(snap: RepoSnapshot) -> bool:
    return snap.has(
        *_variants("LICENSE"), *_variants("LICENCE"), *_variants("COPYING"), "UNLICENSE",
    )


@probe("contributing", "Contribution guide present")
async def _contributing(snap: RepoSnapshot) -> bool:
    return snap.has(*_in_dirs(_variants("CONTRIBUTING")))


@probe("changelog", "Changelog maintained")
async def _changelog(snap: RepoSnapshot) -> bool:
    return snap.has(
        *_variants("CHANGELOG"), *_variants("HISTORY"), *_variants("CHANGES"), *_variants("NEWS"),
    )


@probe("docs_dir", "Documentation directory with content")
async def _docs_dir(snap: RepoSnapshot) -> bool:
    return any(snap.under(d) for d in ("docs", "doc", "documentation"))


# ── Developer experience ────────────────────────────────────────────────────


@probe("build_manifest", "Build / dependency manifest")
async def _build_manifest(snap: RepoSnapshot) -> bool:
    return snap.has(
        "pyproject.toml", "setup.py", "setup.cfg", "requirements.txt", "Pipfile",
        "package.json", "Cargo.toml", "go.mod", "Gemfile", "composer.json",
        "build.gradle", "build.gradle.kts", "pom.xml", "CMakeLists.txt", "mix.exs",
    )


@probe("task_runner", "Task runner (Makefile, justfile, nox, …)")
async def _task_runner(snap: RepoSnapshot) -> bool:
    if snap.has(
        "Makefile", "GNUmakefile", "justfile", ".justfile", "Taskfile.yml", "Taskfile.yaml",
        "noxfile.py", "tox.ini", "Rakefile", "magefile.go",
    ):
        return True
    return await snap.contains("package.json", '"scripts"')


@probe("editor_config", ".editorconfig present")
async def _editor_config(snap: RepoSnapshot) -> bool:
    return snap.has(".editorconfig")


@probe("pre_commit", "Pre-commit hooks configured")
async def _pre_commit(snap: RepoSnapshot) -> bool:
    return snap.has(
        ".pre-commit-config.yaml", ".pre-commit-config.yml", "lefthook.yml", ".lefthook.yml",
    ) or bool(snap.under(".husky"))


@probe("lint_config", "Linter / formatter configured")
async def _lint_config(snap: RepoSnapshot) -> bool:
    if snap.has(
        "ruff.toml", ".ruff.toml", ".flake8", ".pylintrc", "pylintrc", "mypy.ini", ".mypy.ini",
        ".eslintrc", ".eslintrc.js", ".eslintrc.cjs", ".eslintrc.json", ".eslintrc.yml",
        "eslint.config.js", "eslint.config.mjs", "eslint.config.cjs",
        ".prettierrc", ".prettierrc.json", ".prettierrc.yml", "prettier.config.js",
        "biome.json", ".golangci.yml", ".golangci.yaml", "rustfmt.toml", ".rustfmt.toml",
        ".rubocop.yml", ".stylelintrc",
    ):
        return True
    return (
        await snap.contains("pyproject.toml", "[tool.ruff", "[tool.black", "[tool.mypy", "[tool.pylint")
        or await snap.contains("setup.cfg", "[flake8]", "[mypy]")
    )


@probe("env_template", "Environment template (.env.example)")
async def _env_template(snap: RepoSnapshot) -> bool:
    return snap.has(".env.example", ".env.sample", ".env.template", ".env.dist", "example.env")


@probe("container_setup", "Reproducible environment (devcontainer, Docker, Nix)")
async def _container_setup(snap: RepoSnapshot) -> bool:
    return snap.has(
        ".devcontainer/devcontainer.json", ".devcontainer.json", "Dockerfile", "Containerfile",
        "docker-compose.yml", "docker-compose.yaml", "compose.yml", "compose.yaml",
        ".gitpod.yml", "flake.nix", "shell.nix",
    )


# ── Collector ───────────────────────────────────────────────────────────────


class SignalCollector:
    """Runs the configured probes against a repository source.

    Parameters
    ----------
    config:
        Validated scoring configuration; its check ids select the probes.
    probes:
        Probe registry, defaults to the module-level :data:`PROBES`.
    probe_timeout:
        Seconds a single probe may take before it is recorded as unavailable.
    max_files_to_scan:
        Upper bound on files read by content-scanning probes.
    """

    def __init__(
        self,
        config: ScoringConfig,
        probes: Mapping[str, Probe] | None = None,
        *,
        probe_timeout: float = 10.0,
        max_files_to_scan: int = 50,
    ) -> None:
        self._config = config
        self._probes = dict(PROBES if probes is None else probes)
        self._timeout = probe_timeout
        self._max_files_to_scan = max_files_to_scan

        missing = [c for c in config.check_ids if c not in self._probes]
        if missing:
            raise ConfigurationError(f"No probe registered for check(s): {', '.join(missing)}")

    async def snapshot(self, source: RepoSource) -> RepoSnapshot:
        """List the repository once; every probe shares the result."""
        paths = await source.list_files()
        snap = RepoSnapshot.build(
            source.identifier, paths, source, max_files_to_scan=self._max_files_to_scan
        )
        logger.info("Collected %d file path(s) from %s", len(snap.files), snap.identifier)
        return snap

    async def collect(self, source: RepoSource) -> dict[str, tuple[Check, ...]]:
        """Return ``{category_id: checks}`` for every configured category."""
        snap = await self.snapshot(source)
        groups = await asyncio.gather(
            *(self._collect_category(spec, snap) for spec in self._config.categories)
        )
        return {spec.id: checks for spec, checks in zip(self._config.categories, groups)}

    async def _collect_category(
        self, spec: CategorySpec, snap: RepoSnapshot
    ) -> tuple[Check, ...]:
        checks = await asyncio.gather(
            *(self._run_probe(self._probes[check_id], snap) for check_id in spec.checks)
        )
        return tuple(checks)

    async def _run_probe(self, probe_: Probe, snap: RepoSnapshot) -> Check:
        try:
            result = await asyncio.wait_for(probe_.run(snap), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.warning("Probe %s timed out after %.1fs", probe_.check_id, self._timeout)
            return Check.unavailable(
                probe_.check_id, f"Timed out after {self._timeout:g}s", probe_.description
            )
        except Exception as exc:
            logger.warning("Probe %s failed: %s", probe_.check_id, exc, exc_info=True)
            return Check.unavailable(probe_.check_id, str(exc) or type(exc).__name__, probe_.description)

        if isinstance(result, Check):
            return Check(
                id=probe_.check_id,
                value=result.value,
                status=result.status,
                description=result.description or probe_.description,
                error=result.error,
            )
        return Check.from_bool(probe_.check_id, bool(result), probe_.description)
