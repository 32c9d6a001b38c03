"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from repo_readiness.domain.entities import Phase, PhaseThreshold, to_decimal
from repo_readiness.domain.exceptions import ConfigurationError, InvalidGitHubUrlError

_GITHUB_URL_RE = re.compile(
    r"^https?://github\.com/(?P<owner>[A-Za-z0-9\-_.]+)/(?P<repo>[A-Za-z0-9\-_.]+?)(?:\.git)?/?$"
)

_REQUIRED_WEIGHT_TOTAL = Decimal(100)
_MAX_PRECISION = 4


@dataclass(frozen=True, slots=True)
class GitHubUrl:
    """Validated GitHub repository URL.

    Extracts *owner* and *repo* from a URL like
    ``https://github.com/psf/requests``.  Rejects anything that does not match
    the expected pattern.
    """

    owner: str
    repo: str
    raw: str

    @classmethod
    def from_string(cls, url: str) -> GitHubUrl:
        """Parse and validate a raw URL string."""
        url = url.strip()
        match = _GITHUB_URL_RE.match(url)
        if not match:
            raise InvalidGitHubUrlError(
                f"Invalid GitHub URL: '{url}'. "
                "Expected format: https://github.com/<owner>/<repo>"
            )
        return cls(owner=match["owner"], repo=match["repo"], raw=url)

    @staticmethod
    def looks_like(value: str) -> bool:
        """Cheap pre-check used to route a repository argument to the right source."""
        return value.strip().lower().startswith(("http://github.com/", "https://github.com/"))

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class CategorySpec:
    """Fixed configuration for one category: its weight and the checks it is made of."""

    id: str
    weight: Decimal
    checks: tuple[str, ...]
    title: str = ""

    @classmethod
    def create(
        cls,
        category_id: str,
        weight: int | float | Decimal,
        checks: Iterable[str],
        title: str = "",
    ) -> CategorySpec:
        return cls(
            id=category_id,
            weight=to_decimal(weight),
            checks=tuple(checks),
            title=title or category_id.replace("_", " ").title(),
        )


@dataclass(frozen=True, slots=True)
class ScoringConfig:
    """Immutable scoring configuration, validated once on construction.

    Any violation raises :class:`ConfigurationError` so a misconfigured run
    aborts before a single score is computed.

    Parameters
    ----------
    categories:
        Category specs in report order.  Weights must sum to exactly 100.
    thresholds:
        Phase table ordered from highest minimum to lowest; the last row must
        start at 0 so every score in [0, 100] maps to exactly one phase.
    precision:
        Decimal places kept for category scores (0 = integers).
    weighted_precision:
        Decimal places kept for weighted scores and the total.  One place
        keeps ``weighted_score`` within 0.1 of ``score * weight / 100``.
    """

    categories: tuple[CategorySpec, ...]
    thresholds: tuple[PhaseThreshold, ...]
    precision: int = 0
    weighted_precision: int = 1

    def __post_init__(self) -> None:
        self._validate_precision("Score precision", self.precision)
        self._validate_precision("Weighted score precision", self.weighted_precision)
        self._validate_categories()
        self._validate_thresholds()

    # ── Validation ──────────────────────────────────────────────────────

    @staticmethod
    def _validate_precision(label: str, places: int) -> None:
        if not 0 <= places <= _MAX_PRECISION:
            raise ConfigurationError(
                f"{label} must be between 0 and {_MAX_PRECISION}, got {places}."
            )

    def _validate_categories(self) -> None:
        if not self.categories:
            raise ConfigurationError("At least one category must be configured.")

        seen: set[str] = set()
        for spec in self.categories:
            if spec.id in seen:
                raise ConfigurationError(f"Duplicate category '{spec.id}'.")
            seen.add(spec.id)
            if spec.weight < 0:
                raise ConfigurationError(
                    f"Category '{spec.id}' has a negative weight ({spec.weight})."
                )
            if not spec.checks:
                raise ConfigurationError(f"Category '{spec.id}' defines no checks.")
            if len(set(spec.checks)) != len(spec.checks):
                raise ConfigurationError(f"Category '{spec.id}' lists a check twice.")

        total = sum((spec.weight for spec in self.categories), Decimal(0))
        if total != _REQUIRED_WEIGHT_TOTAL:
            raise ConfigurationError(
                f"Category weights must sum to 100, got {total} "
                f"({', '.join(f'{s.id}={s.weight}' for s in self.categories)})."
            )

    def _validate_thresholds(self) -> None:
        if not self.thresholds:
            raise ConfigurationError("The phase table is empty.")

        phases = [row.phase for row in self.thresholds]
        if len(set(phases)) != len(phases):
            raise ConfigurationError("The phase table lists a phase twice.")

        minimums = [row.minimum for row in self.thresholds]
        for minimum in minimums:
            if not 0 <= minimum <= 100:
                raise ConfigurationError(f"Phase minimum {minimum} is outside [0, 100].")
        if any(a <= b for a, b in zip(minimums, minimums[1:])):
            raise ConfigurationError(
                "Phase thresholds must be ordered by strictly descending minimum."
            )
        if minimums[-1] != 0:
            raise ConfigurationError(
                f"The lowest phase must start at 0 to cover every score, got {minimums[-1]}."
            )

    # ── Helpers ─────────────────────────────────────────────────────────

    @property
    def quantum(self) -> Decimal:
        return Decimal(1).scaleb(-self.precision)

    def quantize(self, value: Decimal) -> Decimal:
        """Round half-up to the configured precision (platform independent)."""
        return value.quantize(self.quantum, rounding=ROUND_HALF_UP)

    def quantize_weighted(self, value: Decimal) -> Decimal:
        """Round half-up to the weighted-score precision."""
        quantum = Decimal(1).scaleb(-self.weighted_precision)
        return value.quantize(quantum, rounding=ROUND_HALF_UP)

    @property
    def weights(self) -> dict[str, Decimal]:
        return {spec.id: spec.weight for spec in self.categories}

    @property
    def check_ids(self) -> tuple[str, ...]:
        """Every configured check id across all categories, in order."""
        return tuple(check for spec in self.categories for check in spec.checks)


def build_thresholds(rows: Iterable[tuple[int | float | Decimal, Phase]]) -> tuple[PhaseThreshold, ...]:
    """Turn ``(minimum, phase)`` pairs into :class:`PhaseThreshold` rows."""
    return tuple(PhaseThreshold(minimum=to_decimal(m), phase=p) for m, p in rows)
