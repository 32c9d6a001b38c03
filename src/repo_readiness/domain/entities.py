"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

_ZERO = Decimal(0)
_HUNDRED = Decimal(100)


def to_decimal(value: int | float | str | Decimal) -> Decimal:
    """Convert *value* to :class:`Decimal` without binary-float artefacts.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather than
    its exact binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Booleans must go through Check.from_bool().")
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def clamp_score(value: Decimal) -> Decimal:
    """Clamp *value* into the closed interval [0, 100]."""
    return min(max(value, _ZERO), _HUNDRED)


class CheckStatus(str, Enum):
    """Outcome of a single probe."""

    PASSED = "passed"
    FAILED = "failed"
    SCORED = "scored"
    UNAVAILABLE = "unavailable"


class Phase(str, Enum):
    """Named readiness tiers, lowest to highest."""

    INCEPTION = "INCEPTION"
    POC = "POC"
    MVP = "MVP"
    BETA = "BETA"
    SCALE = "SCALE"


@dataclass(frozen=True, slots=True)
class Check:
    """One atomic repository signal, normalised to the 0-100 range.

    ``value`` is ``None`` only when the signal could not be collected, in which
    case ``status`` is :attr:`CheckStatus.UNAVAILABLE` and ``error`` says why.
    Use the ``from_*`` constructors rather than building raw instances so the
    core never sees un-normalised input.
    """

    id: str
    value: Decimal | None
    status: CheckStatus
    description: str = ""
    error: str | None = None

    @classmethod
    def from_bool(cls, check_id: str, ok: bool, description: str = "") -> Check:
        """``True`` → 100 (passed), ``False`` → 0 (failed)."""
        return cls(
            id=check_id,
            value=_HUNDRED if ok else _ZERO,
            status=CheckStatus.PASSED if ok else CheckStatus.FAILED,
            description=description,
        )

    @classmethod
    def from_number(
        cls,
        check_id: str,
        raw: int | float | Decimal,
        *,
        minimum: int | float | Decimal = 0,
        maximum: int | float | Decimal = 100,
        description: str = "",
    ) -> Check:
        """Rescale *raw* from ``[minimum, maximum]`` onto [0, 100], clamping outliers."""
        lo = to_decimal(minimum)
        hi = to_decimal(maximum)
        if hi <= lo:
            raise ValueError(f"Invalid range for check '{check_id}': [{lo}, {hi}]")
        scaled = (to_decimal(raw) - lo) * _HUNDRED / (hi - lo)
        return cls(
            id=check_id,
            value=clamp_score(scaled),
            status=CheckStatus.SCORED,
            description=description,
        )

    @classmethod
    def unavailable(cls, check_id: str, error: str, description: str = "") -> Check:
        """A signal that could not be collected (probe error, timeout, missing)."""
        return cls(
            id=check_id,
            value=None,
            status=CheckStatus.UNAVAILABLE,
            description=description,
            error=error,
        )

    @property
    def available(self) -> bool:
        return self.value is not None


@dataclass(frozen=True, slots=True)
class PhaseThreshold:
    """A ``(minimum_score, phase)`` row of the phase table."""

    minimum: Decimal
    phase: Phase


@dataclass(frozen=True, slots=True)
class CategoryScore:
    """A category's derived score and its weighted contribution to the total."""

    id: str
    title: str
    weight: Decimal
    score: Decimal
    weighted_score: Decimal
    insufficient_data: bool
    checks: tuple[Check, ...] = ()
    unavailable_checks: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Report:
    """The terminal, immutable artefact of one scoring run."""

    repository: str
    timestamp: str
    categories: tuple[CategoryScore, ...]
    total_score: Decimal
    phase_readiness: Phase
    thresholds: tuple[PhaseThreshold, ...]
    precision: int = 0
    weighted_precision: int = 1

    @property
    def by_id(self) -> dict[str, CategoryScore]:
        """Category id → :class:`CategoryScore`, in configuration order."""
        return {category.id: category for category in self.categories}

    @property
    def insufficient_data(self) -> bool:
        """``True`` when any category lacked at least one signal."""
        return any(category.insufficient_data for category in self.categories)
