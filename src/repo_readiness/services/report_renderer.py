"""Report rendering — structured and human-readable views of one :class:`Report`.

Both views read the finished report only; nothing is recomputed here.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from repo_readiness.domain.entities import CategoryScore, Check, Report

_TITLE = "Repository Readiness Report"


def to_number(value: Decimal | None, precision: int) -> int | float | None:
    """Integers at precision 0, floats otherwise; ``None`` passes through."""
    if value is None:
        return None
    if precision == 0 or value == value.to_integral_value():
        return int(value)
    return float(value)


def _rounded(value: Decimal | None, places: int) -> Decimal | None:
    if value is None:
        return None
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _check_dict(check: Check) -> dict[str, Any]:
    return {
        "id": check.id,
        # Check values keep full precision; round for display only.
        "value": to_number(_rounded(check.value, 2), 2),
        "status": check.status.value,
        "description": check.description,
        "error": check.error,
    }


def _category_dict(
    category: CategoryScore, precision: int, weighted_precision: int
) -> dict[str, Any]:
    return {
        "title": category.title,
        "score": to_number(category.score, precision),
        "weight": to_number(category.weight, 1),
        "weighted_score": to_number(category.weighted_score, weighted_precision),
        "insufficient_data": category.insufficient_data,
        "unavailable_checks": list(category.unavailable_checks),
        "checks": [_check_dict(c) for c in category.checks],
    }


def to_structured(report: Report) -> dict[str, Any]:
    """Return the machine-readable form (JSON-ready, key order is stable)."""
    return {
        "repository": report.repository,
        "timestamp": report.timestamp,
        "total_score": to_number(report.total_score, report.weighted_precision),
        "phase_readiness": report.phase_readiness.value,
        "insufficient_data": report.insufficient_data,
        "categories": {
            category.id: _category_dict(category, report.precision, report.weighted_precision)
            for category in report.categories
        },
        "phase_thresholds": [
            {"phase": row.phase.value, "minimum": to_number(row.minimum, 1)}
            for row in report.thresholds
        ],
    }


def _fmt(value: Decimal | None, precision: int) -> str:
    number = to_number(value, precision)
    return "n/a" if number is None else str(number)


def render_summary(report: Report, verbose: bool = False) -> str:
    """Return the Markdown summary; *verbose* adds per-check detail."""
    p, wp = report.precision, report.weighted_precision
    lines: list[str] = [
        f"# {_TITLE}",
        "",
        f"- **Repository:** {report.repository}",
        f"- **Generated:** {report.timestamp}",
        f"- **Total score:** {_fmt(report.total_score, wp)}/100",
        f"- **Phase readiness:** {report.phase_readiness.value}",
        "",
        "## Categories",
        "",
        "| Category | Score | Weight | Weighted |",
        "|---|---:|---:|---:|",
    ]
    for category in report.categories:
        flag = " ⚠" if category.insufficient_data else ""
        lines.append(
            f"| {category.title}{flag} | {_fmt(category.score, p)} "
            f"| {_fmt(category.weight, 1)} | {_fmt(category.weighted_score, wp)} |"
        )

    flagged = [c for c in report.categories if c.insufficient_data]
    if flagged:
        lines += ["", "## Insufficient data", ""]
        for category in flagged:
            lines.append(
                f"- **{category.title}**: no signal for "
                f"{', '.join(category.unavailable_checks)} (counted as 0)"
            )

    if verbose:
        lines += ["", "## Score Details"]
        for category in report.categories:
            lines += ["", f"### {category.title}", ""]
            for check in category.checks:
                value = _fmt(_rounded(check.value, 0), 0)
                detail = f" ({check.error})" if check.error else ""
                lines.append(
                    f"- `{check.id}` {check.status.value} {value}: {check.description}{detail}"
                )

    lines += ["", "## Phase thresholds", ""]
    lines.extend(
        f"- {row.phase.value}: ≥ {_fmt(row.minimum, 1)}" for row in report.thresholds
    )
    return "\n".join(lines) + "\n"
