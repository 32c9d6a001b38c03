"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class ReadinessRequest(BaseModel):
    """Request body for ``POST /readiness``."""

    repository: str

    @field_validator("repository")
    @classmethod
    def _must_be_github(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "repository must not be empty."
            raise ValueError(msg)
        if "github.com" not in stripped.lower():
            msg = (
                f"Invalid repository: '{stripped}'. "
                "Only public GitHub repository URLs are supported."
            )
            raise ValueError(msg)
        return stripped


class CheckResponse(BaseModel):
    id: str
    value: int | float | None
    status: str
    description: str
    error: str | None = None


class CategoryResponse(BaseModel):
    title: str
    score: int | float
    weight: int | float
    weighted_score: int | float
    insufficient_data: bool
    unavailable_checks: list[str]
    checks: list[CheckResponse]


class PhaseThresholdResponse(BaseModel):
    phase: str
    minimum: int | float


class ReadinessResponse(BaseModel):
    """Successful response from ``POST /readiness`` — the structured report."""

    repository: str
    timestamp: str
    total_score: int | float
    phase_readiness: str
    insufficient_data: bool
    categories: dict[str, CategoryResponse]
    phase_thresholds: list[PhaseThresholdResponse]


class CategoryConfigResponse(BaseModel):
    title: str
    weight: int | float
    checks: list[str]


class ScoringConfigResponse(BaseModel):
    """Response from ``GET /readiness/config``."""

    precision: int
    weighted_precision: int
    categories: dict[str, CategoryConfigResponse]
    phase_thresholds: list[PhaseThresholdResponse]


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
