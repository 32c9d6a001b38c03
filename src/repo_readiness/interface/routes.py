"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends

from repo_readiness.domain.value_objects import ScoringConfig
from repo_readiness.infrastructure.config import Settings
from repo_readiness.infrastructure.source_factory import github_source
from repo_readiness.interface.dependencies import (
    get_http_client,
    get_scoring_config,
    get_settings_dependency,
    get_use_case,
)
from repo_readiness.interface.schemas import (
    CategoryConfigResponse,
    PhaseThresholdResponse,
    ReadinessRequest,
    ReadinessResponse,
    ScoringConfigResponse,
)
from repo_readiness.services.compute_readiness import ComputeReadinessUseCase
from repo_readiness.services.report_renderer import to_number, to_structured

router = APIRouter()


@router.post(
    "/readiness",
    response_model=ReadinessResponse,
    responses={
        422: {"description": "Invalid GitHub URL or empty repository"},
        403: {"description": "Repository is private"},
        404: {"description": "Repository not found"},
        429: {"description": "GitHub API rate limit exceeded"},
        502: {"description": "GitHub content could not be fetched"},
    },
)
async def compute_readiness(
    body: ReadinessRequest,
    use_case: ComputeReadinessUseCase = Depends(get_use_case),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings_dependency),
) -> ReadinessResponse:
    """Score the readiness of a public GitHub repository."""
    source = github_source(client, body.repository, settings)
    report = await use_case.execute(source)
    return ReadinessResponse.model_validate(to_structured(report))


@router.get("/readiness/config", response_model=ScoringConfigResponse)
async def scoring_config(
    config: ScoringConfig = Depends(get_scoring_config),
) -> ScoringConfigResponse:
    """Return the fixed category weights, check sets and phase table."""
    return ScoringConfigResponse(
        precision=config.precision,
        weighted_precision=config.weighted_precision,
        categories={
            spec.id: CategoryConfigResponse(
                title=spec.title,
                weight=to_number(spec.weight, 1),
                checks=list(spec.checks),
            )
            for spec in config.categories
        },
        phase_thresholds=[
            PhaseThresholdResponse(phase=row.phase.value, minimum=to_number(row.minimum, 1))
            for row in config.thresholds
        ],
    )
