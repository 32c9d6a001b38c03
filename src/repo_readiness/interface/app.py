"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from repo_readiness.interface.dependencies import shutdown, startup
from repo_readiness.interface.error_handlers import register_error_handlers
from repo_readiness.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="Repository Readiness Score",
        version="1.0.0",
        description=(
            "Inspects a public GitHub repository for tests, security "
            "configuration, documentation and developer tooling, and returns "
            "a weighted 0-100 readiness score with a phase label."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
