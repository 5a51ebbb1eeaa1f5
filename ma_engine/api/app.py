"""FastAPI application factory."""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ma_engine import __version__
from ma_engine.models import AcquisitionCriteria, DEFAULT_CRITERIA
from ma_engine.service import MaEngine
from .routes import router


def create_app(engine: MaEngine, criteria: Optional[AcquisitionCriteria] = None) -> FastAPI:
    """Create the API around an engine context."""
    app = FastAPI(
        title="VAR Acquisition Engine",
        description="Score, rank, explain and simulate VAR acquisition targets",
        version=__version__,
    )

    # Criteria are mutable per app instance, in memory
    app.state.engine = engine
    app.state.criteria = criteria or DEFAULT_CRITERIA

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    # Include API routes
    app.include_router(router, prefix="/api")
    return app
