"""Main FastAPI application entry point."""

from fastapi import FastAPI

from handsim import __version__
from handsim.api import odds, sim
from handsim.core.logging_config import setup_logging
from handsim.core.settings import get_sim_settings
from handsim.middleware.logging_middleware import RequestLoggingMiddleware


def create_app() -> FastAPI:
    """Build the API application and configure logging from settings."""
    settings = get_sim_settings()
    setup_logging(log_level=settings.log_level, enable_file=settings.log_to_file)

    app = FastAPI(
        title="Arkham Hand Simulator API",
        description="Opening hand, draw odds and Monte Carlo simulation for Arkham Horror LCG decks",
        version=__version__,
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(sim.router, prefix="/sim", tags=["simulation"])
    app.include_router(odds.router, prefix="/odds", tags=["odds"])

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Arkham Hand Simulator API",
            "version": __version__,
            "docs": "/docs",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
