"""
Telecom Formula API - FastAPI Backend

This is the main entry point for the stateless formula service that handles:
- Bit error rate for BPSK/QPSK/M-PSK
- Erlang-B blocking probability and channel dimensioning
- Link budget, OFDM throughput and communication-system rate chains
- Cellular coverage, traffic and cluster sizing
"""

from dotenv import load_dotenv

# Load environment variables FIRST - before reading settings
load_dotenv()

from fastapi import FastAPI
from typing import Dict, Optional
import logging

from config import Settings, get_settings
from api.formulas import router as formulas_router
from middleware.cors import CORSConfig, setup_cors
from middleware.error_handlers import setup_error_handlers

# Configure logging
logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)

LIVENESS_MESSAGE = "Success! The Render server is online and responding."


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment-derived ones.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Telecom Formula API",
        description="Closed-form telecommunications engineering formulas with plain-language explanations",
        version=settings.version,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    setup_cors(app, CORSConfig.from_settings(settings))
    setup_error_handlers(app)

    app.include_router(formulas_router)

    @app.get("/", response_model=Dict[str, str])
    async def root() -> Dict[str, str]:
        """
        Root endpoint with API information.

        Returns:
            Dict containing API name, version, and documentation links
        """
        return {
            "service": "Telecom Formula API",
            "version": settings.version,
            "docs": "/docs",
            "health": "/health",
            "status": "running",
        }

    @app.get("/health", response_model=Dict[str, str])
    async def health_check() -> Dict[str, str]:
        """
        Health check endpoint for monitoring and load balancers.

        Returns:
            Dict with health status and service information
        """
        return {
            "status": "healthy",
            "service": settings.service_name,
            "version": settings.version,
        }

    @app.get("/api/test", response_model=Dict[str, str])
    async def liveness() -> Dict[str, str]:
        """Static liveness payload for the frontend's connectivity check."""
        return {"message": LIVENESS_MESSAGE}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info(f"Server is listening on port {settings.port}")

    # Run with: python main.py
    # Or use: uvicorn main:app --port 3001
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
