"""
Standard FastAPI application setup utilities.
"""
from typing import Callable, Dict, Optional
from fastapi import FastAPI
from hcpfrontend.common.schemas.common import HealthCheckResponse


def add_standard_health_routes(
    app: FastAPI,
    app_name: str,
    app_version: str,
    region: Optional[str] = None,
    components: Optional[Callable[[], Dict[str, str]]] = None,
):
    """
    Add standard / and /health routes to the FastAPI application.
    """

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "service": app_name,
            "version": app_version,
            "region": region,
            "health": "/health",
        }

    @app.get("/health", tags=["Health"], response_model=HealthCheckResponse)
    async def health_check():
        return HealthCheckResponse(
            status="healthy",
            version=app_version,
            service=app_name,
            region=region,
            components=components() if components else {},
        )
