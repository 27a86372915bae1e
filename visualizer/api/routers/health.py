"""
Health check API endpoints.

Routes: GET /health, GET /health/renderer

Dependencies: visualizer.boundary.renderer
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from visualizer.api.deps import get_engine
from visualizer.boundary.renderer import MermaidCliEngine


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/renderer", response_model=HealthResponse)
async def health_check_renderer(
    engine: MermaidCliEngine = Depends(get_engine),
) -> HealthResponse:
    """Diagram engine health check."""
    if engine.is_available():
        return HealthResponse(status="healthy", message="Mermaid CLI available")
    return HealthResponse(status="degraded", message="Mermaid CLI not found")
