"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, visualizer.api, visualizer.observability, visualizer.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from visualizer.api import api_router
from visualizer.api.deps import get_service_cache
from visualizer.api.routers import editor_stream_router
from visualizer.configs import get_settings
from visualizer.observability import configure_logging, get_logger
from visualizer.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    Configures the diagram engine once and pre-warms shared services.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    cache = get_service_cache()
    try:
        engine = cache.engine
        _ = cache.renderer
        _ = cache.export_encoder
        _ = cache.session_registry
        if not engine.is_available():
            logger.warning(
                "Mermaid CLI not found; renders will fail until it is installed",
                extra={"mmdc_path": settings.renderer.mmdc_path},
            )
        logger.info("Application startup complete: services initialized")
    except Exception as e:
        logger.exception(
            "Failed to initialize application resources",
            extra={"error": str(e)},
        )
        raise

    yield

    # Shutdown
    cache.clear()
    logger.info("Application shutdown: editor sessions closed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()
    app = FastAPI(
        title="Mermaid Visualizer API",
        description="Live Mermaid rendering with AI-assisted syntax error detection",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    # Register API routes
    app.include_router(api_router, prefix="/api/v1")

    # WebSocket routes live outside the versioned prefix
    app.include_router(editor_stream_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "visualizer.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
