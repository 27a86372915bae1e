"""Diagram renderer boundary: Mermaid engine and its adapter."""

from visualizer.boundary.renderer.engine import (
    DiagramEngine,
    EngineConfig,
    MermaidCliEngine,
    configure_engine,
    get_engine_config,
)
from visualizer.boundary.renderer.renderer_adapter import RendererAdapter

__all__ = [
    "DiagramEngine",
    "EngineConfig",
    "MermaidCliEngine",
    "RendererAdapter",
    "configure_engine",
    "get_engine_config",
]
