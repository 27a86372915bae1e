"""Mermaid error detection agent (hosted Gemini model)."""

from visualizer.core.agentic_system.error_detection_agent.mermaid_error_agent import (
    MermaidErrorAgent,
)
from visualizer.core.agentic_system.error_detection_agent.mermaid_error_schema import (
    MermaidErrorReport,
)

__all__ = ["MermaidErrorAgent", "MermaidErrorReport"]
