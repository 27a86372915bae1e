"""
Renderer adapter.

Wraps the diagram engine's parse/render calls and normalizes every failure
into a single error message. Never raises to the caller.

Dependencies: visualizer.boundary.renderer.engine, visualizer.models.diagram
System role: Renderer side of the dual-validation pipeline
"""

import logging
import uuid

from visualizer.boundary.renderer.engine import DiagramEngine
from visualizer.models.diagram import RenderResult

logger = logging.getLogger(__name__)

FALLBACK_RENDER_ERROR = "Invalid syntax from renderer."
DIAGRAM_ID_PREFIX = "mermaid-preview"


def new_diagram_id() -> str:
    """Distinct render target id, so concurrent renders never collide."""
    return f"{DIAGRAM_ID_PREFIX}-{uuid.uuid4().hex}"


class RendererAdapter:
    """Turn engine output into a RenderResult."""

    def __init__(self, engine: DiagramEngine) -> None:
        """
        Initialize renderer adapter.

        Args:
            engine: Diagram engine (parse / render)
        """
        self._engine = engine

    async def check(self, text: str) -> RenderResult:
        """
        Parse and render diagram text.

        Args:
            text: Diagram source

        Returns:
            RenderResult: `empty` for blank text (engine not invoked), `ok` with
            the SVG markup, or `error` with the engine's message
        """
        if not text.strip():
            return RenderResult.empty()

        diagram_id = new_diagram_id()
        try:
            await self._engine.parse(text)
            markup = await self._engine.render(diagram_id, text)
        except Exception as e:
            message = getattr(e, "message", str(e)) or FALLBACK_RENDER_ERROR
            logger.info(
                f"{__name__}:check - render failed id={diagram_id}, "
                f"{type(e).__name__}: {message[:200]}"
            )
            return RenderResult.error(message)

        return RenderResult.ok(markup)
