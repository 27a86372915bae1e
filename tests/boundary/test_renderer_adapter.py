"""
Test suite for RendererAdapter.

Tests normalization of engine outcomes into RenderResult, including the
empty-input short circuit and the fallback error message.

System role: Verification of renderer side of the validation pipeline
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from visualizer.boundary.renderer import RendererAdapter
from visualizer.boundary.renderer.renderer_adapter import (
    DIAGRAM_ID_PREFIX,
    FALLBACK_RENDER_ERROR,
    new_diagram_id,
)
from visualizer.core.exceptions import DiagramSyntaxError, RendererUnavailableError
from visualizer.models.diagram import RenderStatus


@pytest.fixture
def mock_engine(simple_svg: str) -> MagicMock:
    """Provide mock diagram engine that renders successfully."""
    engine = MagicMock()
    engine.parse = AsyncMock(return_value=None)
    engine.render = AsyncMock(return_value=simple_svg)
    return engine


@pytest.fixture
def adapter(mock_engine: MagicMock) -> RendererAdapter:
    return RendererAdapter(mock_engine)


class TestNewDiagramId:
    """Test suite for render target ids."""

    def test_ids_are_prefixed_and_distinct(self) -> None:
        first, second = new_diagram_id(), new_diagram_id()

        assert first.startswith(f"{DIAGRAM_ID_PREFIX}-")
        assert first != second


class TestRendererAdapterCheck:
    """Test suite for RendererAdapter.check."""

    @pytest.mark.asyncio
    async def test_success_returns_markup(
        self, adapter: RendererAdapter, mock_engine: MagicMock, simple_svg: str
    ) -> None:
        result = await adapter.check("graph TD\n  A-->B")

        assert result.status is RenderStatus.OK
        assert result.markup == simple_svg
        assert result.error_message is None
        mock_engine.parse.assert_awaited_once_with("graph TD\n  A-->B")
        diagram_id, text = mock_engine.render.await_args.args
        assert diagram_id.startswith(DIAGRAM_ID_PREFIX)
        assert text == "graph TD\n  A-->B"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
    async def test_blank_text_is_empty_without_engine_call(
        self, adapter: RendererAdapter, mock_engine: MagicMock, text: str
    ) -> None:
        result = await adapter.check(text)

        assert result.status is RenderStatus.EMPTY
        assert result.markup == ""
        assert result.failed is False
        mock_engine.parse.assert_not_called()
        mock_engine.render.assert_not_called()

    @pytest.mark.asyncio
    async def test_parse_error_message_is_returned(
        self, adapter: RendererAdapter, mock_engine: MagicMock
    ) -> None:
        mock_engine.parse.side_effect = DiagramSyntaxError("Parse error on line 2", line=2)

        result = await adapter.check("graph TD\n  A-->>")

        assert result.status is RenderStatus.ERROR
        assert result.error_message == "Parse error on line 2"
        assert result.markup == ""
        mock_engine.render.assert_not_called()

    @pytest.mark.asyncio
    async def test_render_error_message_is_returned(
        self, adapter: RendererAdapter, mock_engine: MagicMock
    ) -> None:
        mock_engine.render.side_effect = RendererUnavailableError("Mermaid CLI not found: mmdc")

        result = await adapter.check("graph TD")

        assert result.failed is True
        assert result.error_message == "Mermaid CLI not found: mmdc"

    @pytest.mark.asyncio
    async def test_error_without_message_uses_fallback(
        self, adapter: RendererAdapter, mock_engine: MagicMock
    ) -> None:
        mock_engine.render.side_effect = DiagramSyntaxError("")

        result = await adapter.check("graph TD")

        assert result.error_message == FALLBACK_RENDER_ERROR

    @pytest.mark.asyncio
    async def test_plain_exception_uses_its_text(
        self, adapter: RendererAdapter, mock_engine: MagicMock
    ) -> None:
        mock_engine.render.side_effect = ValueError("boom")

        result = await adapter.check("graph TD")

        assert result.error_message == "boom"

    @pytest.mark.asyncio
    async def test_plain_exception_without_text_uses_fallback(
        self, adapter: RendererAdapter, mock_engine: MagicMock
    ) -> None:
        mock_engine.render.side_effect = ValueError()

        result = await adapter.check("graph TD")

        assert result.error_message == FALLBACK_RENDER_ERROR
