"""
Test suite for EditorSession and EditorSessionRegistry.

Tests the debounced edit pipeline end to end with stub checkers, export of
the displayed diagram and session bookkeeping.

System role: Verification of per-client pipeline assembly
"""

import asyncio
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from visualizer.application.services import EditorSession, EditorSessionRegistry
from visualizer.application.services.editor_session import EXAMPLE_CODE
from visualizer.core.exceptions import EncodeError, SessionNotFoundError
from visualizer.models.diagram import AiVerdict, DisplayState, RenderResult

DEBOUNCE_MS = 20


@pytest.fixture
def mock_encoder() -> MagicMock:
    """Provide mock export encoder."""
    encoder = MagicMock()
    encoder.encode = AsyncMock(return_value=b"\x89PNG")
    encoder.filename = "mermaid-diagram.png"
    return encoder


@pytest.fixture
def make_session(stub_renderer, stub_ai_checker, mock_encoder):
    """Factory for sessions over stub checkers."""

    def _make(**kwargs) -> EditorSession:
        return EditorSession(
            session_id=kwargs.pop("session_id", uuid.uuid4()),
            renderer=stub_renderer,
            ai_checker=stub_ai_checker,
            encoder=mock_encoder,
            debounce_ms=kwargs.pop("debounce_ms", DEBOUNCE_MS),
            **kwargs,
        )

    return _make


async def final_state(session: EditorSession) -> DisplayState:
    """Read published states until both checks are done."""
    while True:
        state = await asyncio.wait_for(session.next_state(), timeout=1)
        if not state.busy:
            return state


class TestEditorSessionStart:
    """Test suite for initial validation."""

    @pytest.mark.asyncio
    async def test_initial_code_is_example(self, make_session) -> None:
        session = make_session()

        assert session.source == EXAMPLE_CODE
        assert session.debounced == EXAMPLE_CODE

    @pytest.mark.asyncio
    async def test_start_validates_initial_code_without_debounce(
        self, make_session, stub_renderer, simple_svg
    ) -> None:
        session = make_session(debounce_ms=10_000)

        session.start()
        state = await final_state(session)

        assert stub_renderer.calls == [EXAMPLE_CODE]
        assert state.markup == simple_svg
        assert state.error_message is None
        session.close()

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, make_session, stub_renderer) -> None:
        session = make_session()

        session.start()
        session.start()
        await session.coordinator.wait_idle()

        assert stub_renderer.calls == [EXAMPLE_CODE]
        session.close()


class TestEditorSessionEdit:
    """Test suite for debounced edits."""

    @pytest.mark.asyncio
    async def test_burst_of_edits_validates_only_final_text(
        self, make_session, stub_renderer
    ) -> None:
        session = make_session(initial_code="")

        for text in ["g", "gr", "graph", "graph TD"]:
            session.edit(text)
        await final_state(session)

        assert stub_renderer.calls == ["graph TD"]
        assert session.debounced == "graph TD"
        session.close()

    @pytest.mark.asyncio
    async def test_unchanged_text_is_ignored(self, make_session, stub_renderer) -> None:
        session = make_session()

        session.edit(EXAMPLE_CODE)
        await asyncio.sleep(DEBOUNCE_MS / 1000 * 3)

        assert stub_renderer.calls == []
        session.close()

    @pytest.mark.asyncio
    async def test_ai_message_reaches_client_state(
        self, make_session, stub_ai_checker, stub_renderer
    ) -> None:
        stub_renderer.result = RenderResult.error("Parse error on line 1")
        stub_ai_checker.verdict = AiVerdict.invalid("Missing diagram direction")
        session = make_session(initial_code="")

        session.edit("graph")
        state = await final_state(session)

        assert state.error_message == "Missing diagram direction"
        assert state.markup == ""
        session.close()

    @pytest.mark.asyncio
    async def test_clearing_text_publishes_empty_state(self, make_session, stub_renderer) -> None:
        session = make_session()
        session.start()
        await final_state(session)

        session.edit("   ")
        state = await final_state(session)

        assert state.markup == ""
        assert state.error_message is None
        assert stub_renderer.calls == [EXAMPLE_CODE]
        session.close()

    @pytest.mark.asyncio
    async def test_close_drops_pending_edit(self, make_session, stub_renderer) -> None:
        session = make_session()

        session.edit("graph LR")
        session.close()
        await asyncio.sleep(DEBOUNCE_MS / 1000 * 3)

        assert stub_renderer.calls == []


class TestEditorSessionExport:
    """Test suite for EditorSession.export_png."""

    @pytest.mark.asyncio
    async def test_exports_displayed_markup(
        self, make_session, mock_encoder, simple_svg
    ) -> None:
        session = make_session()
        session.start()
        await final_state(session)

        content = await session.export_png()

        assert content == b"\x89PNG"
        mock_encoder.encode.assert_awaited_once_with(simple_svg)
        assert session.export_filename == "mermaid-diagram.png"
        session.close()


class TestEditorSessionExportRefused:
    """Download is refused while an error is displayed."""

    @pytest.mark.asyncio
    async def test_ai_flagged_diagram_is_not_exported(
        self, make_session, stub_ai_checker, mock_encoder, simple_svg
    ) -> None:
        stub_ai_checker.verdict = AiVerdict.invalid("Node B is never closed")
        session = make_session()
        session.start()
        state = await final_state(session)
        assert state.markup == simple_svg

        with pytest.raises(EncodeError) as exc_info:
            await session.export_png()

        assert exc_info.value.title == "Cannot Download"
        mock_encoder.encode.assert_not_called()
        session.close()

    @pytest.mark.asyncio
    async def test_nothing_rendered_is_not_exported(self, make_session, mock_encoder) -> None:
        session = make_session()

        with pytest.raises(EncodeError):
            await session.export_png()

        mock_encoder.encode.assert_not_called()


class TestEditorSessionRegistry:
    """Test suite for EditorSessionRegistry."""

    def test_register_and_get(self, make_session) -> None:
        registry = EditorSessionRegistry()
        session = make_session()

        registry.register(session)

        assert registry.get(session.session_id) is session
        assert session.session_id in registry
        assert len(registry) == 1

    def test_duplicate_register_should_raise(self, make_session) -> None:
        registry = EditorSessionRegistry()
        session_id = uuid.uuid4()
        registry.register(make_session(session_id=session_id))

        with pytest.raises(ValueError):
            registry.register(make_session(session_id=session_id))

    def test_get_unknown_should_raise(self) -> None:
        registry = EditorSessionRegistry()

        with pytest.raises(SessionNotFoundError):
            registry.get(uuid.uuid4())

    def test_remove_closes_session(self) -> None:
        registry = EditorSessionRegistry()
        session = MagicMock()
        session.session_id = uuid.uuid4()
        registry.register(session)

        registry.remove(session.session_id)
        registry.remove(session.session_id)

        session.close.assert_called_once()
        assert len(registry) == 0

    def test_close_all(self) -> None:
        registry = EditorSessionRegistry()
        sessions = []
        for _ in range(3):
            session = MagicMock()
            session.session_id = uuid.uuid4()
            registry.register(session)
            sessions.append(session)

        registry.close_all()

        assert len(registry) == 0
        for session in sessions:
            session.close.assert_called_once()
