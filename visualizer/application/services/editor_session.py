"""
Live editor session.

Wires one debouncer and one validation coordinator for a connected editor,
and queues every published DisplayState for delivery to the client.

Dependencies: asyncio, visualizer.core.debouncer, validation_coordinator, export_encoder
System role: Per-client pipeline assembly
"""

import asyncio
import logging
from uuid import UUID

from visualizer.application.services.export_encoder import NOTHING_TO_EXPORT, ExportEncoder
from visualizer.application.services.validation_coordinator import (
    AiChecker,
    RenderChecker,
    ValidationCoordinator,
)
from visualizer.core.debouncer import Debouncer
from visualizer.core.exceptions import EncodeError, SessionNotFoundError
from visualizer.models.diagram import DisplayState

logger = logging.getLogger(__name__)

EXAMPLE_CODE = """graph TD
    A[Start] --> B{Is it working?};
    B -- Yes --> C[Awesome!];
    C --> D[End];
    B -- No --> E[Fix it!];
    E --> B;
"""


class EditorSession:
    """
    One client's editing pipeline.

    source text -> Debouncer -> ValidationCoordinator -> state queue.
    """

    def __init__(
        self,
        session_id: UUID,
        renderer: RenderChecker,
        ai_checker: AiChecker,
        encoder: ExportEncoder,
        debounce_ms: int = 750,
        initial_code: str = EXAMPLE_CODE,
    ) -> None:
        """
        Initialize editor session.

        Args:
            session_id: Session identifier
            renderer: Renderer adapter
            ai_checker: AI checker adapter
            encoder: PNG export encoder
            debounce_ms: Quiet period before edited text is validated
            initial_code: Text the editor starts with
        """
        self.session_id = session_id
        self._encoder = encoder
        self._states: asyncio.Queue[DisplayState] = asyncio.Queue()
        self._coordinator = ValidationCoordinator(
            renderer=renderer,
            ai_checker=ai_checker,
            publish=self._states.put_nowait,
        )
        self._debouncer: Debouncer[str] = Debouncer(
            debounce_ms,
            self._coordinator.submit,
            initial=initial_code,
        )
        self._source = initial_code
        self._started = False
        self._closed = False

    @property
    def source(self) -> str:
        """Latest raw text received from the client."""
        return self._source

    @property
    def debounced(self) -> str | None:
        """Latest text that passed the debouncer."""
        return self._debouncer.value

    @property
    def state(self) -> DisplayState:
        return self._coordinator.state

    @property
    def coordinator(self) -> ValidationCoordinator:
        return self._coordinator

    @property
    def export_filename(self) -> str:
        return self._encoder.filename

    def start(self) -> None:
        """Validate the initial text right away (no debounce for the initial value)."""
        if self._started:
            return
        self._started = True
        self._coordinator.submit(self._source)

    def edit(self, code: str) -> None:
        """
        Record new editor text; validation follows after the quiet period.

        Args:
            code: Full current diagram source
        """
        if code == self._source:
            return
        self._source = code
        self._debouncer.observe(code)

    async def next_state(self) -> DisplayState:
        """Wait for the next published DisplayState."""
        return await self._states.get()

    async def export_png(self) -> bytes:
        """
        Encode the currently displayed diagram.

        Download is refused while an error is shown, even when the renderer
        produced markup the AI checker disputes.

        Raises:
            EncodeError: If there is nothing to export or encoding fails
        """
        state = self._coordinator.state
        if not state.can_export:
            raise EncodeError(NOTHING_TO_EXPORT, title="Cannot Download")
        return await self._encoder.encode(state.markup)

    def close(self) -> None:
        """Release the debounce timer and cancel in-flight checks."""
        if self._closed:
            return
        self._closed = True
        self._debouncer.close()
        self._coordinator.close()
        logger.info(f"{__name__}:close - session_id={self.session_id}")


class EditorSessionRegistry:
    """In-memory registry of open editor sessions."""

    def __init__(self) -> None:
        self._sessions: dict[UUID, EditorSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: UUID) -> bool:
        return session_id in self._sessions

    def register(self, session: EditorSession) -> None:
        if session.session_id in self._sessions:
            raise ValueError(f"Editor session already open: {session.session_id}")
        self._sessions[session.session_id] = session

    def get(self, session_id: UUID) -> EditorSession:
        """
        Get an open session.

        Raises:
            SessionNotFoundError: If no session is open under this id
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(str(session_id))
        return session

    def remove(self, session_id: UUID) -> None:
        """Close and forget a session. Unknown ids are ignored."""
        session = self._sessions.pop(session_id, None)
        if session is not None:
            session.close()

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.remove(session_id)
