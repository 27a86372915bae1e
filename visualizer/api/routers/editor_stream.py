"""
WebSocket live editor endpoint.

Streams display state updates while the client edits a diagram.

Routes: WS /ws/editor/{session_id}

Dependencies: visualizer.application.services.editor_session
System role: Live editing WebSocket API
"""

import asyncio
import json
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from visualizer.api.deps import (
    get_ai_checker,
    get_export_encoder,
    get_renderer,
    get_session_registry,
    get_settings_dependency,
)
from visualizer.application.services import (
    EditorSession,
    EditorSessionRegistry,
    ExportEncoder,
)
from visualizer.boundary.renderer import RendererAdapter
from visualizer.configs import Settings
from visualizer.core.agentic_system.error_detection_agent import MermaidErrorAgent
from visualizer.models.streaming import (
    ClientEditEvent,
    ClientEventType,
    StreamEvent,
    StreamEventType,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["streaming"])


def error_event(code: str, message: str) -> dict:
    return StreamEvent(
        event=StreamEventType.ERROR,
        data={"code": code, "message": message},
    ).to_dict()


async def _forward_states(websocket: WebSocket, session: EditorSession) -> None:
    """Send every published DisplayState to the client."""
    while True:
        state = await session.next_state()
        await websocket.send_json(
            StreamEvent(event=StreamEventType.STATE, data=state.to_dict()).to_dict()
        )


async def stop_forwarder(forwarder: asyncio.Task, session_id: UUID) -> None:
    """Cancel the state forwarder and collect its outcome.

    A send failure that ended the forwarder early is logged, not raised.
    """
    forwarder.cancel()
    (outcome,) = await asyncio.gather(forwarder, return_exceptions=True)
    if isinstance(outcome, Exception) and not isinstance(outcome, WebSocketDisconnect):
        logger.warning(
            "Editor state forwarder failed",
            extra={"session_id": str(session_id), "error_type": type(outcome).__name__},
        )


@router.websocket("/ws/editor/{session_id}")
async def websocket_editor(
    websocket: WebSocket,
    session_id: UUID,
    registry: EditorSessionRegistry = Depends(get_session_registry),
    renderer: RendererAdapter = Depends(get_renderer),
    ai_checker: MermaidErrorAgent = Depends(get_ai_checker),
    encoder: ExportEncoder = Depends(get_export_encoder),
    settings: Settings = Depends(get_settings_dependency),
) -> None:
    """
    WebSocket endpoint for live diagram editing.

    Client sends:
        {"event": "edit", "data": {"code": "..."}}
        {"event": "ping"}

    Server sends:
        {"event": "connected", "data": {"session_id": "...", "code": "..."}}
        {"event": "state", "data": {"generation": 1, "vectorMarkup": "...",
                                    "errorMessage": null, "rendering": false,
                                    "checking": false}}
        {"event": "pong", "data": {}}
        {"event": "error", "data": {"code": "...", "message": "..."}}

    Args:
        websocket: WebSocket connection
        session_id: Editor session UUID from path
    """
    await websocket.accept()

    session = EditorSession(
        session_id=session_id,
        renderer=renderer,
        ai_checker=ai_checker,
        encoder=encoder,
        debounce_ms=settings.editor.debounce_ms,
    )
    try:
        registry.register(session)
    except ValueError as e:
        logger.warning("Editor session already open", extra={"session_id": str(session_id)})
        await websocket.send_json(error_event("SESSION_IN_USE", str(e)))
        await websocket.close(code=1008)
        return

    logger.info(
        "Editor WebSocket connection established",
        extra={"session_id": str(session_id), "client_host": websocket.client},
    )

    await websocket.send_json(
        StreamEvent(
            event=StreamEventType.CONNECTED,
            data={"session_id": str(session_id), "code": session.source},
        ).to_dict()
    )

    forwarder = asyncio.create_task(_forward_states(websocket, session))
    session.start()

    try:
        while True:
            raw_data = await websocket.receive_text()

            try:
                data = json.loads(raw_data)
            except json.JSONDecodeError as e:
                logger.warning(
                    "Failed to parse JSON",
                    extra={"session_id": str(session_id), "error_msg": str(e)},
                )
                await websocket.send_json(error_event("INVALID_JSON", "Invalid JSON format"))
                continue

            event_type = data.get("event") if isinstance(data, dict) else None

            if event_type == ClientEventType.PING.value:
                await websocket.send_json(
                    StreamEvent(event=StreamEventType.PONG, data={}).to_dict()
                )
                continue

            if event_type == ClientEventType.EDIT.value:
                try:
                    edit = ClientEditEvent.model_validate(data.get("data") or {})
                except ValidationError:
                    await websocket.send_json(error_event("MISSING_CODE", "Code is required"))
                    continue
                session.edit(edit.code)
                continue

            logger.warning(
                "Unknown event type received",
                extra={"session_id": str(session_id), "event_type": str(event_type)},
            )
            await websocket.send_json(
                error_event("UNKNOWN_EVENT", f"Unknown event type: {event_type}")
            )

    except WebSocketDisconnect:
        logger.info(
            "Editor WebSocket client disconnected",
            extra={"session_id": str(session_id)},
        )
    finally:
        registry.remove(session_id)
        await stop_forwarder(forwarder, session_id)
