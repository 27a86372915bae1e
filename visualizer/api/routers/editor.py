"""
Live editor HTTP endpoints.

Routes: GET /editor/{session_id}/state, GET /editor/{session_id}/export

Dependencies: visualizer.application.services.editor_session
System role: HTTP access to open editor sessions
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from visualizer.api.deps import get_session_registry
from visualizer.api.routers.diagrams import png_download
from visualizer.api.routers.error_handling import handle_diagram_errors
from visualizer.application.services import EditorSessionRegistry
from visualizer.application.services.export_encoder import EXPORT_MEDIA_TYPE
from visualizer.models.diagram import DisplayState

router = APIRouter(prefix="/editor", tags=["editor"])


@router.get("/{session_id}/state", response_model=DisplayState)
@handle_diagram_errors
async def get_editor_state(
    session_id: UUID,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> DisplayState:
    """Current display state of an open editor session."""
    return registry.get(session_id).state


@router.get(
    "/{session_id}/export",
    response_class=Response,
    responses={200: {"content": {EXPORT_MEDIA_TYPE: {}}}},
)
@handle_diagram_errors
async def export_editor_diagram(
    session_id: UUID,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> Response:
    """PNG download of the diagram currently shown in an editor session."""
    session = registry.get(session_id)
    content = await session.export_png()
    return png_download(content, session.export_filename)
