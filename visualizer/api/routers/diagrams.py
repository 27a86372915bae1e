"""
Diagram API endpoints.

Routes:
- GET /diagrams/example - Example diagram a new editor starts with
- POST /diagrams/check - One-shot render + AI check, merged
- POST /diagrams/detect-errors - Raw AI error detection report
- POST /diagrams/export - PNG download of supplied SVG markup

Dependencies: visualizer.application.services, visualizer.core.agentic_system
System role: Diagram validation and export HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from visualizer.api.deps import (
    get_ai_checker,
    get_export_encoder,
    get_validation_coordinator,
)
from visualizer.api.routers.error_handling import handle_diagram_errors
from visualizer.application.services import ExportEncoder, ValidationCoordinator
from visualizer.application.services.editor_session import EXAMPLE_CODE
from visualizer.application.services.export_encoder import EXPORT_MEDIA_TYPE
from visualizer.core.agentic_system.error_detection_agent import (
    MermaidErrorAgent,
    MermaidErrorReport,
)
from visualizer.models.diagram import (
    CheckDiagramRequest,
    DisplayState,
    ExampleDiagramResponse,
    ExportDiagramRequest,
)
from visualizer.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/diagrams", tags=["diagrams"])


def png_download(content: bytes, filename: str) -> Response:
    """Wrap PNG bytes in a response the browser saves as a file."""
    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/example", response_model=ExampleDiagramResponse)
async def get_example() -> ExampleDiagramResponse:
    """Example Mermaid source."""
    return ExampleDiagramResponse(code=EXAMPLE_CODE)


@router.post("/check", response_model=DisplayState)
async def check_diagram(
    request: CheckDiagramRequest,
    coordinator: ValidationCoordinator = Depends(get_validation_coordinator),
) -> DisplayState:
    """
    Render and AI-check a diagram once.

    Both checks run concurrently; the AI message wins when the model flags
    the code, otherwise the renderer's error is returned.
    """
    state = await coordinator.validate(request.code)
    log_with_context(
        logger,
        logging.INFO,
        "Diagram checked",
        code_length=len(request.code),
        has_error=state.error_message is not None,
    )
    return state


@router.post("/detect-errors", response_model=MermaidErrorReport)
@handle_diagram_errors
async def detect_errors(
    request: CheckDiagramRequest,
    ai_checker: MermaidErrorAgent = Depends(get_ai_checker),
) -> MermaidErrorReport:
    """Run only the AI error detection flow and return its report."""
    return await ai_checker.detect_errors(request.code)


@router.post(
    "/export",
    response_class=Response,
    responses={200: {"content": {EXPORT_MEDIA_TYPE: {}}}},
)
@handle_diagram_errors
async def export_diagram(
    request: ExportDiagramRequest,
    encoder: ExportEncoder = Depends(get_export_encoder),
) -> Response:
    """Rasterize SVG markup to a padded PNG download."""
    content = await encoder.encode(request.markup)
    return png_download(content, encoder.filename)
