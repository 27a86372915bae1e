"""Service orchestrators."""

from .editor_session import EditorSession, EditorSessionRegistry
from .export_encoder import ExportEncoder
from .validation_coordinator import ValidationCoordinator

__all__ = [
    "EditorSession",
    "EditorSessionRegistry",
    "ExportEncoder",
    "ValidationCoordinator",
]
