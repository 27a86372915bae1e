"""
Exception hierarchy for the Mermaid visualizer.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class VisualizerException(Exception):
    """Base exception for all visualizer errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DiagramSyntaxError(VisualizerException):
    """Raised when the diagram engine rejects the diagram text."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize diagram syntax error.

        Args:
            message: Engine message, shown to the user verbatim
            line: Line number reported by the engine, if any
            details: Additional context
        """
        details = details or {}
        if line is not None:
            details["line"] = line
        super().__init__(message, details)
        self.line = line


class RendererUnavailableError(VisualizerException):
    """Raised when the diagram engine cannot be run (missing binary, timeout)."""

    pass


class AiIndeterminateError(VisualizerException):
    """Raised when the model call fails or gives no usable answer."""

    pass


class EncodeError(VisualizerException):
    """Raised when the diagram cannot be exported to a raster image."""

    def __init__(
        self,
        message: str,
        title: str = "Download Failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize encode error.

        Args:
            message: Description shown in the client notification
            title: Notification title
            details: Additional context
        """
        super().__init__(message, details)
        self.title = title


class SessionNotFoundError(VisualizerException):
    """Raised when an editor session cannot be found."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Editor session not found: {session_id}", details)
