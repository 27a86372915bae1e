"""
Streaming event schemas for the live editor WebSocket.

Defines event types and payloads exchanged while a client edits a diagram.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class StreamEventType(str, Enum):
    """Server-to-client event types for the live editor."""

    CONNECTED = "connected"
    STATE = "state"
    PONG = "pong"
    ERROR = "error"


class ClientEventType(str, Enum):
    """Client-to-server event types."""

    EDIT = "edit"
    PING = "ping"


class StreamEvent(BaseModel):
    """
    Base streaming event model.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}


class ClientEditEvent(BaseModel):
    """
    Client edit event payload.

    Attributes:
        code: Full current diagram source (not a delta)
    """

    code: str
