"""
Diagram domain models and schemas.

Result variants produced by the renderer and the AI checker, the merged
display state published to clients, and request/response schemas for the
diagram HTTP API.

Dependencies: pydantic
System role: Diagram validation contracts
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RenderStatus(str, Enum):
    """Outcome of a renderer check."""

    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


class RenderResult(BaseModel):
    """Vector markup on success, or the renderer's error message."""

    model_config = ConfigDict(frozen=True)

    status: RenderStatus
    markup: str = ""
    error_message: str | None = None

    @classmethod
    def ok(cls, markup: str) -> "RenderResult":
        return cls(status=RenderStatus.OK, markup=markup)

    @classmethod
    def empty(cls) -> "RenderResult":
        return cls(status=RenderStatus.EMPTY)

    @classmethod
    def error(cls, message: str) -> "RenderResult":
        return cls(status=RenderStatus.ERROR, error_message=message)

    @property
    def failed(self) -> bool:
        return self.status is RenderStatus.ERROR


class VerdictStatus(str, Enum):
    """Outcome of an AI check."""

    VALID = "valid"
    INVALID = "invalid"
    INDETERMINATE = "indeterminate"


class AiVerdict(BaseModel):
    """Model opinion on the diagram text.

    INDETERMINATE means the call itself failed; callers fall back to the
    renderer's verdict.
    """

    model_config = ConfigDict(frozen=True)

    status: VerdictStatus
    message: str | None = None

    @classmethod
    def valid(cls) -> "AiVerdict":
        return cls(status=VerdictStatus.VALID)

    @classmethod
    def invalid(cls, message: str) -> "AiVerdict":
        return cls(status=VerdictStatus.INVALID, message=message)

    @classmethod
    def indeterminate(cls) -> "AiVerdict":
        return cls(status=VerdictStatus.INDETERMINATE)

    @property
    def flagged(self) -> bool:
        return self.status is VerdictStatus.INVALID


class DisplayState(BaseModel):
    """Externally observable result of the latest validation generation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    generation: int = Field(default=0, description="Generation this state belongs to")
    markup: str = Field(
        default="",
        alias="vectorMarkup",
        description="SVG markup of the last successful render",
    )
    error_message: str | None = Field(
        default=None,
        alias="errorMessage",
        description="Single consolidated error shown to the user",
    )
    rendering: bool = Field(default=False, description="Renderer check in flight")
    checking: bool = Field(default=False, description="AI check in flight")

    @classmethod
    def empty(cls, generation: int = 0) -> "DisplayState":
        """State published for empty or whitespace-only text."""
        return cls(generation=generation)

    @property
    def busy(self) -> bool:
        return self.rendering or self.checking

    @property
    def can_export(self) -> bool:
        """Download is offered only for a rendered diagram with no error."""
        return bool(self.markup) and self.error_message is None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary using client field names."""
        return self.model_dump(by_alias=True)


class CheckDiagramRequest(BaseModel):
    """Request schema for a one-shot diagram check."""

    code: str = Field(description="Mermaid diagram source")


class ExportDiagramRequest(BaseModel):
    """Request schema for PNG export of rendered markup."""

    model_config = ConfigDict(populate_by_name=True)

    markup: str = Field(alias="vectorMarkup", description="SVG markup to rasterize")


class ExampleDiagramResponse(BaseModel):
    """Example diagram a new editor starts with."""

    code: str = Field(description="Mermaid diagram source")
