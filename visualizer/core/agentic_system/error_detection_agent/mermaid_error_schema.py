"""
Mermaid error detection schemas.

Defines the structured output requested from the model. Field aliases keep
the JSON wire names (isValid, errors, errorMessage).

Dependencies: pydantic
System role: Agent response schema definitions
"""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_INVALID_MESSAGE = "The AI checker reported invalid Mermaid syntax."


class MermaidErrorInput(BaseModel):
    """Input of the error detection flow."""

    code: str = Field(description="The Mermaid code to analyze.")


class MermaidErrorReport(BaseModel):
    """Structured response from the Mermaid error detection model."""

    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(
        alias="isValid",
        description="Whether the Mermaid code is valid or not.",
    )
    errors: list[str] = Field(
        default_factory=list,
        description="A list of syntax errors found in the code.",
    )
    error_message: str = Field(
        default="",
        alias="errorMessage",
        description="A consolidated error message, or a success message if no errors are found.",
    )

    def consolidated_message(self) -> str:
        """Message to show the user when the code is invalid."""
        if self.error_message.strip():
            return self.error_message.strip()
        joined = "; ".join(e.strip() for e in self.errors if e.strip())
        return joined or DEFAULT_INVALID_MESSAGE
