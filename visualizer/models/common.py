"""
Common response models.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, Field


class ErrorNotification(BaseModel):
    """Dismissible error shown by the client as a notification."""

    title: str = Field(description="Notification title")
    description: str = Field(description="Notification body")
