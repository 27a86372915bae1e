"""
Diagram error handling utilities.

Decorator mapping domain exceptions to HTTPExceptions for the diagram and
editor endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from visualizer.core.exceptions import (
    AiIndeterminateError,
    EncodeError,
    SessionNotFoundError,
)
from visualizer.models.common import ErrorNotification

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_diagram_errors(func: F) -> F:
    """
    Decorator to handle diagram errors and transform them into HTTPExceptions.

    - EncodeError -> 400 with a notification payload (title, description)
    - SessionNotFoundError -> 404
    - AiIndeterminateError -> 503
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except EncodeError as e:
            logger.warning(
                "Diagram export failed",
                extra={"error_title": e.title, "error": e.message},
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=ErrorNotification(title=e.title, description=e.message).model_dump(),
            )

        except SessionNotFoundError as e:
            logger.warning("Editor session not found", extra={"error": e.message})
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=e.message,
            )

        except AiIndeterminateError as e:
            logger.warning("AI error detection unavailable", extra={"error": e.message})
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=e.message,
            )

    return wrapper  # type: ignore[return-value]
