"""
Logging utilities for safe structured logging.

Helpers that turn diagram sources, SVG markup, PNG payloads and domain
exceptions into flat, bounded `extra` fields.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

DEFAULT_MAX_LENGTH = 200


def safe_log_value(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Safely convert any value to a single-line string for logging.

    Multi-line diagram sources are folded onto one line and long strings
    are truncated. Binary payloads are reported by size only.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, (bytes, bytearray)):
            return f"bytes({len(value)})"
        if isinstance(value, str):
            val_str = value.replace("\r", "").replace("\n", "\\n")
        elif isinstance(value, (list, tuple)):
            val_str = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Context dict with arbitrary key-value pairs
    """
    safe_context = {
        key: safe_log_value(val) for key, val in context.items()
    }
    logger.log(level, message, extra=safe_context)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    level: int = logging.ERROR,
    **context,
) -> None:
    """
    Log an exception with its domain details merged into the context.

    The traceback is attached only at ERROR level and above; expected
    failures (an unreachable model, a slow render) log a single line.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        level: Log level
        **context: Additional context dict
    """
    details = getattr(exc, "details", None) or {}
    merged = {**details, **context}
    safe_context = {
        key: safe_log_value(val) for key, val in merged.items()
    }
    safe_context.update({
        "error_type": type(exc).__name__,
        "error_msg": safe_log_value(getattr(exc, "message", None) or str(exc)),
    })
    logger.log(level, message, extra=safe_context, exc_info=level >= logging.ERROR)
