"""
Logging utilities for GraphQL payloads and tracker events.

Summarises request/response payloads so they can be logged without leaking
contact details or tokens and without producing oversized log lines.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

# Keys whose values never reach the logs
SENSITIVE_KEYS = frozenset({
    "password",
    "newPassword",
    "contactEmail",
    "contactPhone",
    "email",
    "idToken",
    "accessToken",
    "refreshToken",
    "signedUrl",
    "uploadUrl",
})


def summarize(value: Any, max_length: int = 200) -> str:
    """
    Render a value as a short, log-safe string.

    Args:
        value: Value to render
        max_length: Maximum length before truncating

    Returns:
        str: Summary (collections are reduced to their size)
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"
    text = str(value)
    if len(text) > max_length:
        return text[:max_length] + f"... (truncated, {len(text)} total)"
    return text


def redact(payload: Any) -> Any:
    """
    Return a copy of a GraphQL payload with sensitive fields masked.

    Args:
        payload: Nested dict/list structure

    Returns:
        Any: Same structure with SENSITIVE_KEYS values replaced by "***"
    """
    if isinstance(payload, dict):
        return {
            key: "***" if key in SENSITIVE_KEYS and val is not None else redact(val)
            for key, val in payload.items()
        }
    if isinstance(payload, list):
        return [redact(item) for item in payload]
    return payload


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with redacted, summarised context passed as ``extra``.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs
    """
    cleaned = redact(context)
    logger.log(level, message, extra={key: summarize(val) for key, val in cleaned.items()})


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with redacted context and the error type/message.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    cleaned = {key: summarize(val) for key, val in redact(context).items()}
    cleaned.update({
        "error_type": type(exc).__name__,
        "error_msg": str(exc),
    })
    logger.exception(message, extra=cleaned)
