"""
Observability module.

Provides logging configuration and redacting structured-logging helpers.
"""

from estate_portal.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    redact,
    summarize,
)
from estate_portal.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "log_exception_with_context",
    "log_with_context",
    "redact",
    "summarize",
]
