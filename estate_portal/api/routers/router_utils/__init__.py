"""
Router utility functions.

Contains helpers shared by router endpoints.
"""

from estate_portal.api.routers.router_utils.errors import (
    portal_exception_handler,
    request_validation_handler,
    status_for,
    validation_error_from,
)

__all__ = [
    "portal_exception_handler",
    "request_validation_handler",
    "status_for",
    "validation_error_from",
]
