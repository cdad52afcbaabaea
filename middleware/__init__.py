"""Middleware modules for the application."""
from .request_id import (
    RequestIDMiddleware,
    request_id,
    current_request_id,
    uuid4_request_id,
    header_request_id,
)
from .logging import RequestIDLogFilter, configure_logging, log_requests_middleware

__all__ = [
    "RequestIDMiddleware",
    "request_id",
    "current_request_id",
    "uuid4_request_id",
    "header_request_id",
    "RequestIDLogFilter",
    "configure_logging",
    "log_requests_middleware",
]
