"""Utility functions for the application."""
from .sanitization import sanitize_for_logging, is_safe_request_id
from .problem import encode_problem, send_problem, ProblemResponse

__all__ = [
    "sanitize_for_logging",
    "is_safe_request_id",
    "encode_problem",
    "send_problem",
    "ProblemResponse",
]
