"""Request logging middleware and request ID aware log records."""
import time
import logging
from fastapi import Request
from config import DEBUG, LOG_VERBOSITY
from middleware.request_id import current_request_id
from utils.sanitization import sanitize_for_logging

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"

# Paths skipped by request logging to reduce noise
QUIET_PATHS = ["/", "/docs", "/openapi.json", "/redoc", "/health"]


class RequestIDLogFilter(logging.Filter):
    """Stamp log records with the request ID of the current request ("-" if none)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id() or "-"
        return True


def get_log_level() -> int:
    """Map DEBUG and LOG_VERBOSITY to a logging level."""
    if LOG_VERBOSITY == "minimal":
        return logging.WARNING
    if DEBUG or LOG_VERBOSITY == "verbose":
        return logging.DEBUG
    return logging.INFO


def configure_logging(level=None):
    """Configure root logging with the request ID in every line."""
    logging.basicConfig(level=level if level is not None else get_log_level(), format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIDLogFilter) for f in handler.filters):
            handler.addFilter(RequestIDLogFilter())


async def log_requests_middleware(request: Request, call_next):
    """Log requests and responses when DEBUG is enabled or verbosity is verbose."""
    if not (DEBUG or LOG_VERBOSITY == "verbose") or request.url.path in QUIET_PATHS:
        return await call_next(request)

    start_time = time.time()
    req_id = sanitize_for_logging(current_request_id() or "-")
    user_agent = request.headers.get("user-agent", "Unknown")
    logger.debug(f"🌐 REQUEST: {request.method} {request.url.path} | Request-ID: {req_id} | User-Agent: {sanitize_for_logging(user_agent, max_length=150)}")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.debug(f"✅ RESPONSE: {response.status_code} | {request.method} {request.url.path} | {process_time:.3f}s | Request-ID: {req_id}")
    return response
