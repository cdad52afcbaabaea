"""Sanitization utilities for logging and inbound identifiers."""
import re
from config import REQUEST_ID_MAX_LENGTH

_REQUEST_ID_PATTERN = re.compile(r'[A-Za-z0-9._:-]+')


def sanitize_for_logging(data: str, max_length: int = 100) -> str:
    """Sanitize untrusted input before logging to prevent log injection.

    Args:
        data: The input string to sanitize
        max_length: Maximum length to keep (default 100 chars)

    Returns:
        Sanitized string safe for logging
    """
    if not data or not isinstance(data, str):
        return str(data)[:max_length] if data else ""

    if len(data) > max_length:
        data = data[:max_length] + "..."

    # Replace newlines, tabs, and other control chars with spaces
    data = re.sub(r'[\r\n\t\x00-\x1f\x7f-\x9f]', ' ', data)

    # Redact bearer tokens and credentials in query strings
    data = re.sub(r'Bearer\s+\S+', 'Bearer [REDACTED]', data, flags=re.IGNORECASE)
    data = re.sub(r'(api_key|key|token)=[^&\s]+', r'\1=[REDACTED]', data, flags=re.IGNORECASE)

    return re.sub(r'\s+', ' ', data).strip()


def is_safe_request_id(value, max_length: int = REQUEST_ID_MAX_LENGTH) -> bool:
    """Return True if an inbound request ID can be trusted and echoed back.

    Accepted IDs are non-empty, at most ``max_length`` characters, and only use
    letters, digits, '.', '_', ':' and '-'.
    """
    if not value or not isinstance(value, str):
        return False
    if len(value) > max_length:
        return False
    return _REQUEST_ID_PATTERN.fullmatch(value) is not None
