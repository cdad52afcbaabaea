"""Application configuration and environment variables."""
import os
import logging
from dotenv import load_dotenv

load_dotenv()

# Environment and debug settings
ENVIRONMENT = os.getenv("ENVIRONMENT", os.getenv("ENV", "development")).lower()
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# Prevent DEBUG mode in production
if ENVIRONMENT == "production" and DEBUG:
    logging.basicConfig(level=logging.INFO)
    _temp_logger = logging.getLogger(__name__)
    _temp_logger.error("❌ DEBUG mode cannot be enabled in production environment")
    raise ValueError("DEBUG=true is forbidden in production. Set ENVIRONMENT=production and DEBUG=false")

# Logging configuration
LOG_VERBOSITY = os.getenv("LOG_VERBOSITY", "normal").lower()  # "minimal", "normal", "verbose"

# Request ID configuration
REQUEST_ID_HEADER = os.getenv("REQUEST_ID_HEADER", "X-Request-ID").strip()
# Empty value disables echoing the request ID on responses
REQUEST_ID_RESPONSE_HEADER = os.getenv("REQUEST_ID_RESPONSE_HEADER", "X-Request-ID").strip()
REQUEST_ID_MAX_LENGTH = int(os.getenv("REQUEST_ID_MAX_LENGTH", "128"))

# Problem details configuration
PROBLEM_CONTENT_TYPE = "application/problem+json"
PROBLEM_TYPE_BASE_URL = os.getenv("PROBLEM_TYPE_BASE_URL", "").strip().rstrip("/")
