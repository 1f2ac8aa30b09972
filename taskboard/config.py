"""Configuration for the task board client."""
from datetime import datetime
from typing import Optional
import logging
import os

import pytz
from dotenv import load_dotenv

# Load environment variables from a local .env if present
load_dotenv()

logger = logging.getLogger(__name__)

# Base URL of the REST backend that owns the tasks
API_BASE_URL = os.environ.get("TASKBOARD_API_URL", "http://localhost:8000/api")

# Per-request timeout in seconds
try:
    API_TIMEOUT = float(os.environ.get("TASKBOARD_API_TIMEOUT", "10"))
except ValueError:
    API_TIMEOUT = 10.0

# Timezone that defines "today" for due date checks
TIMEZONE_NAME = os.environ.get("TASKBOARD_TIMEZONE", "UTC")

LOG_LEVEL = os.environ.get("TASKBOARD_LOG_LEVEL", "INFO").upper()

# Board API / CORS
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")


def get_timezone(name: Optional[str] = None):
    """Resolve the configured timezone, falling back to UTC for unknown names."""
    name = name or TIMEZONE_NAME
    try:
        return pytz.timezone(name)
    except pytz.exceptions.UnknownTimeZoneError:
        logger.warning(f"Unknown timezone '{name}', falling back to UTC")
        return pytz.utc


def current_time() -> datetime:
    """Current time in the configured timezone."""
    return datetime.now(get_timezone())
