# File: lifeplanner/core/config_manager.py
"""
Centralized configuration management for the Life Planner calendar.
Loads settings from environment variables and the optional .env file.
"""

import os
import datetime
from pathlib import Path
from typing import List

import pytz
from dotenv import load_dotenv

from lifeplanner.utils.logger import LOGS_DIR, setup_logger

# Load environment variables
load_dotenv()

logger = setup_logger(__name__)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using {default}")
        return default


class Config:
    """Application configuration singleton."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent  # Go up 3 levels from lifeplanner/core/
    LOGS_DIR = LOGS_DIR

    # Persistence API
    API_BASE_URL = os.getenv("PLANNER_API_URL", "http://localhost:5000").rstrip("/")
    API_TOKEN = os.getenv("PLANNER_API_TOKEN")
    USER_ID = os.getenv("PLANNER_USER_ID", "1")
    REQUEST_TIMEOUT = _int_env("REQUEST_TIMEOUT", 15)

    # Application Settings
    TARGET_TIMEZONE = os.getenv("TIMEZONE", "Asia/Seoul")

    # Calendar grid
    MAX_VISIBLE_PER_DAY = 3
    MAX_RECURRING_INSTANCES = 100

    # Muted two-color scheme: events vs. tasks
    EVENT_COLOR = "#64748B"
    TASK_COLOR = "#94A3B8"
    COMPLETED_COLOR = "#6b7280"
    RECURRING_GLYPH = "🔄"

    WEEKDAY_LABELS: List[str] = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

    @classmethod
    def timezone(cls) -> datetime.tzinfo:
        """Return the configured timezone, falling back to UTC."""
        try:
            return pytz.timezone(cls.TARGET_TIMEZONE)
        except pytz.UnknownTimeZoneError:
            logger.warning(f"Unknown timezone '{cls.TARGET_TIMEZONE}', using UTC")
            return pytz.utc

    @classmethod
    def today(cls) -> datetime.date:
        """Current calendar date in the configured timezone."""
        return datetime.datetime.now(cls.timezone()).date()

    @classmethod
    def validate(cls) -> bool:
        """Validate that all required configuration is present."""
        errors = []

        if not cls.API_BASE_URL.startswith(("http://", "https://")):
            errors.append(f"PLANNER_API_URL must be an http(s) URL, got '{cls.API_BASE_URL}'")

        if not cls.USER_ID:
            errors.append("PLANNER_USER_ID not set")

        if cls.TARGET_TIMEZONE not in pytz.all_timezones_set:
            errors.append(f"Unknown TIMEZONE '{cls.TARGET_TIMEZONE}'")

        if cls.REQUEST_TIMEOUT <= 0:
            errors.append("REQUEST_TIMEOUT must be positive")

        if errors:
            for error in errors:
                logger.error(f"Configuration Error: {error}")
            return False

        return True
