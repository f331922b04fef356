"""
Configuration settings for the Padaria Products API
"""

import os
import logging
from typing import List, Mapping, Optional

# Configure logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Managed database endpoint and credential
DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_PASSWORD = os.getenv("DATABASE_PASSWORD")
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 1))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 5))

PORT = int(os.getenv("PORT", 3000))

REQUIRED_SETTINGS = ("DATABASE_URL", "DATABASE_PASSWORD")


def missing_settings(env: Optional[Mapping[str, str]] = None) -> List[str]:
    """Return the names of required settings that are absent or blank"""
    env = os.environ if env is None else env
    return [name for name in REQUIRED_SETTINGS if not (env.get(name) or "").strip()]


def parse_origins(raw: str) -> List[str]:
    """Split a comma-separated origin list, dropping blanks"""
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


# Validate required environment variables
_missing = missing_settings()
if _missing:
    logger.error("Database configuration not found. Check that .env defines: " + ", ".join(REQUIRED_SETTINGS))
    raise ValueError(f"Missing required environment variables: {', '.join(_missing)}")

# CORS settings
ALLOWED_ORIGINS = parse_origins(os.getenv("CORS_ORIGINS", "*"))
