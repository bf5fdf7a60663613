# ABOUTME: Shared app configuration and constants used across API and UI (core package).
# ABOUTME: Reads .env via python-dotenv; malformed values fall back to defaults.

import logging
import os

from dotenv import load_dotenv

load_dotenv()

APP_ENV = os.environ.get("APP_ENV", "production").strip().lower()
DEBUG_ERRORS = APP_ENV == "development"

_DEFAULT_LOG_LEVEL = "INFO"


def _parse_log_level() -> int:
    raw = os.environ.get("LOG_LEVEL", _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return logging.getLevelName(_DEFAULT_LOG_LEVEL)


LOG_LEVEL = _parse_log_level()

_DEFAULT_MAX_BATCH_SIZE = 200


def _parse_max_batch_size() -> int:
    raw = os.environ.get("MAX_BATCH_SIZE", str(_DEFAULT_MAX_BATCH_SIZE))
    try:
        value = int(raw)
    except ValueError:
        return _DEFAULT_MAX_BATCH_SIZE
    return value if value > 0 else _DEFAULT_MAX_BATCH_SIZE


MAX_BATCH_SIZE = _parse_max_batch_size()

# CORS: comma-separated origins; default allows the local web frontend. Set in production.
_raw_cors = os.environ.get("CORS_ORIGINS", "http://localhost:3000")
CORS_ORIGINS = [o.strip() for o in _raw_cors.split(",") if o.strip()] or [
    "http://localhost:3000"
]
