# ABOUTME: Pytest hooks and shared fixtures. Loads .env and pins APP_ENV before app/config load.
# ABOUTME: frozen_now gives scheduling and report tests a fixed, timezone-aware clock.

import os
from datetime import datetime, timezone

import pytest
from dotenv import load_dotenv

load_dotenv()

# Keeps 500 responses generic regardless of a developer's local .env.
os.environ["APP_ENV"] = "test"


@pytest.fixture
def frozen_now():
    """Monday 2026-10-19 10:00 UTC."""
    return datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)
