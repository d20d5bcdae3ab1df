"""Test configuration and fixtures for the library catalog."""

import os

# Keep the default context away from any developer database or log file
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FILE", "")

from tests.fixtures import *  # noqa: E402,F401,F403
