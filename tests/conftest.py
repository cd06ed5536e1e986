# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must be set before any app module reads settings
os.environ["ENVIRONMENT"] = "testing"
os.environ["API_SECRET"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
