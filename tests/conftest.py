"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
Also load .env before setting defaults so real keys are used when present.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))
# Shared fakes (engine_fakes.py) live beside this file
sys.path.append(str(Path(__file__).resolve().parent))

# Load .env first so OPENAI_API_KEY and friends are available for tests
load_dotenv(override=False)

# Ensure required env vars exist for config import in app (fallbacks only)
os.environ.setdefault("OPENAI_API_KEY", "test")
os.environ.setdefault("SCRIPTURE_LOG_LEVEL", "info")

from scripture_engine.services import runtime  # noqa: E402  pylint: disable=wrong-import-position


@pytest.fixture(autouse=True)
def _reset_service_registry():
    """Each test starts without a registered service container."""
    runtime.clear_services()
    yield
    runtime.clear_services()
