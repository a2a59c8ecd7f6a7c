"""Shared fixtures for mapping tests."""

import json
from pathlib import Path

import pytest

from shim_normalize.config import MappingSettings

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def load_response():
    """Load a provider response document from tests/fixtures."""

    def _load(name: str) -> dict:
        with open(FIXTURES / f"{name}.json") as f:
            return json.load(f)

    return _load


@pytest.fixture
def settings():
    """Settings that log every skipped record at INFO."""
    return MappingSettings(log_skipped_records=True, skip_log_level="INFO")
