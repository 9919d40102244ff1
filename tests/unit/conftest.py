"""
Unit test fixtures.

Isolates unit tests from environment variables (.env file)
to ensure tests verify actual default values.

License: MIT
"""

import os

import pytest


# Environment variables that affect VoxgraphSettings defaults
CONFIG_ENV_VARS = [
    "LOG_LEVEL",
    "LOG_FORMAT",
    "EXTRACT_INTERIM_RESULTS",
    "RELATIONSHIP_CONFIDENCE",
    "MAX_TEXT_LENGTH",
    "EXPORT_PRETTY_PRINT",
]


@pytest.fixture(autouse=True)
def clean_env_for_unit_tests(monkeypatch, tmp_path):
    """
    Remove config-related environment variables and change working
    directory so no .env file is picked up.
    """
    for var in CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    original_dir = os.getcwd()
    os.chdir(tmp_path)
    yield
    os.chdir(original_dir)
