"""Shared fixtures for benchlet tests."""

from io import StringIO

import pytest

from benchlet.utils.logger import Logger


@pytest.fixture(autouse=True)
def log_output():
    """Send benchlet logs to an in-memory stream for every test."""
    output = StringIO()
    Logger.configure(level="DEBUG", output=output, timestamps=False)
    return output
