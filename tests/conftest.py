"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Turns console colors off so captured output is plain text.
"""

import os
import signal
import sys

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests
from pathlib import Path

import pytest

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from license_gate import console  # noqa: E402

_TEST_TIMEOUT = int(os.environ.get("PYTEST_TEST_TIMEOUT", "10"))


def _timeout_handler(signum, frame):
    """Test Timeout handler."""
    raise TimeoutError(f"Test exceeded {_TEST_TIMEOUT} seconds timeout")


def pytest_runtest_setup(item):
    """Test Pytest runtest setup."""
    try:
        signal.signal(signal.SIGALRM, _timeout_handler)
        signal.alarm(_TEST_TIMEOUT)
    except (AttributeError, ValueError):
        pass


def pytest_runtest_teardown(item, nextitem):
    """Test Pytest runtest teardown."""
    try:
        signal.alarm(0)
    except AttributeError:
        pass


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    """Run every test with uncolored output and no inherited gate settings."""
    for name in list(os.environ):
        if name.startswith("LICENSE_GATE_"):
            monkeypatch.delenv(name)
    console.configure_console(no_color=True)
    yield
    console.configure_console(no_color=True)
