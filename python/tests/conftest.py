"""
Pytest configuration and fixtures for lldb-gud-filter tests.
"""
import sys
from pathlib import Path

import pytest

PYTHON_SRC = Path(__file__).resolve().parents[1]
if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))

from lldb_gud.filter import StreamFilter  # noqa: E402


@pytest.fixture
def stream_filter():
    """A fresh filter with the default configuration."""
    return StreamFilter()
