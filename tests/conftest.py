"""Shared pytest setup for the inknote test suite.

Qt painting and cross-thread signal delivery need a QGuiApplication; the
offscreen platform keeps the suite runnable without a display.

Markers:
    integration: Mark test as integration test
"""

import os
import sys
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt5.QtGui import QGuiApplication

# Make the support module importable from every test module
sys.path.insert(0, str(Path(__file__).parent))


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """One GUI application for the whole test session."""
    app = QGuiApplication.instance() or QGuiApplication([])
    yield app
