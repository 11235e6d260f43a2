"""
conftest.py - Shared pytest fixtures for time control tests

This module provides standardized test fixtures for use across all tests.
It includes fixtures for:
- Path setup and Python path configuration
- Configuration management
- Control state and engine instances
- GUI testing support
"""
import os
import sys
import json
import pathlib
import pytest
from datetime import time

# Add the src/python directory to the Python path
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent / "src" / "python"))

# Qt must not try to open a display during tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Imports from project modules (now that path is configured)
from config_manager import ConfigManager
from time_control import TimeControl
from time_control_state import TimeControlState


def fixed_width_measurer(text, font_size):
    """Deterministic text measurer: every character is half the font size wide."""
    return len(text) * font_size * 0.5


# Path and Environment Fixtures
# ----------------------------

@pytest.fixture
def project_paths():
    """Provide standard paths to key project directories."""
    root_dir = pathlib.Path(__file__).parent.parent
    return {
        'root': root_dir,
        'src': root_dir / 'src',
        'python': root_dir / 'src' / 'python',
        'config': root_dir / 'config',
        'tests': root_dir / 'tests'
    }


# Configuration Fixtures
# ---------------------

@pytest.fixture
def test_config_data():
    """Create minimal test configuration data."""
    return {
        "colors": {
            "palette": {
                "bar": "#28e80c",
                "barBackground": "#171717",
                "background": "#0d0d0d",
                "text": "#ffffff"
            },
            "fonts": {
                "primary": "Arial",
                "light": "Arial"
            }
        },
        "strings": {
            "timeControl": {
                "start": "Begin",
                "stop": "End",
                "hourUnit": "h",
                "minuteUnit": "m"
            }
        },
        "ui": {
            "timeControl": {
                "startTime": "08:30",
                "stopTime": "17:00",
                "tickLabelOrientation": "horizontal",
                "borderWidth": 0
            }
        },
        "logging": {
            "level": "DEBUG",
            "file": "logs/test.log",
            "maxBytes": 1024,
            "backupCount": 1,
            "console": False,
            "raiseOnError": False
        }
    }


@pytest.fixture
def test_config_file(tmp_path, test_config_data):
    """Write the test configuration to a temporary file."""
    test_config_data["logging"]["file"] = str(tmp_path / "logs" / "test.log")
    config_file = tmp_path / "test_config.json"
    with open(config_file, 'w') as f:
        json.dump(test_config_data, f)
    return config_file


@pytest.fixture
def test_config_manager(test_config_file):
    """Create a ConfigManager instance with test configuration."""
    return ConfigManager(cfg_path=test_config_file, exit_on_error=False)


# Control Fixtures
# ----------------

@pytest.fixture
def state():
    """A state with both times at midnight and default colors."""
    return TimeControlState(start_time=time(0, 0), stop_time=time(0, 0))


@pytest.fixture
def control(state, test_config_manager):
    """A TimeControl at its preferred 400x505 size with a fixed text measurer."""
    return TimeControl(state=state, measure_text=fixed_width_measurer, cfg=test_config_manager)


# GUI Testing Fixtures
# ------------------

@pytest.fixture(scope="session")
def qt_app():
    """Create a QApplication instance that persists for the test session."""
    try:
        from PyQt6.QtWidgets import QApplication
    except ImportError:
        pytest.skip("PyQt6 not installed, skipping test")

    # Check if an instance already exists
    app = QApplication.instance()
    if app is None:
        # Create a new application with dummy arguments
        app = QApplication([''])

    yield app
