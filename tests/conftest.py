"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models.detection import Detection  # noqa: E402


class FakeClock:
    """Manually advanced time source (seconds)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """A controllable clock for cooldown and timestamp tests."""
    return FakeClock()


def box_at(cx, cy, size=20.0, label="ripe", confidence=0.9):
    """Detection whose bounding box is centered on (cx, cy)."""
    half = size / 2
    return Detection.from_ltrb(cx - half, cy - half, cx + half, cy + half, label=label, confidence=confidence)


@pytest.fixture
def make_detection():
    return box_at


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
tracking:
  max_disappeared: 30
  max_distance: 100.0

counting:
  line: 0.5
  cooldown_ms: 1000

log_path: "logs/test.log"
log_level: "INFO"
""")

    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "tracking": {
            "max_disappeared": 30,
            "max_distance": 100.0,
        },
        "counting": {
            "line": 0.5,
            "cooldown_ms": 1000,
        },
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }
