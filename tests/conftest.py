"""Pytest configuration and fixtures for Hyprland event monitor tests."""

import sys
import tempfile
from pathlib import Path
from typing import Generator, List, Tuple

import pytest

# Add repository root to Python path BEFORE test collection
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))

from hyprland_event_monitor.errors import DecodeError  # noqa: E402
from hyprland_event_monitor.events import HyprlandEvent  # noqa: E402


class RecordingSink:
    """Sink that keeps everything it receives, in order."""

    def __init__(self):
        self.events: List[Tuple[int, HyprlandEvent]] = []
        self.errors: List[Tuple[int, DecodeError]] = []

    def receive_event(self, event, line_number):
        self.events.append((line_number, event))

    def receive_error(self, error, line_number):
        self.errors.append((line_number, error))

    @property
    def received(self) -> int:
        return len(self.events) + len(self.errors)


@pytest.fixture
def recording_sink() -> RecordingSink:
    """Fresh recording sink."""
    return RecordingSink()


@pytest.fixture
def socket_dir() -> Generator[Path, None, None]:
    """Short temporary directory for unix sockets (paths are length-limited)."""
    with tempfile.TemporaryDirectory(prefix="hem-") as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def valid_lines() -> List[str]:
    """Well-formed notification lines, as Hyprland sends them."""
    return [
        "workspace>>2",
        "workspacev2>>3,main",
        "focusedmon>>DP-1,3",
        "activewindow>>firefox,Mozilla Firefox",
        "activewindowv2>>55d3c0a1b2c0",
        "openwindow>>0x123,1,firefox,Example Title",
        "fullscreen>>1",
        "configreloaded>>",
    ]


@pytest.fixture
def malformed_lines() -> List[str]:
    """Lines that must fail to decode without stopping the stream."""
    return [
        "garbage",
        "movewindow>>addressonly",
        "workspacev2>>abc,main",
    ]
