"""Test fixtures for yamactrl tests."""

import json
import os
from typing import Any

import pytest

# Qt widgets need a platform plugin even when nothing is displayed
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from yamactrl.models.status import DeviceStatus  # noqa: E402


def _mock_status_response() -> dict[str, Any]:
    """Return a getStatus body as sent by a real receiver."""
    return {
        "response_code": 0,
        "power": "on",
        "sleep": 0,
        "volume": 20,
        "mute": False,
        "max_volume": 60,
        "input": "hdmi",
        "input_text": "HDMI",
        "distribution_enable": True,
        "sound_program": "movie",
        "surround_3d": False,
        "direct": False,
        "pure_direct": False,
        "enhancer": True,
        "tone_control": {"mode": "manual", "bass": -3, "treble": 5},
        "dialogue_level": 1,
        "subwoofer_volume": 4,
        "extra_bass": False,
        "adaptive_drc": True,
        "link_control": "standard",
        "link_audio_delay": "audio_sync",
        "disable_flags": 0,
        "actual_volume": {"mode": "db", "value": -60.5, "unit": "dB"},
    }


@pytest.fixture
def mock_status_response() -> dict[str, Any]:
    """Return a mock getStatus response dict."""
    return _mock_status_response()


@pytest.fixture
def status_body(mock_status_response: dict[str, Any]) -> bytes:
    """Return the mock getStatus response as raw JSON bytes."""
    return json.dumps(mock_status_response).encode()


@pytest.fixture
def device_status(mock_status_response: dict[str, Any]) -> DeviceStatus:
    """Return the mock response decoded into a DeviceStatus."""
    return DeviceStatus.from_dict(mock_status_response)
